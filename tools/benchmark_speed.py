"""
Performance Benchmark
=====================

Measures headless simulation throughput.

Usage:
    python -m tools.benchmark_speed [--ticks N] [--steps S]
"""

from __future__ import annotations

import argparse
import sys
import time

import numpy as np

from fruit_slicer.slice_core.config_loader import load_config
from fruit_slicer.slice_core.env_gym import SliceEnv
from fruit_slicer.slice_core.game import SliceGame


def benchmark_core(num_ticks: int = 10000, seed: int = 42) -> dict:
    """
    Benchmark raw SliceGame.tick() with a sweeping pointer.

    Args:
        num_ticks: Number of ticks to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    config = load_config()
    game = SliceGame(config=config, seed=seed)
    width, height = game.field_size

    start = time.perf_counter()
    restarts = 0
    for i in range(num_ticks):
        # Horizontal zig-zag through the middle of the field, one gesture per 60 ticks
        phase = i % 60
        x = width * phase / 60
        y = height * 0.5
        if phase == 0:
            game.pointer_down(x, y)
        elif phase == 59:
            game.pointer_up(x, y)
        else:
            game.pointer_move(x, y)

        game.tick()
        if game.is_over:
            game.restart()
            restarts += 1

    elapsed = time.perf_counter() - start
    return {
        "mode": "core",
        "num_ticks": num_ticks,
        "restarts": restarts,
        "elapsed_seconds": elapsed,
        "ticks_per_second": num_ticks / elapsed,
        "ms_per_tick": (elapsed * 1000) / num_ticks
    }


def benchmark_env(num_steps: int = 2000, seed: int = 42) -> dict:
    """
    Benchmark SliceEnv.step() with random actions.

    Args:
        num_steps: Number of steps to run.
        seed: Random seed.

    Returns:
        Dict with timing results.
    """
    env = SliceEnv()
    rng = np.random.default_rng(seed)

    obs, _ = env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        action = rng.uniform(0, 1, size=3).astype(np.float32)
        obs, _, terminated, truncated, _ = env.step(action)
        if terminated or truncated:
            obs, _ = env.reset()

    elapsed = time.perf_counter() - start
    env.close()

    return {
        "mode": "env",
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark simulation throughput")
    parser.add_argument("--ticks", type=int, default=10000, help="Ticks for the core benchmark")
    parser.add_argument("--steps", type=int, default=2000, help="Steps for the env benchmark")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    print("=== Core ===")
    core = benchmark_core(args.ticks, args.seed)
    print(f"  {core['ticks_per_second']:.0f} ticks/s ({core['ms_per_tick']:.3f} ms/tick), "
          f"{core['restarts']} restarts")

    print("=== Env ===")
    env = benchmark_env(args.steps, args.seed)
    print(f"  {env['steps_per_second']:.0f} steps/s ({env['ms_per_step']:.3f} ms/step)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
