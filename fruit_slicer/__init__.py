"""
Fruit Slicer
============

Arcade game in which falling fruits are sliced with pointer gestures while
bombs are avoided, under a finite number of lives.

The simulation core lives in fruit_slicer.slice_core and is host-agnostic:
a host forwards pointer/touch input and calls SliceGame.tick() once per
frame. All tunable parameters are in game_config.yaml.
"""
