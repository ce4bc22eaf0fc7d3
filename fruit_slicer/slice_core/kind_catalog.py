"""
Kind Catalog
============

Closed enumeration of entity kinds and the exhaustive lookup table that maps
each kind to its glyph and colors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Optional

from fruit_slicer.slice_core.config_loader import (
    GameConfig,
    KindConfig,
    get_config
)


class EntityKind(Enum):
    """Every kind of collectible that can be spawned."""
    APPLE = "apple"
    ORANGE = "orange"
    WATERMELON = "watermelon"
    GRAPES = "grapes"
    STRAWBERRY = "strawberry"
    PEAR = "pear"
    BANANA = "banana"
    BOMB = "bomb"

    @property
    def is_bomb(self) -> bool:
        return self is EntityKind.BOMB


FRUIT_KINDS: Tuple[EntityKind, ...] = tuple(k for k in EntityKind if not k.is_bomb)


@dataclass(frozen=True)
class KindType:
    """
    Runtime representation of an entity kind.

    Wraps KindConfig with the enum member it describes.
    """
    kind: EntityKind
    config: KindConfig

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def glyph(self) -> str:
        return self.config.glyph

    @property
    def color_juice(self) -> Tuple[int, int, int]:
        return self.config.color_juice

    @property
    def color_solid(self) -> Tuple[int, int, int]:
        return self.config.color_solid

    @property
    def is_bomb(self) -> bool:
        return self.kind.is_bomb

    def __repr__(self) -> str:
        return f"KindType({self.name} {self.glyph})"


class KindCatalog:
    """
    Lookup table from EntityKind to its visual configuration.

    Construction fails if any kind lacks an entry, so lookups never miss.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._types: Dict[EntityKind, KindType] = {}
        for kind_config in config.kinds:
            try:
                kind = EntityKind(kind_config.name)
            except ValueError:
                raise ValueError(f"Unknown kind in config: {kind_config.name}") from None
            self._types[kind] = KindType(kind, kind_config)

        missing = [k.value for k in EntityKind if k not in self._types]
        if missing:
            raise ValueError(f"Kinds missing from config: {missing}")

    def __len__(self) -> int:
        return len(self._types)

    def __getitem__(self, kind: EntityKind) -> KindType:
        return self._types[kind]

    def __iter__(self):
        return iter(self._types[k] for k in EntityKind)

    @property
    def fruit_kinds(self) -> Tuple[EntityKind, ...]:
        """Kinds that score when sliced, in declaration order."""
        return FRUIT_KINDS

    def color_juice(self, kind: EntityKind) -> Tuple[int, int, int]:
        """Juice color for a kind."""
        return self._types[kind].color_juice

    def color_solid(self, kind: EntityKind) -> Tuple[int, int, int]:
        """Body color for a kind (used by shape-only renderers)."""
        return self._types[kind].color_solid

    def glyph(self, kind: EntityKind) -> str:
        """Text glyph drawn for a kind."""
        return self._types[kind].glyph

    def index_of(self, kind: EntityKind) -> int:
        """Stable integer id of a kind (observation encoding)."""
        return list(EntityKind).index(kind)


# Module-level singleton
_cached_catalog: Optional[KindCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> KindCatalog:
    """
    Get the kind catalog singleton.

    Args:
        config: Optional config to use. If None, uses cached or default config.

    Returns:
        KindCatalog instance.
    """
    global _cached_catalog
    if _cached_catalog is None or config is not None:
        _cached_catalog = KindCatalog(config)
    return _cached_catalog
