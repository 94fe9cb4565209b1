"""Biome definitions for realm parcels."""
from __future__ import annotations

from dataclasses import dataclass, field

EMPTY = "empty"
CASTLE = "castle"
GROUNDS = "grounds"
PLAINS = "plains"


@dataclass(frozen=True)
class BiomeDef:
    """Immutable biome catalog entry.

    Attributes:
        name: Unique identifier for this biome.
        label: Display name.
        generation: Resource kind -> units per second produced by one parcel.
        unique: At most one owned parcel may carry this biome.
        upgradeable: Parcels of this biome carry a level and an upgrade cost.
        max_level: Highest level for upgradeable biomes (0 when not upgradeable).
        supports_buildings: Owned parcels may be turned into a building.
        description: Free text.
    """

    name: str
    label: str
    generation: dict[str, float] = field(default_factory=dict)
    unique: bool = False
    upgradeable: bool = False
    max_level: int = 0
    supports_buildings: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("BiomeDef name must be non-empty")
        if self.upgradeable and self.max_level < 1:
            raise ValueError(f"upgradeable biome {self.name!r} needs max_level >= 1")


BIOMES: dict[str, BiomeDef] = {
    b.name: b
    for b in (
        BiomeDef(
            name=EMPTY,
            label="Empty",
            description="Empty land, waiting to be claimed",
        ),
        BiomeDef(
            name=CASTLE,
            label="Castle",
            generation={"gold": 0.2, "wood": 0.1, "stone": 0.1, "food": 0.1, "xp": 1.0},
            unique=True,
            upgradeable=True,
            max_level=10,
            description="Your castle generates resources over time",
        ),
        BiomeDef(
            name=GROUNDS,
            label="Grounds",
            generation={"xp": 0.15},
            supports_buildings=True,
            description="Allow you to build structures",
        ),
        BiomeDef(
            name="forest",
            label="Forest",
            generation={"gold": 0.1, "wood": 0.3},
            description="Forests provide wood and gold",
        ),
        BiomeDef(
            name=PLAINS,
            label="Plains",
            generation={"gold": 0.1, "food": 0.3},
            description="Plains provide food and gold",
        ),
        BiomeDef(
            name="hills",
            label="Hills",
            generation={"gold": 0.05, "stone": 0.3, "coal": 0.2},
            description="Hills provide stone and coal",
        ),
        BiomeDef(
            name="swamp",
            label="Swamp",
            generation={"food": 0.1, "wood": 0.2},
            description="Swamps provide food and wood",
        ),
        BiomeDef(
            name="tundra",
            label="Tundra",
            generation={"gold": 0.1, "coal": 0.35},
            description="Tundras provide gold and coal",
        ),
        BiomeDef(
            name="lake",
            label="Lake",
            generation={"gold": 0.05, "food": 0.25},
            description="Lakes provide gold and food",
        ),
    )
}


def get_biome(name: str) -> BiomeDef:
    """Look up a biome. Raises KeyError if not defined."""
    if name not in BIOMES:
        raise KeyError(name)
    return BIOMES[name]


def is_biome(name: str) -> bool:
    return name in BIOMES
