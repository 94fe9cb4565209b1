"""Static tables: castle upgrades, merchant prices and grounds buildings."""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_realm.types import RESOURCE_KINDS

CASTLE_UPGRADE_COSTS: tuple[dict[str, float], ...] = (
    {"gold": 5_000, "wood": 500, "stone": 500},
    {"gold": 25_000, "wood": 2_500, "stone": 2_500},
    {"gold": 100_000, "wood": 10_000, "stone": 10_000},
    {"gold": 500_000, "wood": 50_000, "stone": 50_000},
    {"gold": 2_500_000, "wood": 250_000, "stone": 250_000},
    {"gold": 10_000_000, "wood": 1_000_000, "stone": 1_000_000},
    {"gold": 50_000_000, "wood": 5_000_000, "stone": 5_000_000},
    {"gold": 250_000_000, "wood": 25_000_000, "stone": 25_000_000},
    {"gold": 1_000_000_000, "wood": 100_000_000, "stone": 100_000_000},
)

# Gold paid per unit sold. Gold and xp are not tradeable.
MERCHANT_PRICES: dict[str, float] = {
    "wood": 0.75,
    "stone": 0.75,
    "coal": 1.25,
    "food": 0.5,
    "meat": 3.0,
}


def castle_upgrade_cost(level: int) -> dict[str, float] | None:
    """Cost to go from *level* to *level + 1*, or None at the top."""
    if level < 1 or level > len(CASTLE_UPGRADE_COSTS):
        return None
    return dict(CASTLE_UPGRADE_COSTS[level - 1])


@dataclass(frozen=True)
class BuildingDef:
    """A structure that can be raised on an owned grounds parcel.

    Attributes:
        name: Unique identifier.
        label: Display name.
        cost: Resources consumed when built.
        modifiers: Resource kind -> modifier fraction added to the realm total.
    """

    name: str
    label: str
    cost: dict[str, float] = field(default_factory=dict)
    modifiers: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("BuildingDef name must be non-empty")


BUILDINGS: dict[str, BuildingDef] = {
    b.name: b
    for b in (
        BuildingDef("farm", "Farm", {"gold": 1_000, "wood": 200}, {"food": 0.2}),
        BuildingDef(
            "mine", "Mine", {"gold": 1_500, "wood": 300}, {"stone": 0.2, "coal": 0.2}
        ),
        BuildingDef("lumbermill", "Lumber Mill", {"gold": 1_000, "stone": 200}, {"wood": 0.2}),
        BuildingDef("market", "Market", {"gold": 2_000, "wood": 250, "stone": 250}, {"gold": 0.2}),
        BuildingDef(
            "blacksmith",
            "Blacksmith",
            {"gold": 3_000, "stone": 500, "coal": 250},
            {k: 0.1 for k in RESOURCE_KINDS},
        ),
        BuildingDef("workshop", "Workshop", {"gold": 2_500, "wood": 400}, {"xp": 0.15}),
    )
}
