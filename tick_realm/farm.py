"""Farm animals: a meat production stream bought with food."""
from __future__ import annotations

import math
from dataclasses import dataclass

from tick_realm.stockpile import Stockpile, StockpileHelper
from tick_realm.types import Rejection


@dataclass(frozen=True)
class AnimalDef:
    """Immutable farm animal definition.

    Attributes:
        id: Unique identifier, the key in farm levels.
        name: Display name.
        base_cost: Food cost of the first purchase.
        cost_scaling: Cost multiplier per owned level.
        base_production: Meat per second at level 1.
        production_scaling: Production multiplier per level above 1.
    """

    id: str
    name: str
    base_cost: float
    cost_scaling: float
    base_production: float
    production_scaling: float

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("AnimalDef id must be non-empty")
        if self.cost_scaling < 1 or self.production_scaling < 1:
            raise ValueError(f"scaling factors of {self.id!r} must be >= 1")


ANIMALS: dict[str, AnimalDef] = {
    a.id: a
    for a in (
        AnimalDef("chicken", "Chicken", 10_000, 1.5, 0.05, 1.2),
        AnimalDef("deer", "Deer", 50_000, 1.6, 0.2, 1.25),
        AnimalDef("pig", "Pig", 200_000, 1.7, 0.5, 1.3),
        AnimalDef("cow", "Cow", 1_000_000, 1.8, 1.5, 1.4),
    )
}


def animal_cost(animal: AnimalDef, level: int) -> int:
    """Food needed to go from *level* to *level + 1*."""
    return math.floor(animal.base_cost * animal.cost_scaling**level)


def animal_production(animal: AnimalDef, level: int) -> float:
    """Meat per second of one animal at *level* (0 when not owned)."""
    if level <= 0:
        return 0.0
    return animal.base_production * animal.production_scaling ** (level - 1)


def total_meat_production(farm_levels: dict[str, int]) -> float:
    total = 0.0
    for animal_id, animal in ANIMALS.items():
        total += animal_production(animal, farm_levels.get(animal_id, 0))
    return total


def purchase_or_upgrade(
    farm_levels: dict[str, int], stockpile: Stockpile, animal_id: str
) -> Rejection | None:
    """Pay food for the next level of *animal_id*. Returns None on success."""
    animal = ANIMALS.get(animal_id)
    if animal is None:
        return Rejection.UNKNOWN_ANIMAL
    level = farm_levels.get(animal_id, 0)
    if not StockpileHelper.pay(stockpile, {"food": animal_cost(animal, level)}):
        return Rejection.INSUFFICIENT_FUNDS
    farm_levels[animal_id] = level + 1
    return None
