"""Resource rate engine: how fast each resource grows right now.

``compute_rates`` is a pure function of the grid (ownership, biomes, castle
level, buildings), the character stats and the farm levels. Callers replace
their cached :class:`ResourceRates` with its result after every mutation of
those inputs; rates are never patched in place.

Per resource::

    base      = sum of owned parcel generation (castle scaled by level,
                other parcels by same-biome adjacency) + farm meat
    modifiers = stat bonuses + plains meat bonus + building bonuses
    total     = base * (1 + modifiers)
"""
from __future__ import annotations

from dataclasses import dataclass, field

from tick_realm.biomes import CASTLE, PLAINS, get_biome
from tick_realm.catalog import BUILDINGS
from tick_realm.config import RealmConfig
from tick_realm.farm import total_meat_production
from tick_realm.grid import Grid
from tick_realm.stats import CharacterStats, stat_resource_modifiers
from tick_realm.types import RESOURCE_KINDS

_DEFAULT = RealmConfig()


def _zeros() -> dict[str, float]:
    return {name: 0.0 for name in RESOURCE_KINDS}


@dataclass(frozen=True)
class ResourceRates:
    """Per-second rates, split into base, modifier fraction and total."""

    base: dict[str, float] = field(default_factory=_zeros)
    modifiers: dict[str, float] = field(default_factory=_zeros)
    total: dict[str, float] = field(default_factory=_zeros)


def base_rates(grid: Grid, config: RealmConfig = _DEFAULT) -> dict[str, float]:
    """Generation summed over owned parcels, before modifiers."""
    base = _zeros()
    for parcel in grid.owned_parcels():
        defn = get_biome(parcel.biome)
        if not defn.generation:
            continue
        if parcel.biome == CASTLE:
            level = parcel.level or 1
            multiplier = config.castle_level_multiplier ** (level - 1)
            for resource, rate in defn.generation.items():
                base[resource] += rate * multiplier
            continue
        neighbours = grid.same_biome_neighbours(parcel.x, parcel.y)
        adjacency = 1 + config.adjacency_bonus * neighbours
        for resource, rate in defn.generation.items():
            base[resource] += (rate * adjacency) if rate > 0 else rate
    return base


def building_modifiers(grid: Grid) -> dict[str, float]:
    modifiers = _zeros()
    for parcel in grid.owned_parcels():
        if parcel.building is None:
            continue
        for resource, fraction in BUILDINGS[parcel.building].modifiers.items():
            modifiers[resource] += fraction
    return modifiers


def compute_rates(
    grid: Grid,
    stats: CharacterStats,
    farm_levels: dict[str, int] | None = None,
    config: RealmConfig = _DEFAULT,
) -> ResourceRates:
    base = base_rates(grid, config)
    if farm_levels:
        base["meat"] += total_meat_production(farm_levels)

    modifiers = stat_resource_modifiers(stats)
    modifiers["meat"] += grid.count_biome(PLAINS) * config.plains_meat_bonus
    for resource, fraction in building_modifiers(grid).items():
        modifiers[resource] += fraction

    total = {name: base[name] * (1 + modifiers[name]) for name in RESOURCE_KINDS}
    return ResourceRates(base=base, modifiers=modifiers, total=total)
