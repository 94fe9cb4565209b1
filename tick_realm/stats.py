"""Character stats: allocatable base stats and the values derived from them."""
from __future__ import annotations

from dataclasses import dataclass

from tick_realm.types import BASE_STATS, RESOURCE_KINDS, Rejection

MAX_TILE_COST_DISCOUNT = 25.0
BASE_REPUTATION = 1000


@dataclass
class CharacterStats:
    strength: int = 5
    dexterity: int = 5
    intelligence: int = 5
    vitality: int = 5
    charisma: int = 5
    available_points: int = 0
    reputation: int = BASE_REPUTATION
    # Derived, rebuilt by recompute_derived().
    physical_atk: float = 0.0
    magic_atk: float = 0.0
    hp: float = 0.0
    mp: float = 0.0
    defense: float = 0.0
    magic_def: float = 0.0
    luck: float = 0.0
    crit_chance: float = 0.0
    crit_dmg_multiplier: float = 0.0
    atk_speed_increase: float = 0.0
    xp_gain_multiplier: float = 0.0
    tile_cost_discount: float = 0.0

    def __post_init__(self) -> None:
        for name in BASE_STATS:
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.available_points < 0:
            raise ValueError(f"available_points must be >= 0, got {self.available_points}")
        recompute_derived(self)

    def base(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in BASE_STATS}


def recompute_derived(stats: CharacterStats) -> None:
    """Rebuild every derived field from the five base stats."""
    s, d, i = stats.strength, stats.dexterity, stats.intelligence
    v, c = stats.vitality, stats.charisma
    stats.physical_atk = float(s)
    stats.magic_atk = float(i)
    stats.hp = v * 3 + c * 0.25
    stats.mp = float(i * 2)
    stats.defense = d + s * 0.5 + v * 0.5 + c * 0.25
    stats.magic_def = i + v * 0.5 + c * 0.25
    stats.luck = float(c)
    stats.crit_chance = d * 0.25 + c * 0.5
    stats.crit_dmg_multiplier = 100 + s + d * 0.5 + c * 0.5
    stats.atk_speed_increase = d * 0.25
    stats.xp_gain_multiplier = i * 0.2 + c * 0.25
    stats.tile_cost_discount = min(c * 0.1, MAX_TILE_COST_DISCOUNT)


def allocate(stats: CharacterStats, stat: str) -> Rejection | None:
    """Spend one point on a base stat. Returns None on success."""
    if stat not in BASE_STATS:
        return Rejection.UNKNOWN_STAT
    if stats.available_points <= 0:
        return Rejection.NO_POINTS_AVAILABLE
    setattr(stats, stat, getattr(stats, stat) + 1)
    stats.available_points -= 1
    recompute_derived(stats)
    return None


def grant_points(stats: CharacterStats, points: int) -> None:
    if points < 0:
        raise ValueError(f"points must be >= 0, got {points}")
    stats.available_points += points
    recompute_derived(stats)


# Modifier fraction per point of each base stat.
_STAT_RESOURCE_MODIFIERS: dict[str, dict[str, float]] = {
    "strength": {"stone": 0.025, "coal": 0.025},
    "dexterity": {"wood": 0.025, "food": 0.025},
    "intelligence": {"gold": 0.025, "xp": 0.002},
    "vitality": {"food": 0.025, "wood": 0.025},
    "charisma": {"gold": 0.025, "coal": 0.025, "xp": 0.0025},
}


def stat_resource_modifiers(stats: CharacterStats) -> dict[str, float]:
    """Modifier fraction each resource receives from base stats."""
    modifiers = {name: 0.0 for name in RESOURCE_KINDS}
    for stat, per_point in _STAT_RESOURCE_MODIFIERS.items():
        points = getattr(stats, stat)
        for resource, fraction in per_point.items():
            modifiers[resource] += points * fraction
    return modifiers
