"""Cost and XP curves.

Parcel costs grow exponentially with the number of owned parcels, and the
exponential base itself steps up every ``scaling_increase_per`` parcels, so
the curve accelerates in tiers rather than compounding smoothly. Costs that
leave float range are computed with :mod:`decimal` so they keep growing
instead of overflowing.
"""
from __future__ import annotations

import math
from decimal import Decimal

from tick_realm.config import RealmConfig

_DEFAULT = RealmConfig()


def scaling_factor(owned: int, config: RealmConfig = _DEFAULT) -> float:
    """Exponential base of the parcel cost curve for *owned* parcels."""
    tier = owned // config.scaling_increase_per
    step = tier if tier > 20 else tier / 2
    return config.base_scaling_factor * (1 + config.scaling_increase_amount * step)


def parcel_cost(owned: int, config: RealmConfig = _DEFAULT) -> int:
    """Undiscounted gold cost of the next parcel when *owned* are held."""
    if owned < 0:
        raise ValueError(f"owned must be >= 0, got {owned}")
    factor = scaling_factor(owned, config)
    try:
        return math.floor(config.base_tile_cost * factor**owned)
    except OverflowError:
        return int(Decimal(config.base_tile_cost) * Decimal(factor) ** owned)


def apply_discount(cost: int, discount_percent: float) -> int:
    """``floor(cost * (1 - discount / 100))``."""
    try:
        return math.floor(cost * (1 - discount_percent / 100))
    except OverflowError:
        return int(Decimal(cost) * (1 - Decimal(str(discount_percent)) / 100))


def xp_threshold(level: int, config: RealmConfig = _DEFAULT) -> float:
    """XP needed to advance from *level* to *level + 1*."""
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")
    try:
        return math.floor(config.base_xp_per_level * config.xp_growth_factor ** (level - 1))
    except OverflowError:
        return math.inf


def xp_gain_on_acquire(
    owned: int, xp_gain_multiplier: float, config: RealmConfig = _DEFAULT
) -> float:
    """XP granted for acquiring a parcel while *owned* parcels are held."""
    return (
        config.base_xp_per_tile
        * (1 + owned / 10)
        * (1 + xp_gain_multiplier / 100)
    )
