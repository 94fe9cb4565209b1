"""Levels derived from cumulative experience."""
from __future__ import annotations

import math
from dataclasses import dataclass

from tick_realm.config import RealmConfig
from tick_realm.scaling import xp_threshold

_DEFAULT = RealmConfig()


@dataclass(frozen=True)
class LevelState:
    level: int = 1
    progress: float = 0.0


def level_from_xp(xp: float, config: RealmConfig = _DEFAULT) -> LevelState:
    """Walk threshold tiers from level 1 until *xp* no longer covers the next one."""
    if math.isnan(xp) or xp <= 0:
        return LevelState(1, 0.0)
    level = 1
    remaining = xp
    needed = xp_threshold(level, config)
    while remaining >= needed:
        remaining -= needed
        level += 1
        needed = xp_threshold(level, config)
    progress = remaining / needed if needed > 0 else 0.0
    return LevelState(level, min(progress, math.nextafter(1.0, 0.0)))


def xp_for_level(level: int, config: RealmConfig = _DEFAULT) -> float:
    """Cumulative XP at which *level* is reached."""
    return sum(xp_threshold(n, config) for n in range(1, level))


def seconds_until_level_up(
    xp: float, xp_rate: float, config: RealmConfig = _DEFAULT
) -> float:
    """Time to the next level at a constant *xp_rate*; inf when not growing."""
    if xp_rate <= 0:
        return math.inf
    state = level_from_xp(xp, config)
    remaining = xp_for_level(state.level + 1, config) - max(xp, 0.0)
    return max(remaining, 0.0) / xp_rate
