"""System factories run by the engine on every tick, in order."""
from __future__ import annotations

from typing import Callable, Sequence

import structlog

from tick_realm.config import RealmConfig
from tick_realm.state import GameState, refresh_level, refresh_rates
from tick_realm.stats import grant_points
from tick_realm.stockpile import StockpileHelper
from tick_realm.types import RESOURCE_KINDS, LevelUpHook, TickContext

logger = structlog.get_logger()


def make_production_system() -> Callable[[GameState, TickContext], None]:
    """Return a system that adds ``total_rate * dt`` of every resource.

    XP is additionally scaled by the character's XP gain multiplier.
    """

    def production_system(state: GameState, ctx: TickContext) -> None:
        if ctx.dt <= 0:
            return
        slots = state.stockpile.slots
        xp_scale = 1 + state.stats.xp_gain_multiplier / 100
        for name in RESOURCE_KINDS:
            delta = state.rates.total[name] * ctx.dt
            if name == "xp":
                delta *= xp_scale
            slots[name] = max(0.0, slots[name] + delta)
        StockpileHelper.sanitize(state.stockpile)

    return production_system


def make_progression_system(
    config: RealmConfig,
    on_level_up: Sequence[LevelUpHook] = (),
) -> Callable[[GameState, TickContext], None]:
    """Return a system that recomputes the level and grants stat points.

    ``on_level_up(state, old_level, new_level)`` fires after points are granted.
    """

    def progression_system(state: GameState, ctx: TickContext) -> None:
        refresh_level(state, config)
        old_level = state.recorded_level
        new_level = state.level.level
        if new_level <= old_level:
            return
        gained = new_level - old_level
        grant_points(state.stats, config.stat_points_per_level * gained)
        state.recorded_level = new_level
        refresh_rates(state, config)
        logger.info(
            "level_up",
            tick=ctx.tick_number,
            old_level=old_level,
            new_level=new_level,
            points=state.stats.available_points,
        )
        for hook in on_level_up:
            hook(state, old_level, new_level)

    return progression_system
