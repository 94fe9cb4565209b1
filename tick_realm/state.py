"""GameState - the one explicit container every entry point reads and writes."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tick_realm.config import RealmConfig
from tick_realm.grid import Grid
from tick_realm.progression import LevelState, level_from_xp
from tick_realm.rates import ResourceRates, compute_rates
from tick_realm.stats import CharacterStats
from tick_realm.stockpile import Stockpile

DEFAULT_PLAYER_NAME = "Explorer"


@dataclass
class GameState:
    """Authoritative game data plus two derived caches.

    ``rates`` and ``level`` are caches: rebuild them with :func:`refresh`
    after changing the grid, stats, farm levels or XP. ``recorded_level`` is
    the level for which stat points have already been granted.
    ``inventory`` and ``equipment`` are opaque to the engine and only
    carried through snapshots.
    """

    grid: Grid
    stockpile: Stockpile = field(default_factory=Stockpile)
    stats: CharacterStats = field(default_factory=CharacterStats)
    farm_levels: dict[str, int] = field(default_factory=dict)
    player_name: str = DEFAULT_PLAYER_NAME
    inventory: list[dict[str, Any]] = field(default_factory=list)
    equipment: dict[str, dict[str, Any]] = field(default_factory=dict)
    rates: ResourceRates = field(default_factory=ResourceRates)
    level: LevelState = field(default_factory=LevelState)
    recorded_level: int = 1


def new_game(config: RealmConfig | None = None) -> GameState:
    config = config if config is not None else RealmConfig()
    state = GameState(grid=Grid.create(config.grid_width, config.grid_height))
    state.stockpile.slots["gold"] = config.starting_gold
    refresh(state, config)
    return state


def refresh_rates(state: GameState, config: RealmConfig) -> None:
    state.rates = compute_rates(state.grid, state.stats, state.farm_levels, config)


def refresh_level(state: GameState, config: RealmConfig) -> None:
    state.level = level_from_xp(state.stockpile.slots["xp"], config)


def refresh(state: GameState, config: RealmConfig) -> None:
    """Rebuild both derived caches."""
    refresh_rates(state, config)
    refresh_level(state, config)
