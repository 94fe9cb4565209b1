"""RealmEngine - tick loop, player actions and snapshot lifecycle."""
from __future__ import annotations

import copy
import os
import random
from typing import Any

import structlog

from tick_realm import actions
from tick_realm.clock import Clock
from tick_realm.config import RealmConfig
from tick_realm.grid import Grid
from tick_realm.progression import LevelState, seconds_until_level_up
from tick_realm.rates import ResourceRates
from tick_realm.snapshot import restore_state, snapshot_state
from tick_realm.state import GameState, new_game, refresh
from tick_realm.stats import CharacterStats
from tick_realm.systems import make_production_system, make_progression_system
from tick_realm.types import InvalidPersistedState, LevelUpHook, Rejection, SnapshotError, System

logger = structlog.get_logger()


class RealmEngine:
    """Owns one game session: its state, rng and clock.

    The host drives :meth:`tick` from a timer and calls the action methods
    from its event loop; calls must not interleave. Actions return a
    success flag and record the reason of the last failure in
    :attr:`last_rejection`.
    """

    def __init__(
        self,
        config: RealmConfig | None = None,
        seed: int | None = None,
        state: GameState | None = None,
    ) -> None:
        self._config = config if config is not None else RealmConfig()
        self._clock = Clock(self._config.max_step_ms)
        if state is None:
            state = new_game(self._config)
        else:
            grid = state.grid
            if (grid.width, grid.height) != (self._config.grid_width, self._config.grid_height):
                raise ValueError(
                    f"state grid is {grid.width}x{grid.height}, config expects "
                    f"{self._config.grid_width}x{self._config.grid_height}"
                )
            refresh(state, self._config)
        self._state = state
        self._level_up_hooks: list[LevelUpHook] = []
        self._systems: list[System] = [
            make_production_system(),
            make_progression_system(self._config, self._level_up_hooks),
        ]
        self.last_rejection: Rejection | None = None

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

    # -- Read-only views --
    # Mutable parts of the state are returned as copies.

    @property
    def config(self) -> RealmConfig:
        return self._config

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def grid(self) -> Grid:
        return copy.deepcopy(self._state.grid)

    @property
    def resources(self) -> dict[str, float]:
        return dict(self._state.stockpile.slots)

    @property
    def resource_rates(self) -> ResourceRates:
        return copy.deepcopy(self._state.rates)

    @property
    def level(self) -> LevelState:
        return self._state.level

    @property
    def character_stats(self) -> CharacterStats:
        return copy.deepcopy(self._state.stats)

    @property
    def farm_levels(self) -> dict[str, int]:
        return dict(self._state.farm_levels)

    @property
    def player_name(self) -> str:
        return self._state.player_name

    def parcel_cost(self) -> int:
        return actions.current_parcel_cost(self._state, self._config)

    def is_selection_turn(self) -> bool:
        return actions.is_selection_turn(self._state.grid, self._config)

    def selectable_biomes(self) -> list[str]:
        return actions.selectable_biomes(self._state.grid)

    def seconds_until_level_up(self) -> float:
        xp_rate = self._state.rates.total["xp"] * (
            1 + self._state.stats.xp_gain_multiplier / 100
        )
        return seconds_until_level_up(self._state.stockpile.slots["xp"], xp_rate, self._config)

    # -- Systems and hooks --

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_level_up(self, hook: LevelUpHook) -> None:
        self._level_up_hooks.append(hook)

    # -- Simulation --

    def tick(self, dt_ms: float) -> None:
        ctx = self._clock.advance(dt_ms, self._rng)
        for system in self._systems:
            system(self._state, ctx)

    # -- Actions --

    def _done(self, rejection: Rejection | None) -> bool:
        self.last_rejection = rejection
        return rejection is None

    def acquire_parcel(self, x: int, y: int, biome: str | None = None) -> bool:
        return self._done(
            actions.acquire_parcel(self._state, x, y, biome, self._rng, self._config)
        )

    def upgrade_castle(self) -> bool:
        return self._done(actions.upgrade_castle(self._state, self._config))

    def allocate_stat_point(self, stat: str) -> bool:
        return self._done(actions.allocate_stat_point(self._state, stat, self._config))

    def sell_resources(self, kind: str, amount: float) -> float:
        gold, rejection = actions.sell_resources(self._state, kind, amount)
        self._done(rejection)
        return gold

    def buy_resources(self, kind: str, amount: float) -> bool:
        return self._done(actions.buy_resources(self._state, kind, amount, self._config))

    def purchase_or_upgrade_animal(self, animal_id: str) -> bool:
        return self._done(
            actions.purchase_or_upgrade_animal(self._state, animal_id, self._config)
        )

    def build_on_grounds(self, x: int, y: int, building: str) -> bool:
        return self._done(actions.build_on_grounds(self._state, x, y, building, self._config))

    def set_player_name(self, name: str) -> bool:
        return self._done(actions.set_player_name(self._state, name, self._config))

    def grant_resources(self, amounts: dict[str, float]) -> bool:
        return self._done(actions.grant_resources(self._state, amounts, self._config))

    def reset(self) -> None:
        """Start over with a fresh game; rng and hooks are kept."""
        self._state = new_game(self._config)
        self._clock.reset()
        self.last_rejection = None
        logger.info("game_reset")

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        data = snapshot_state(self._state)
        data["seed"] = self._seed
        data["rng_state"] = _serialize_rng_state(self._rng.getstate())
        data["tick_number"] = self._clock.tick_number
        data["elapsed"] = self._clock.elapsed
        return data

    def restore(self, data: dict[str, Any]) -> None:
        """Replace the session with *data*. Raises InvalidPersistedState."""
        state = restore_state(data, self._config)
        try:
            seed = int(data["seed"])
            rng_state = _deserialize_rng_state(data["rng_state"])
            tick_number = int(data.get("tick_number", 0))
            elapsed = float(data.get("elapsed", 0.0))
            rng = random.Random()
            rng.setstate(rng_state)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidPersistedState(f"malformed engine data: {exc}") from exc

        self._state = state
        self._seed = seed
        self._rng = rng
        self._clock.reset(tick_number, elapsed)
        self.last_rejection = None

    def load(self, data: dict[str, Any]) -> bool:
        """Restore *data*, or reinitialize when it is invalid. Returns True if restored."""
        try:
            self.restore(data)
        except SnapshotError as exc:
            logger.warning("snapshot_invalid", error=str(exc))
            self.reset()
            return False
        return True


def _serialize_rng_state(state: tuple[int, tuple[int, ...], float | None]) -> list[Any]:
    """Convert Random.getstate() tuple to JSON-compatible list."""
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[int, tuple[int, ...], float | None]:
    """Convert JSON list back to Random.setstate() tuple."""
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
