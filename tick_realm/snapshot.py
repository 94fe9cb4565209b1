"""Versioned, JSON-compatible snapshots of a GameState.

Only authoritative data is written. Rates and the level are rebuilt on
restore. Any shape or invariant problem raises InvalidPersistedState; no
partially restored state is ever returned.
"""
from __future__ import annotations

import copy
import math
from typing import Any

from tick_realm.config import RealmConfig
from tick_realm.farm import ANIMALS
from tick_realm.grid import Grid
from tick_realm.state import GameState, refresh
from tick_realm.stats import BASE_REPUTATION, CharacterStats
from tick_realm.stockpile import Stockpile
from tick_realm.types import BASE_STATS, RESOURCE_KINDS, InvalidPersistedState

SNAPSHOT_VERSION = 1


def snapshot_state(state: GameState) -> dict[str, Any]:
    stats = state.stats
    return {
        "version": SNAPSHOT_VERSION,
        "player_name": state.player_name,
        "grid": state.grid.snapshot(),
        "resources": dict(state.stockpile.slots),
        "character_stats": {
            **stats.base(),
            "available_points": stats.available_points,
            "reputation": stats.reputation,
        },
        "farm_levels": dict(state.farm_levels),
        "recorded_level": state.recorded_level,
        "inventory": copy.deepcopy(state.inventory),
        "equipment": copy.deepcopy(state.equipment),
    }


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPersistedState(f"{what} must be a number, got {value!r}")
    if math.isnan(value) or math.isinf(value) or value < 0:
        raise InvalidPersistedState(f"{what} must be finite and >= 0, got {value!r}")
    return float(value)


def _count(value: Any, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidPersistedState(f"{what} must be a non-negative integer, got {value!r}")
    return value


def restore_state(data: dict[str, Any], config: RealmConfig) -> GameState:
    """Rebuild a GameState from snapshot data. Raises InvalidPersistedState."""
    if not isinstance(data, dict):
        raise InvalidPersistedState(f"snapshot must be a dict, got {type(data).__name__}")
    version = data.get("version")
    if version != SNAPSHOT_VERSION:
        raise InvalidPersistedState(
            f"Unsupported snapshot version {version!r}, expected {SNAPSHOT_VERSION}"
        )
    try:
        grid_data = data["grid"]
        resources = data["resources"]
        stats_data = data["character_stats"]
        farm_data = data.get("farm_levels", {})
        name = data["player_name"]
        inventory = data.get("inventory", [])
        equipment = data.get("equipment", {})
    except KeyError as exc:
        raise InvalidPersistedState(f"snapshot missing {exc}") from exc

    if not isinstance(grid_data, dict):
        raise InvalidPersistedState("grid must be a dict")
    grid = Grid.from_snapshot(grid_data, config.grid_width, config.grid_height)

    if not isinstance(resources, dict) or set(resources) != set(RESOURCE_KINDS):
        raise InvalidPersistedState(f"resources must hold exactly {RESOURCE_KINDS}")
    stockpile = Stockpile(
        slots={kind: _number(resources[kind], f"resources.{kind}") for kind in RESOURCE_KINDS}
    )

    if not isinstance(stats_data, dict):
        raise InvalidPersistedState("character_stats must be a dict")
    try:
        stats = CharacterStats(
            **{key: _count(stats_data[key], key) for key in BASE_STATS},
            available_points=_count(stats_data["available_points"], "available_points"),
            reputation=_count(stats_data.get("reputation", BASE_REPUTATION), "reputation"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidPersistedState(f"malformed character_stats: {exc}") from exc

    if not isinstance(farm_data, dict):
        raise InvalidPersistedState("farm_levels must be a dict")
    farm_levels: dict[str, int] = {}
    for animal_id, level in farm_data.items():
        if animal_id not in ANIMALS:
            raise InvalidPersistedState(f"unknown animal {animal_id!r}")
        farm_levels[animal_id] = _count(level, f"farm_levels.{animal_id}")

    if not isinstance(name, str) or not name.strip() or len(name) > config.max_name_length:
        raise InvalidPersistedState(f"invalid player name {name!r}")
    if not isinstance(inventory, list) or not isinstance(equipment, dict):
        raise InvalidPersistedState("inventory must be a list and equipment a dict")

    state = GameState(
        grid=grid,
        stockpile=stockpile,
        stats=stats,
        farm_levels=farm_levels,
        player_name=name,
        inventory=copy.deepcopy(inventory),
        equipment=copy.deepcopy(equipment),
    )
    refresh(state, config)
    recorded = data.get("recorded_level", state.level.level)
    state.recorded_level = min(_count(recorded, "recorded_level"), state.level.level) or 1
    return state
