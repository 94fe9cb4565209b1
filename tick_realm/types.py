"""Shared types, rejection reasons and errors for the realm engine."""
from __future__ import annotations

import random as _random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable

RESOURCE_KINDS: tuple[str, ...] = ("gold", "wood", "stone", "coal", "food", "meat", "xp")

BASE_STATS: tuple[str, ...] = ("strength", "dexterity", "intelligence", "vitality", "charisma")


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float  # seconds, already clamped
    elapsed: float
    random: _random.Random


class Rejection(Enum):
    """Why an action left the state unchanged."""

    INSUFFICIENT_FUNDS = "insufficient_funds"
    NOT_ADJACENT = "not_adjacent"
    ALREADY_OWNED = "already_owned"
    UNIQUE_BIOME_TAKEN = "unique_biome_taken"
    NO_POINTS_AVAILABLE = "no_points_available"
    MAX_LEVEL_REACHED = "max_level_reached"
    OUT_OF_BOUNDS = "out_of_bounds"
    INVALID_BIOME = "invalid_biome"
    SELECTION_NOT_ALLOWED = "selection_not_allowed"
    UNKNOWN_STAT = "unknown_stat"
    UNKNOWN_ANIMAL = "unknown_animal"
    INVALID_AMOUNT = "invalid_amount"
    NOT_TRADEABLE = "not_tradeable"
    INVALID_NAME = "invalid_name"
    NOT_GROUNDS = "not_grounds"
    ALREADY_BUILT = "already_built"
    UNKNOWN_BUILDING = "unknown_building"


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, malformed data)."""


class InvalidPersistedState(SnapshotError):
    """Raised when a snapshot fails shape or invariant validation."""


if TYPE_CHECKING:
    from tick_realm.state import GameState

System = Callable[["GameState", TickContext], None]
LevelUpHook = Callable[["GameState", int, int], None]
