"""Tests for the production and progression systems."""
from __future__ import annotations

import math
import random

import pytest
from tick_realm import RealmConfig, TickContext, new_game
from tick_realm.systems import make_production_system, make_progression_system

CFG = RealmConfig(grid_width=9, grid_height=9)


def _ctx(dt: float, tick: int = 1) -> TickContext:
    return TickContext(tick_number=tick, dt=dt, elapsed=dt, random=random.Random(0))


class TestProductionSystem:
    def test_adds_rate_times_dt(self) -> None:
        state = new_game(CFG)
        gold = state.stockpile.slots["gold"]
        make_production_system()(state, _ctx(2.0))
        assert state.stockpile.slots["gold"] == pytest.approx(
            gold + state.rates.total["gold"] * 2.0
        )

    def test_xp_scaled_by_multiplier(self) -> None:
        state = new_game(CFG)
        make_production_system()(state, _ctx(1.0))
        expected = state.rates.total["xp"] * (1 + state.stats.xp_gain_multiplier / 100)
        assert state.stockpile.slots["xp"] == pytest.approx(expected)

    def test_zero_dt_changes_nothing(self) -> None:
        state = new_game(CFG)
        before = dict(state.stockpile.slots)
        make_production_system()(state, _ctx(0.0))
        assert state.stockpile.slots == before

    def test_never_negative(self) -> None:
        state = new_game(CFG)
        state.rates.total["coal"] = -5.0
        make_production_system()(state, _ctx(10.0))
        assert state.stockpile.slots["coal"] == 0.0

    def test_stays_finite(self) -> None:
        state = new_game(CFG)
        state.rates.total["gold"] = math.inf
        make_production_system()(state, _ctx(1.0))
        assert math.isfinite(state.stockpile.slots["gold"])


class TestProgressionSystem:
    def test_no_level_up(self) -> None:
        state = new_game(CFG)
        make_progression_system(CFG)(state, _ctx(1.0))
        assert state.level.level == 1
        assert state.stats.available_points == 0

    def test_grants_points_per_level(self) -> None:
        state = new_game(CFG)
        state.stockpile.slots["xp"] = 1200
        make_progression_system(CFG)(state, _ctx(1.0))
        assert state.level.level == 3
        assert state.recorded_level == 3
        assert state.stats.available_points == 6

    def test_points_granted_once(self) -> None:
        state = new_game(CFG)
        state.stockpile.slots["xp"] = 500
        system = make_progression_system(CFG)
        system(state, _ctx(1.0, 1))
        system(state, _ctx(1.0, 2))
        assert state.stats.available_points == 3

    def test_hooks_fire(self) -> None:
        calls: list[tuple[int, int]] = []
        state = new_game(CFG)
        state.stockpile.slots["xp"] = 500
        hook = lambda s, old, new: calls.append((old, new))  # noqa: E731
        make_progression_system(CFG, [hook])(state, _ctx(1.0))
        assert calls == [(1, 2)]

    def test_custom_points_per_level(self) -> None:
        cfg = RealmConfig(grid_width=9, grid_height=9, stat_points_per_level=5)
        state = new_game(cfg)
        state.stockpile.slots["xp"] = 500
        make_progression_system(cfg)(state, _ctx(1.0))
        assert state.stats.available_points == 5
