"""Tests for character stats, derived values and stat point allocation."""
from __future__ import annotations

import pytest
from tick_realm import CharacterStats, Rejection
from tick_realm.stats import allocate, grant_points, recompute_derived, stat_resource_modifiers


class TestDerived:
    def test_defaults(self) -> None:
        stats = CharacterStats()
        assert stats.base() == {
            "strength": 5,
            "dexterity": 5,
            "intelligence": 5,
            "vitality": 5,
            "charisma": 5,
        }
        assert stats.available_points == 0
        assert stats.reputation == 1000

    def test_formulas(self) -> None:
        stats = CharacterStats(strength=4, dexterity=6, intelligence=8, vitality=10, charisma=2)
        assert stats.physical_atk == 4
        assert stats.magic_atk == 8
        assert stats.hp == pytest.approx(10 * 3 + 2 * 0.25)
        assert stats.mp == 16
        assert stats.defense == pytest.approx(6 + 2 + 5 + 0.5)
        assert stats.magic_def == pytest.approx(8 + 5 + 0.5)
        assert stats.luck == 2
        assert stats.crit_chance == pytest.approx(6 * 0.25 + 1)
        assert stats.crit_dmg_multiplier == pytest.approx(100 + 4 + 3 + 1)
        assert stats.atk_speed_increase == pytest.approx(1.5)
        assert stats.xp_gain_multiplier == pytest.approx(8 * 0.2 + 2 * 0.25)
        assert stats.tile_cost_discount == pytest.approx(0.2)

    def test_discount_capped(self) -> None:
        stats = CharacterStats(charisma=1000)
        assert stats.tile_cost_discount == 25.0

    def test_recompute_after_manual_change(self) -> None:
        stats = CharacterStats()
        stats.charisma = 50
        recompute_derived(stats)
        assert stats.tile_cost_discount == pytest.approx(5.0)

    def test_negative_stat_raises(self) -> None:
        with pytest.raises(ValueError, match="strength"):
            CharacterStats(strength=-1)

    def test_negative_points_raise(self) -> None:
        with pytest.raises(ValueError, match="available_points"):
            CharacterStats(available_points=-3)


class TestAllocate:
    def test_spends_one_point(self) -> None:
        stats = CharacterStats(available_points=1)
        assert allocate(stats, "strength") is None
        assert stats.strength == 6
        assert stats.available_points == 0
        assert stats.physical_atk == 6

    def test_no_points(self) -> None:
        stats = CharacterStats()
        assert allocate(stats, "strength") is Rejection.NO_POINTS_AVAILABLE
        assert stats.strength == 5

    def test_unknown_stat(self) -> None:
        stats = CharacterStats(available_points=2)
        assert allocate(stats, "wisdom") is Rejection.UNKNOWN_STAT
        assert stats.available_points == 2

    def test_second_allocation_after_last_point_fails(self) -> None:
        stats = CharacterStats(available_points=1)
        assert allocate(stats, "charisma") is None
        assert allocate(stats, "charisma") is Rejection.NO_POINTS_AVAILABLE
        assert stats.charisma == 6


class TestGrantPoints:
    def test_grant(self) -> None:
        stats = CharacterStats()
        grant_points(stats, 3)
        assert stats.available_points == 3

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            grant_points(CharacterStats(), -1)


class TestStatResourceModifiers:
    def test_default_stats(self) -> None:
        mods = stat_resource_modifiers(CharacterStats())
        assert mods["gold"] == pytest.approx(0.25)
        assert mods["wood"] == pytest.approx(0.25)
        assert mods["stone"] == pytest.approx(0.125)
        assert mods["coal"] == pytest.approx(0.25)
        assert mods["food"] == pytest.approx(0.25)
        assert mods["xp"] == pytest.approx(0.0225)
        assert mods["meat"] == 0.0

    def test_zero_stats(self) -> None:
        stats = CharacterStats(
            strength=0, dexterity=0, intelligence=0, vitality=0, charisma=0
        )
        assert all(v == 0.0 for v in stat_resource_modifiers(stats).values())
