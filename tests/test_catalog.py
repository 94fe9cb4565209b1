"""Tests for configuration and the static catalogs."""
from __future__ import annotations

import pytest
from tick_realm import BIOMES, BUILDINGS, CASTLE_UPGRADE_COSTS, MERCHANT_PRICES, BiomeDef, RealmConfig
from tick_realm.biomes import get_biome, is_biome
from tick_realm.catalog import castle_upgrade_cost


class TestRealmConfig:
    def test_defaults(self) -> None:
        cfg = RealmConfig()
        assert (cfg.grid_width, cfg.grid_height) == (50, 50)
        assert cfg.center == (25, 25)
        assert cfg.adjacency_bonus == 0.25

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"grid_width": 0},
            {"base_scaling_factor": 1.0},
            {"scaling_increase_per": 0},
            {"xp_growth_factor": 0.9},
            {"base_xp_per_level": 0},
            {"adjacency_bonus": -0.1},
            {"max_step_ms": 0},
            {"selection_interval": 0},
            {"max_name_length": 0},
            {"starting_gold": -1},
        ],
    )
    def test_invalid(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            RealmConfig(**kwargs)

    def test_frozen(self) -> None:
        cfg = RealmConfig()
        with pytest.raises(AttributeError):
            cfg.grid_width = 10  # type: ignore[misc]


class TestBiomes:
    def test_castle(self) -> None:
        castle = get_biome("castle")
        assert castle.unique
        assert castle.upgradeable
        assert castle.max_level == 10

    def test_only_grounds_support_buildings(self) -> None:
        assert [n for n, b in BIOMES.items() if b.supports_buildings] == ["grounds"]

    def test_empty_generates_nothing(self) -> None:
        assert get_biome("empty").generation == {}

    def test_unknown(self) -> None:
        assert not is_biome("volcano")
        with pytest.raises(KeyError):
            get_biome("volcano")

    def test_upgradeable_needs_max_level(self) -> None:
        with pytest.raises(ValueError, match="max_level"):
            BiomeDef(name="keep", label="Keep", upgradeable=True)


class TestCastleUpgradeCosts:
    def test_nine_upgrades(self) -> None:
        assert len(CASTLE_UPGRADE_COSTS) == 9
        assert castle_upgrade_cost(1) == {"gold": 5_000, "wood": 500, "stone": 500}
        assert castle_upgrade_cost(9) == CASTLE_UPGRADE_COSTS[8]

    def test_outside_table(self) -> None:
        assert castle_upgrade_cost(0) is None
        assert castle_upgrade_cost(10) is None

    def test_returns_copy(self) -> None:
        cost = castle_upgrade_cost(1)
        cost["gold"] = 0
        assert CASTLE_UPGRADE_COSTS[0]["gold"] == 5_000


class TestMarket:
    def test_gold_and_xp_not_tradeable(self) -> None:
        assert "gold" not in MERCHANT_PRICES
        assert "xp" not in MERCHANT_PRICES

    def test_buildings_have_costs(self) -> None:
        for building in BUILDINGS.values():
            assert building.cost
            assert building.modifiers
