"""Tests for farm animals and meat production."""
from __future__ import annotations

import pytest
from tick_realm import ANIMALS, Rejection, Stockpile
from tick_realm.farm import animal_cost, animal_production, purchase_or_upgrade, total_meat_production


class TestAnimalCurves:
    def test_first_cost_is_base(self) -> None:
        assert animal_cost(ANIMALS["chicken"], 0) == 10_000

    def test_cost_scales(self) -> None:
        assert animal_cost(ANIMALS["chicken"], 1) == 15_000
        assert animal_cost(ANIMALS["chicken"], 2) == 22_500

    def test_production_zero_when_not_owned(self) -> None:
        assert animal_production(ANIMALS["pig"], 0) == 0.0

    def test_production_scales(self) -> None:
        assert animal_production(ANIMALS["chicken"], 1) == pytest.approx(0.05)
        assert animal_production(ANIMALS["chicken"], 3) == pytest.approx(0.05 * 1.2**2)

    def test_total(self) -> None:
        levels = {"chicken": 1, "deer": 2}
        assert total_meat_production(levels) == pytest.approx(0.05 + 0.2 * 1.25)

    def test_total_empty(self) -> None:
        assert total_meat_production({}) == 0.0


class TestPurchaseOrUpgrade:
    def test_first_purchase(self) -> None:
        sp = Stockpile()
        sp.slots["food"] = 12_000
        levels: dict[str, int] = {}
        assert purchase_or_upgrade(levels, sp, "chicken") is None
        assert levels == {"chicken": 1}
        assert sp.slots["food"] == 2_000

    def test_upgrade(self) -> None:
        sp = Stockpile()
        sp.slots["food"] = 15_000
        levels = {"chicken": 1}
        assert purchase_or_upgrade(levels, sp, "chicken") is None
        assert levels["chicken"] == 2
        assert sp.slots["food"] == 0

    def test_insufficient_food(self) -> None:
        sp = Stockpile()
        sp.slots["food"] = 9_999
        levels: dict[str, int] = {}
        assert purchase_or_upgrade(levels, sp, "chicken") is Rejection.INSUFFICIENT_FUNDS
        assert levels == {}
        assert sp.slots["food"] == 9_999

    def test_unknown_animal(self) -> None:
        sp = Stockpile()
        sp.slots["food"] = 1e9
        assert purchase_or_upgrade({}, sp, "dragon") is Rejection.UNKNOWN_ANIMAL
        assert sp.slots["food"] == 1e9
