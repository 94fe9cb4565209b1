"""Stockpile component and helper functions."""
from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field

from tick_realm.types import RESOURCE_KINDS


def _empty_slots() -> dict[str, float]:
    return {name: 0.0 for name in RESOURCE_KINDS}


@dataclass
class Stockpile:
    """Accumulated amount of every resource kind.

    Attributes:
        slots: Mapping of resource_name -> amount. Every kind is always present.
    """

    slots: dict[str, float] = field(default_factory=_empty_slots)


def _check_kind(name: str) -> None:
    if name not in RESOURCE_KINDS:
        raise KeyError(f"unknown resource kind {name!r}")


class StockpileHelper:
    """Pure functions for stockpile manipulation."""

    @staticmethod
    def add(sp: Stockpile, name: str, amount: float) -> float:
        """Add resources. Returns the amount added."""
        _check_kind(name)
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        sp.slots[name] = sp.slots.get(name, 0.0) + amount
        return amount

    @staticmethod
    def remove(sp: Stockpile, name: str, amount: float) -> float:
        """Remove resources, never below zero. Returns amount actually removed."""
        _check_kind(name)
        if amount < 0:
            raise ValueError(f"amount must be >= 0, got {amount}")
        current = sp.slots.get(name, 0.0)
        actual = min(amount, current)
        sp.slots[name] = current - actual
        return actual

    @staticmethod
    def count(sp: Stockpile, name: str) -> float:
        return sp.slots.get(name, 0.0)

    @staticmethod
    def has(sp: Stockpile, name: str, amount: float) -> bool:
        return sp.slots.get(name, 0.0) >= amount

    @staticmethod
    def has_all(sp: Stockpile, requirements: dict[str, float]) -> bool:
        for name, needed in requirements.items():
            if sp.slots.get(name, 0.0) < needed:
                return False
        return True

    @staticmethod
    def pay(sp: Stockpile, cost: dict[str, float]) -> bool:
        """Deduct a whole cost table. Returns False (and deducts nothing) if short."""
        if not StockpileHelper.has_all(sp, cost):
            return False
        for name, amount in cost.items():
            StockpileHelper.remove(sp, name, amount)
        return True

    @staticmethod
    def sanitize(sp: Stockpile) -> None:
        """Force every slot to a finite, non-negative number."""
        for name in RESOURCE_KINDS:
            value = sp.slots.get(name, 0.0)
            if math.isnan(value) or value < 0:
                sp.slots[name] = 0.0
            elif math.isinf(value):
                sp.slots[name] = sys.float_info.max
