"""Realm tuning constants."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RealmConfig:
    """Immutable tuning for one game session.

    Attributes:
        grid_width: Parcels per row.
        grid_height: Parcels per column.
        base_tile_cost: Gold cost scale of the parcel cost curve.
        base_scaling_factor: Exponential base of the parcel cost curve.
        scaling_increase_per: Owned parcels per cost tier.
        scaling_increase_amount: Growth of the exponential base per tier.
        adjacency_bonus: Rate bonus per same-biome owned 4-neighbour.
        base_xp_per_level: XP needed to go from level 1 to 2.
        xp_growth_factor: Per-level growth of the XP threshold.
        base_xp_per_tile: XP granted for a parcel acquisition before scaling.
        castle_level_multiplier: Compounding multiplier on the castle's own
            generation per level above 1.
        max_step_ms: Largest elapsed time a single tick will apply.
        stat_points_per_level: Points granted for every level gained.
        reputation_per_parcel: Reputation gained on each acquisition.
        selection_interval: Every Nth acquisition lets the player pick the biome.
        plains_meat_bonus: Meat modifier per owned plains parcel.
        buy_markup: Multiplier on merchant sell prices when buying.
        max_name_length: Longest accepted player name.
        starting_gold: Gold in a new game's stockpile.
    """

    grid_width: int = 50
    grid_height: int = 50
    base_tile_cost: int = 70
    base_scaling_factor: float = 1.34
    scaling_increase_per: int = 13
    scaling_increase_amount: float = 0.04
    adjacency_bonus: float = 0.25
    base_xp_per_level: int = 500
    xp_growth_factor: float = 1.4
    base_xp_per_tile: float = 125.0
    castle_level_multiplier: float = 2.0
    max_step_ms: float = 60_000.0
    stat_points_per_level: int = 3
    reputation_per_parcel: int = 5
    selection_interval: int = 4
    plains_meat_bonus: float = 0.05
    buy_markup: float = 2.0
    max_name_length: int = 9
    starting_gold: float = 150.0

    def __post_init__(self) -> None:
        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError(
                f"grid must be at least 1x1, got {self.grid_width}x{self.grid_height}"
            )
        if self.base_scaling_factor <= 1.0:
            raise ValueError(
                f"base_scaling_factor must be > 1, got {self.base_scaling_factor}"
            )
        if self.scaling_increase_per < 1:
            raise ValueError(
                f"scaling_increase_per must be >= 1, got {self.scaling_increase_per}"
            )
        if self.xp_growth_factor < 1.0:
            raise ValueError(f"xp_growth_factor must be >= 1, got {self.xp_growth_factor}")
        if self.base_xp_per_level < 1:
            raise ValueError(f"base_xp_per_level must be >= 1, got {self.base_xp_per_level}")
        if self.adjacency_bonus < 0:
            raise ValueError(f"adjacency_bonus must be >= 0, got {self.adjacency_bonus}")
        if self.max_step_ms <= 0:
            raise ValueError(f"max_step_ms must be positive, got {self.max_step_ms}")
        if self.selection_interval < 1:
            raise ValueError(
                f"selection_interval must be >= 1, got {self.selection_interval}"
            )
        if self.max_name_length < 1:
            raise ValueError(f"max_name_length must be >= 1, got {self.max_name_length}")
        if self.starting_gold < 0:
            raise ValueError(f"starting_gold must be >= 0, got {self.starting_gold}")

    @property
    def center(self) -> tuple[int, int]:
        return self.grid_width // 2, self.grid_height // 2
