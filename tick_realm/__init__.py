"""tick-realm - Deterministic simulation core for an idle territory-growth game."""
from tick_realm.biomes import BIOMES, BiomeDef
from tick_realm.catalog import BUILDINGS, CASTLE_UPGRADE_COSTS, MERCHANT_PRICES, BuildingDef
from tick_realm.clock import Clock
from tick_realm.config import RealmConfig
from tick_realm.engine import RealmEngine
from tick_realm.farm import ANIMALS, AnimalDef
from tick_realm.grid import Grid, Parcel, create_initial_grid, random_biome
from tick_realm.log import configure_logging
from tick_realm.progression import LevelState, level_from_xp
from tick_realm.rates import ResourceRates, compute_rates
from tick_realm.scaling import apply_discount, parcel_cost, xp_gain_on_acquire, xp_threshold
from tick_realm.state import GameState, new_game
from tick_realm.stats import CharacterStats
from tick_realm.stockpile import Stockpile, StockpileHelper
from tick_realm.types import (
    RESOURCE_KINDS,
    InvalidPersistedState,
    Rejection,
    SnapshotError,
    TickContext,
)

__all__ = [
    "ANIMALS",
    "AnimalDef",
    "BIOMES",
    "BUILDINGS",
    "BiomeDef",
    "BuildingDef",
    "CASTLE_UPGRADE_COSTS",
    "CharacterStats",
    "Clock",
    "GameState",
    "Grid",
    "InvalidPersistedState",
    "LevelState",
    "MERCHANT_PRICES",
    "Parcel",
    "RESOURCE_KINDS",
    "RealmConfig",
    "RealmEngine",
    "Rejection",
    "ResourceRates",
    "SnapshotError",
    "Stockpile",
    "StockpileHelper",
    "TickContext",
    "apply_discount",
    "compute_rates",
    "configure_logging",
    "create_initial_grid",
    "level_from_xp",
    "new_game",
    "parcel_cost",
    "random_biome",
    "xp_gain_on_acquire",
    "xp_threshold",
]
