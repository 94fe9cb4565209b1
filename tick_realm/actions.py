"""Economy actions: validated, all-or-nothing state transitions.

Every action returns ``None`` on success or the :class:`Rejection` that
explains why nothing changed. None of them raise for gameplay failures.
"""
from __future__ import annotations

import math
import random

import structlog

from tick_realm import farm
from tick_realm.biomes import BIOMES, CASTLE, get_biome, is_biome
from tick_realm.catalog import BUILDINGS, MERCHANT_PRICES, castle_upgrade_cost
from tick_realm.config import RealmConfig
from tick_realm.grid import Grid, acquirable_biomes, random_biome
from tick_realm.scaling import apply_discount, parcel_cost, xp_gain_on_acquire
from tick_realm.state import GameState, refresh, refresh_level, refresh_rates
from tick_realm.stats import allocate
from tick_realm.stockpile import StockpileHelper
from tick_realm.types import RESOURCE_KINDS, Rejection

logger = structlog.get_logger()


def _reject(action: str, reason: Rejection, **details: object) -> Rejection:
    logger.debug("action_rejected", action=action, reason=reason.value, **details)
    return reason


def is_selection_turn(grid: Grid, config: RealmConfig) -> bool:
    """True when the next acquisition lets the caller choose the biome."""
    return grid.owned_count() % config.selection_interval == 0


def selectable_biomes(grid: Grid) -> list[str]:
    return acquirable_biomes(grid)


def current_parcel_cost(state: GameState, config: RealmConfig) -> int:
    """Gold the next parcel costs after the character's discount."""
    base = parcel_cost(state.grid.owned_count(), config)
    return apply_discount(base, state.stats.tile_cost_discount)


def acquire_parcel(
    state: GameState,
    x: int,
    y: int,
    biome: str | None,
    rng: random.Random,
    config: RealmConfig,
) -> Rejection | None:
    """Buy the parcel at (x, y).

    The biome is drawn from *rng* unless this is a selection turn and the
    caller supplies *biome*.
    """
    grid = state.grid
    if not grid.in_bounds(x, y):
        return _reject("acquire_parcel", Rejection.OUT_OF_BOUNDS, x=x, y=y)
    if grid.at(x, y).owned:
        return _reject("acquire_parcel", Rejection.ALREADY_OWNED, x=x, y=y)
    if not grid.is_adjacent_to_owned(x, y):
        return _reject("acquire_parcel", Rejection.NOT_ADJACENT, x=x, y=y)

    owned = grid.owned_count()
    cost = current_parcel_cost(state, config)
    if not StockpileHelper.has(state.stockpile, "gold", cost):
        return _reject("acquire_parcel", Rejection.INSUFFICIENT_FUNDS, cost=cost)

    if biome is not None:
        if not is_selection_turn(grid, config):
            return _reject("acquire_parcel", Rejection.SELECTION_NOT_ALLOWED, owned=owned)
        if not is_biome(biome):
            return _reject("acquire_parcel", Rejection.INVALID_BIOME, biome=biome)
        if biome not in acquirable_biomes(grid):
            reason = (
                Rejection.UNIQUE_BIOME_TAKEN
                if get_biome(biome).unique and grid.count_biome(biome) > 0
                else Rejection.INVALID_BIOME
            )
            return _reject("acquire_parcel", reason, biome=biome)
        chosen = biome
    else:
        chosen = random_biome(grid, rng)

    rejection = grid.acquire(x, y, chosen)
    if rejection is not None:
        return _reject("acquire_parcel", rejection, x=x, y=y, biome=chosen)

    StockpileHelper.remove(state.stockpile, "gold", cost)
    xp = xp_gain_on_acquire(owned, state.stats.xp_gain_multiplier, config)
    StockpileHelper.add(state.stockpile, "xp", xp)
    state.stats.reputation += config.reputation_per_parcel
    refresh(state, config)
    logger.info(
        "parcel_acquired", x=x, y=y, biome=chosen, cost=cost, xp=xp, owned=owned + 1
    )
    return None


def upgrade_castle(state: GameState, config: RealmConfig) -> Rejection | None:
    castle = state.grid.castle()
    if castle is None:
        return _reject("upgrade_castle", Rejection.INVALID_BIOME)
    level = castle.level or 1
    max_level = BIOMES[CASTLE].max_level
    cost = castle.upgrade_cost if castle.upgrade_cost is not None else castle_upgrade_cost(level)
    if level >= max_level or cost is None:
        return _reject("upgrade_castle", Rejection.MAX_LEVEL_REACHED, level=level)
    if not StockpileHelper.pay(state.stockpile, cost):
        return _reject("upgrade_castle", Rejection.INSUFFICIENT_FUNDS, level=level)

    castle.level = level + 1
    castle.upgrade_cost = castle_upgrade_cost(castle.level) if castle.level < max_level else None
    refresh_rates(state, config)
    logger.info("castle_upgraded", level=castle.level, cost=cost)
    return None


def allocate_stat_point(state: GameState, stat: str, config: RealmConfig) -> Rejection | None:
    rejection = allocate(state.stats, stat)
    if rejection is not None:
        return _reject("allocate_stat_point", rejection, stat=stat)
    refresh_rates(state, config)
    logger.info("stat_allocated", stat=stat, remaining=state.stats.available_points)
    return None


def _valid_amount(amount: float) -> bool:
    return not math.isnan(amount) and not math.isinf(amount) and amount > 0


def sell_resources(
    state: GameState, kind: str, amount: float
) -> tuple[float, Rejection | None]:
    """Sell *amount* of *kind* to the merchant. Returns (gold gained, rejection)."""
    price = MERCHANT_PRICES.get(kind)
    if price is None:
        return 0.0, _reject("sell_resources", Rejection.NOT_TRADEABLE, kind=kind)
    if not _valid_amount(amount):
        return 0.0, _reject("sell_resources", Rejection.INVALID_AMOUNT, amount=amount)
    if not StockpileHelper.has(state.stockpile, kind, amount):
        return 0.0, _reject("sell_resources", Rejection.INSUFFICIENT_FUNDS, kind=kind)

    gold = float(math.floor(amount * price))
    StockpileHelper.remove(state.stockpile, kind, amount)
    StockpileHelper.add(state.stockpile, "gold", gold)
    logger.info("resources_sold", kind=kind, amount=amount, gold=gold)
    return gold, None


def buy_resources(
    state: GameState, kind: str, amount: float, config: RealmConfig
) -> Rejection | None:
    """Buy *amount* of *kind* at the marked-up merchant price, rounded up."""
    price = MERCHANT_PRICES.get(kind)
    if price is None:
        return _reject("buy_resources", Rejection.NOT_TRADEABLE, kind=kind)
    if not _valid_amount(amount):
        return _reject("buy_resources", Rejection.INVALID_AMOUNT, amount=amount)
    cost = math.ceil(amount * price * config.buy_markup)
    if not StockpileHelper.pay(state.stockpile, {"gold": cost}):
        return _reject("buy_resources", Rejection.INSUFFICIENT_FUNDS, cost=cost)
    StockpileHelper.add(state.stockpile, kind, amount)
    logger.info("resources_bought", kind=kind, amount=amount, gold=cost)
    return None


def purchase_or_upgrade_animal(
    state: GameState, animal_id: str, config: RealmConfig
) -> Rejection | None:
    rejection = farm.purchase_or_upgrade(state.farm_levels, state.stockpile, animal_id)
    if rejection is not None:
        return _reject("purchase_or_upgrade_animal", rejection, animal=animal_id)
    refresh_rates(state, config)
    logger.info("animal_upgraded", animal=animal_id, level=state.farm_levels[animal_id])
    return None


def build_on_grounds(
    state: GameState, x: int, y: int, building: str, config: RealmConfig
) -> Rejection | None:
    """Raise *building* on an owned grounds parcel."""
    grid = state.grid
    if not grid.in_bounds(x, y):
        return _reject("build_on_grounds", Rejection.OUT_OF_BOUNDS, x=x, y=y)
    parcel = grid.at(x, y)
    if not parcel.owned or not get_biome(parcel.biome).supports_buildings:
        return _reject("build_on_grounds", Rejection.NOT_GROUNDS, x=x, y=y)
    if parcel.building is not None:
        return _reject("build_on_grounds", Rejection.ALREADY_BUILT, x=x, y=y)
    defn = BUILDINGS.get(building)
    if defn is None:
        return _reject("build_on_grounds", Rejection.UNKNOWN_BUILDING, building=building)
    if not StockpileHelper.pay(state.stockpile, defn.cost):
        return _reject("build_on_grounds", Rejection.INSUFFICIENT_FUNDS, building=building)

    parcel.building = building
    refresh_rates(state, config)
    logger.info("building_raised", x=x, y=y, building=building)
    return None


def set_player_name(state: GameState, name: str, config: RealmConfig) -> Rejection | None:
    cleaned = name.strip()[: config.max_name_length].rstrip()
    if not cleaned:
        return _reject("set_player_name", Rejection.INVALID_NAME)
    state.player_name = cleaned
    return None


def grant_resources(
    state: GameState, amounts: dict[str, float], config: RealmConfig
) -> Rejection | None:
    """Add resources outside the economy (debug and rewards)."""
    for kind, amount in amounts.items():
        if kind not in RESOURCE_KINDS or math.isnan(amount) or math.isinf(amount) or amount < 0:
            return _reject("grant_resources", Rejection.INVALID_AMOUNT, kind=kind)
    for kind, amount in amounts.items():
        StockpileHelper.add(state.stockpile, kind, amount)
    StockpileHelper.sanitize(state.stockpile)
    if amounts.get("xp"):
        refresh_level(state, config)
    return None
