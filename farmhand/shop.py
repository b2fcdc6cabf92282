from __future__ import annotations

import logging
import math

from farmhand import messages
from farmhand.catalog import default_catalog
from farmhand.constants import (
    INITIAL_STORAGE_LIMIT,
    LOAN_GARNISHMENT_RATE,
    PURCHASEABLE_COMBINES,
    PURCHASEABLE_COW_PENS,
    PURCHASEABLE_SMELTERS,
    STORAGE_EXPANSION_AMOUNT,
    STORAGE_EXPANSION_BASE_PRICE,
    STORAGE_EXPANSION_SCALE_PREMIUM,
    GameState,
)
from farmhand.economy import add_loss, add_revenue, adjust_loan
from farmhand.inventory import (
    add_item_to_inventory,
    decrement_item_from_inventory,
    get_inventory_quantity,
    inventory_space_remaining,
)
from farmhand.levels import get_player_level, process_level_up
from farmhand.notifications import show_notification
from farmhand.pricing import get_adjusted_item_value
from farmhand.recipes import update_learned_recipes
from farmhand.utils import money_total

logger = logging.getLogger(__name__)


def purchase_item(state: GameState, item_id: str, how_many: int = 1) -> GameState:
    """Buy items at today's price. No-op when unaffordable or out of storage."""
    if how_many <= 0:
        return state
    value = get_adjusted_item_value(state.get("value_adjustments", {}), item_id)
    total = money_total(value * how_many)
    if total > state.get("money", 0) or inventory_space_remaining(state) < how_many:
        return state

    state = add_item_to_inventory(state, item_id, how_many)
    state = add_loss(state, total)
    purchases = dict(state.get("todays_purchases", {}))
    purchases[item_id] = purchases.get(item_id, 0) + how_many
    return {**state, "todays_purchases": purchases}


def purchase_item_max(state: GameState, item_id: str) -> GameState:
    """Buy as many of an item as money and storage allow."""
    value = get_adjusted_item_value(state.get("value_adjustments", {}), item_id)
    if value <= 0:
        return state
    how_many = math.floor(state.get("money", 0) / value)
    how_many = int(min(how_many, inventory_space_remaining(state)))
    return purchase_item(state, item_id, how_many)


def sell_item(
    state: GameState,
    item_id: str,
    how_many: int = 1,
    garnishment_rate: float = LOAN_GARNISHMENT_RATE,
) -> GameState:
    """
    Sell items at today's price. Farm product sales grant experience and have
    part of their revenue garnished toward an outstanding loan.
    """
    if how_many <= 0 or get_inventory_quantity(state.get("inventory", []), item_id) < how_many:
        return state

    item = default_catalog().item(item_id)
    sale_value = money_total(get_adjusted_item_value(state.get("value_adjustments", {}), item_id) * how_many)
    old_level = get_player_level(state)

    state = decrement_item_from_inventory(state, item_id, how_many)
    state = add_revenue(state, sale_value)
    items_sold = dict(state.get("items_sold", {}))
    items_sold[item_id] = items_sold.get(item_id, 0) + how_many
    state = {**state, "items_sold": items_sold}

    if item.is_farm_product:
        loan_balance = state.get("loan_balance", 0)
        garnishment = min(loan_balance, money_total(sale_value * garnishment_rate))
        if garnishment > 0:
            logger.debug("garnished %s of %s sale toward loan", garnishment, item_id)
            state = adjust_loan(state, -garnishment)
            state = show_notification(state, messages.loan_garnished(garnishment))
        state = {**state, "experience": state.get("experience", 0) + how_many}
        state = process_level_up(state, old_level)

    return update_learned_recipes(state)


def sell_all_of_item(state: GameState, item_id: str, garnishment_rate: float = LOAN_GARNISHMENT_RATE) -> GameState:
    quantity = get_inventory_quantity(state.get("inventory", []), item_id)
    if quantity <= 0:
        return state
    return sell_item(state, item_id, quantity, garnishment_rate)


def purchase_cow_pen(state: GameState, cow_pen_id: int) -> GameState:
    if cow_pen_id not in PURCHASEABLE_COW_PENS:
        raise ValueError(f"Unknown cow pen: {cow_pen_id}")
    cows, price = PURCHASEABLE_COW_PENS[cow_pen_id]
    if state.get("purchased_cow_pen", 0) >= cow_pen_id or state.get("money", 0) < price:
        return state
    state = add_loss({**state, "purchased_cow_pen": cow_pen_id}, price)
    return show_notification(state, messages.cow_pen_purchased(cows), "success")


def purchase_combine(state: GameState, combine_id: int = 1) -> GameState:
    if combine_id not in PURCHASEABLE_COMBINES:
        raise ValueError(f"Unknown combine: {combine_id}")
    price = PURCHASEABLE_COMBINES[combine_id]
    if state.get("purchased_combine", 0) >= combine_id or state.get("money", 0) < price:
        return state
    state = add_loss({**state, "purchased_combine": combine_id}, price)
    return show_notification(state, messages.purchased_equipment("combine"), "success")


def purchase_smelter(state: GameState, smelter_id: int = 1) -> GameState:
    if smelter_id not in PURCHASEABLE_SMELTERS:
        raise ValueError(f"Unknown smelter: {smelter_id}")
    price = PURCHASEABLE_SMELTERS[smelter_id]
    if state.get("purchased_smelter", 0) >= smelter_id or state.get("money", 0) < price:
        return state
    state = add_loss({**state, "purchased_smelter": smelter_id}, price)
    state = show_notification(state, messages.purchased_equipment("smelter"), "success")
    return update_learned_recipes(state)


def get_storage_expansion_price(inventory_limit: int) -> int:
    """Each expansion costs more than the last."""
    expansions = max(0, (inventory_limit - INITIAL_STORAGE_LIMIT) // STORAGE_EXPANSION_AMOUNT)
    return STORAGE_EXPANSION_BASE_PRICE + STORAGE_EXPANSION_SCALE_PREMIUM * expansions


def purchase_storage_expansion(state: GameState) -> GameState:
    limit = state.get("inventory_limit", INITIAL_STORAGE_LIMIT)
    if limit == -1:
        return state
    price = get_storage_expansion_price(limit)
    if state.get("money", 0) < price:
        return state
    new_limit = limit + STORAGE_EXPANSION_AMOUNT
    state = add_loss({**state, "inventory_limit": new_limit}, price)
    return show_notification(state, messages.storage_expanded(new_limit), "success")
