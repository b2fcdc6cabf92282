from __future__ import annotations

import logging
from typing import Callable

from numpy.random import Generator

from farmhand import messages
from farmhand.catalog import default_catalog
from farmhand.constants import (
    FERTILIZER_ITEM_ID,
    HOE_SEED_RETURN_CHANCE,
    INITIAL_FIELD_HEIGHT,
    INITIAL_FIELD_WIDTH,
    ORE_SPAWN_WEIGHTS,
    PURCHASEABLE_FIELD_SIZES,
    RAINBOW_FERTILIZER_ITEM_ID,
    SCARECROW_ITEM_ID,
    SCYTHE_BONUS_YIELD,
    SHOVEL_ORE_CHANCE,
    SHOVELED_PLOT_MAX_DAYS,
    SHOVELED_PLOT_MIN_DAYS,
    SPRINKLER_ITEM_ID,
    WATERING_CAN_RANGE,
    GameState,
)
from farmhand.crops import (
    get_crop_from_item_id,
    get_crop_life_stage,
    get_final_crop_item_id_from_seed_item_id,
    get_plot_content_from_item_id,
    get_seed_item_id_from_crop_item_id,
    increment_plot_content_age,
    is_crop,
)
from farmhand.economy import add_loss
from farmhand.inventory import (
    add_item_to_inventory,
    decrement_item_from_inventory,
    get_inventory_quantity,
    inventory_space_remaining,
)
from farmhand.levels import get_sprinkler_range
from farmhand.notifications import show_notification
from farmhand.tools import get_tool_level
from farmhand.utils import pick_weighted

logger = logging.getLogger(__name__)

Field = list[list]
PlotFn = Callable[..., GameState]


def create_new_field(rows: int = INITIAL_FIELD_HEIGHT, columns: int = INITIAL_FIELD_WIDTH) -> Field:
    return [[None for _ in range(columns)] for _ in range(rows)]


def get_plot(state: GameState, x: int, y: int) -> dict | None:
    """Return the content at (x, y), or None for empty or out-of-field plots."""
    field = state.get("field", [])
    if y < 0 or y >= len(field) or x < 0 or x >= len(field[y]):
        return None
    return field[y][x]


def is_in_field(state: GameState, x: int, y: int) -> bool:
    field = state.get("field", [])
    return 0 <= y < len(field) and 0 <= x < len(field[y])


def modify_field_plot_at(state: GameState, x: int, y: int, modifier: Callable[[dict | None], dict | None]) -> GameState:
    """Return a state whose plot at (x, y) is replaced by ``modifier(plot)``."""
    field = list(state["field"])
    row = list(field[y])
    row[x] = modifier(row[x])
    field[y] = row
    return {**state, "field": field}


def remove_field_plot_at(state: GameState, x: int, y: int) -> GameState:
    return modify_field_plot_at(state, x, y, lambda _: None)


def for_range(
    state: GameState,
    field_fn: PlotFn,
    range_radius: int,
    plot_x: int,
    plot_y: int,
    *args,
) -> GameState:
    """Apply ``field_fn(state, x, y, *args)`` to every plot within a square radius."""
    field = state["field"]
    start_x = max(plot_x - range_radius, 0)
    end_x = min(plot_x + range_radius, len(field[0]) - 1)
    start_y = max(plot_y - range_radius, 0)
    end_y = min(plot_y + range_radius, len(field) - 1)

    for y in range(start_y, end_y + 1):
        for x in range(start_x, end_x + 1):
            state = field_fn(state, x, y, *args)
    return state


def iter_plots(state: GameState):
    """Yield (x, y, plot) for every non-empty plot."""
    for y, row in enumerate(state.get("field", [])):
        for x, plot in enumerate(row):
            if plot is not None:
                yield x, y, plot


def _clear_selection_when_spent(state: GameState, item_id: str) -> GameState:
    if state.get("selected_item_id") != item_id or get_inventory_quantity(state["inventory"], item_id) > 0:
        return state
    return {**state, "selected_item_id": "", "field_mode": "observe", "hovered_plot_range_size": 0}


def plant_in_plot(state: GameState, x: int, y: int, plantable_item_id: str) -> GameState:
    """Plant a seed in an empty plot."""
    if not plantable_item_id or not is_in_field(state, x, y) or get_plot(state, x, y) is not None:
        return state
    if get_inventory_quantity(state.get("inventory", []), plantable_item_id) <= 0:
        return state
    crop_item_id = get_final_crop_item_id_from_seed_item_id(plantable_item_id)
    state = modify_field_plot_at(state, x, y, lambda _: get_crop_from_item_id(crop_item_id))
    state = decrement_item_from_inventory(state, plantable_item_id)
    spent = get_inventory_quantity(state["inventory"], plantable_item_id) <= 0
    if spent and state.get("selected_item_id") == plantable_item_id:
        state = {**state, "selected_item_id": ""}
    return state


def water_plot(state: GameState, x: int, y: int) -> GameState:
    if not is_crop(get_plot(state, x, y)):
        return state
    return modify_field_plot_at(state, x, y, lambda crop: {**crop, "was_watered_today": True})


def water_plot_with_can(state: GameState, x: int, y: int) -> GameState:
    """Water the plots the watering can reaches at its current level."""
    radius = WATERING_CAN_RANGE[get_tool_level(state, "watering_can")]
    return for_range(state, water_plot, radius, x, y)


def water_field(field: Field) -> Field:
    return [
        [{**plot, "was_watered_today": True} if is_crop(plot) else plot for plot in row]
        for row in field
    ]


def water_all_plots(state: GameState) -> GameState:
    return {**state, "field": water_field(state["field"])}


def fertilize_plot(state: GameState, x: int, y: int, fertilizer_item_id: str = FERTILIZER_ITEM_ID) -> GameState:
    """
    Fertilize a crop. Standard fertilizer only applies to unfertilized crops;
    rainbow fertilizer also upgrades standard-fertilized crops.
    """
    plot = get_plot(state, x, y)
    if not is_crop(plot):
        return state
    if get_inventory_quantity(state.get("inventory", []), fertilizer_item_id) <= 0:
        return state
    current = plot.get("fertilizer_type", "none")
    if fertilizer_item_id == RAINBOW_FERTILIZER_ITEM_ID:
        if current == "rainbow":
            return state
        fertilizer_type = "rainbow"
    elif fertilizer_item_id == FERTILIZER_ITEM_ID:
        if current != "none":
            return state
        fertilizer_type = "standard"
    else:
        raise ValueError(f"{fertilizer_item_id} is not a fertilizer")

    state = modify_field_plot_at(state, x, y, lambda crop: {**crop, "fertilizer_type": fertilizer_type})
    state = decrement_item_from_inventory(state, fertilizer_item_id)
    return _clear_selection_when_spent(state, fertilizer_item_id)


def _place_field_tool(state: GameState, x: int, y: int, item_id: str) -> GameState:
    if not is_in_field(state, x, y) or get_plot(state, x, y) is not None:
        return state
    if get_inventory_quantity(state.get("inventory", []), item_id) <= 0:
        return state
    state = modify_field_plot_at(state, x, y, lambda _: get_plot_content_from_item_id(item_id))
    state = decrement_item_from_inventory(state, item_id)
    return _clear_selection_when_spent(state, item_id)


def set_scarecrow(state: GameState, x: int, y: int) -> GameState:
    return _place_field_tool(state, x, y, SCARECROW_ITEM_ID)


def set_sprinkler(state: GameState, x: int, y: int) -> GameState:
    return _place_field_tool(state, x, y, SPRINKLER_ITEM_ID)


def harvest_plot(state: GameState, x: int, y: int) -> GameState:
    """
    Harvest a grown crop into the inventory. The scythe adds bonus yield and
    rainbow fertilizer replants the plot when a matching seed is held.
    """
    crop = get_plot(state, x, y)
    if not is_crop(crop) or get_crop_life_stage(crop) != "grown":
        return state

    item_id = crop["item_id"]
    quantity = 1 + SCYTHE_BONUS_YIELD[get_tool_level(state, "scythe")]
    if inventory_space_remaining(state) < quantity:
        return show_notification(state, messages.INVENTORY_FULL_MESSAGE, "warning")

    state = remove_field_plot_at(state, x, y)
    state = add_item_to_inventory(state, item_id, quantity)
    harvested = dict(state.get("crops_harvested", {}))
    harvested[item_id] = harvested.get(item_id, 0) + quantity
    state = {**state, "crops_harvested": harvested}

    if crop.get("fertilizer_type") == "rainbow":
        seed_id = get_seed_item_id_from_crop_item_id(item_id)
        if seed_id is not None and get_inventory_quantity(state["inventory"], seed_id) > 0:
            state = modify_field_plot_at(state, x, y, lambda _: get_crop_from_item_id(item_id, "rainbow"))
            state = decrement_item_from_inventory(state, seed_id)
    return state


def clear_plot(state: GameState, x: int, y: int, rng: Generator | None = None) -> GameState:
    """
    Empty a plot. Replantable field tools return to the inventory; an
    upgraded hoe may recover the seed of a cleared crop.
    """
    plot = get_plot(state, x, y)
    if plot is None or plot["type"] == "shoveled":
        return state

    item_id = plot.get("item_id")
    if plot["type"] in ("scarecrow", "sprinkler"):
        if inventory_space_remaining(state) < 1:
            return show_notification(state, messages.INVENTORY_FULL_MESSAGE, "warning")
        if default_catalog().item(item_id).is_replantable:
            state = add_item_to_inventory(state, item_id)
    elif plot["type"] == "crop" and rng is not None:
        chance = HOE_SEED_RETURN_CHANCE[get_tool_level(state, "hoe")]
        seed_id = get_seed_item_id_from_crop_item_id(item_id)
        if seed_id is not None and chance > 0 and rng.random() < chance:
            state = add_item_to_inventory(state, seed_id)
    return remove_field_plot_at(state, x, y)


def mine_plot(state: GameState, x: int, y: int, rng: Generator) -> GameState:
    """Dig up an empty plot. Ore finds depend on the shovel level."""
    if not is_in_field(state, x, y) or get_plot(state, x, y) is not None:
        return state

    shovel_level = get_tool_level(state, "shovel")
    found = None
    if rng.random() < SHOVEL_ORE_CHANCE[shovel_level]:
        found = pick_weighted(rng, ORE_SPAWN_WEIGHTS)
        if inventory_space_remaining(state) < 1:
            state = show_notification(state, messages.INVENTORY_FULL_MESSAGE, "warning")
            found = None
        else:
            state = add_item_to_inventory(state, found)
    days_until_clear = int(rng.integers(SHOVELED_PLOT_MIN_DAYS, SHOVELED_PLOT_MAX_DAYS + 1))
    logger.debug("mined (%s, %s): found=%s clear_in=%s", x, y, found, days_until_clear)
    return modify_field_plot_at(
        state,
        x,
        y,
        lambda _: {"type": "shoveled", "item_id": found, "days_until_clear": days_until_clear},
    )


def reset_was_shoveled(state: GameState) -> GameState:
    """Count down shoveled plots and reopen them when they settle."""

    def settle(plot: dict | None) -> dict | None:
        if plot is None or plot.get("type") != "shoveled":
            return plot
        days = plot.get("days_until_clear", 0) - 1
        if days <= 0:
            return None
        return {**plot, "days_until_clear": days}

    return {**state, "field": [[settle(plot) for plot in row] for row in state["field"]]}


def process_field(state: GameState) -> GameState:
    """Age every crop by one day."""
    return {**state, "field": [[increment_plot_content_age(plot) for plot in row] for row in state["field"]]}


def process_sprinklers(state: GameState) -> GameState:
    """Water every crop within range of a sprinkler."""
    sprinkler_range = get_sprinkler_range(state)
    sprinklers = [(x, y) for x, y, plot in iter_plots(state) if plot["type"] == "sprinkler"]
    for x, y in sprinklers:
        state = for_range(state, water_plot, sprinkler_range, x, y)
    return state


def process_combine(state: GameState) -> GameState:
    """With a combine, harvest every grown crop automatically."""
    if not state.get("purchased_combine"):
        return state
    grown = [
        (x, y)
        for x, y, plot in iter_plots(state)
        if plot["type"] == "crop" and get_crop_life_stage(plot) == "grown"
    ]
    for x, y in grown:
        state = harvest_plot(state, x, y)
    return state


def purchase_field(state: GameState, field_id: int) -> GameState:
    """Grow the field to a larger size, keeping everything already in it."""
    if field_id not in PURCHASEABLE_FIELD_SIZES:
        raise ValueError(f"Unknown field size: {field_id}")
    if state.get("purchased_field", 0) >= field_id:
        return state
    columns, rows, price = PURCHASEABLE_FIELD_SIZES[field_id]
    if state.get("money", 0) < price:
        return state

    old_field = state["field"]
    field = [
        [
            old_field[y][x] if y < len(old_field) and x < len(old_field[y]) else None
            for x in range(columns)
        ]
        for y in range(rows)
    ]
    state = {**state, "field": field, "purchased_field": field_id}
    return add_loss(state, price)
