from __future__ import annotations

import logging
import uuid
from typing import Any, Callable

from numpy.random import Generator

from farmhand import messages
from farmhand.catalog import default_catalog
from farmhand.constants import (
    COW_COLORS,
    COW_FEED_ITEM_ID,
    COW_FERTILIZER_PRODUCTION_RATE_FASTEST,
    COW_FERTILIZER_PRODUCTION_RATE_SLOWEST,
    COW_GESTATION_PERIOD_DAYS,
    COW_HUG_BENEFIT,
    COW_MALE_WEIGHT_BONUS,
    COW_MAXIMUM_HUGS_PER_DAY,
    COW_MAXIMUM_VALUE_MATURITY_AGE,
    COW_MAXIMUM_VALUE_MULTIPLIER,
    COW_MILK_RATE_FASTEST,
    COW_MILK_RATE_SLOWEST,
    COW_MINIMUM_VALUE_MULTIPLIER,
    COW_NAMES,
    COW_PRICE_PER_POUND,
    COW_STARTING_WEIGHT_BASE,
    COW_STARTING_WEIGHT_VARIANCE,
    COW_WEIGHT_MULTIPLIER_FEED_BENEFIT,
    COW_WEIGHT_MULTIPLIER_MAXIMUM,
    COW_WEIGHT_MULTIPLIER_MINIMUM,
    FERTILIZER_ITEM_ID,
    HUGGING_MACHINE_ITEM_ID,
    MAX_ANIMAL_NAME_LENGTH,
    PURCHASEABLE_COW_PENS,
    RAINBOW_COW_CHANCE,
    RAINBOW_COW_COLOR,
    RAINBOW_FERTILIZER_ITEM_ID,
    GameState,
)
from farmhand.economy import add_loss, add_revenue
from farmhand.inventory import (
    add_item_to_inventory,
    decrement_item_from_inventory,
    get_inventory_quantity,
    inventory_space_remaining,
)
from farmhand.notifications import show_notification
from farmhand.utils import clamp, interpolate, money_total, pick

logger = logging.getLogger(__name__)

Cow = dict[str, Any]


def empty_breeding_pen() -> dict:
    return {"cow_id_1": None, "cow_id_2": None, "days_until_birth": COW_GESTATION_PERIOD_DAYS}


def generate_cow(rng: Generator, **overrides: Any) -> Cow:
    """Create a random young cow. Keyword overrides replace generated fields."""
    gender = "female" if rng.random() < 0.5 else "male"
    color = RAINBOW_COW_COLOR if rng.random() < RAINBOW_COW_CHANCE else pick(rng, COW_COLORS)
    base_weight = COW_STARTING_WEIGHT_BASE + float(
        rng.uniform(-COW_STARTING_WEIGHT_VARIANCE, COW_STARTING_WEIGHT_VARIANCE)
    )
    if gender == "male":
        base_weight *= COW_MALE_WEIGHT_BONUS
    cow: Cow = {
        "id": str(uuid.UUID(bytes=rng.bytes(16), version=4)),
        "name": pick(rng, COW_NAMES),
        "color": color,
        "colors_in_bloodline": {color: True},
        "gender": gender,
        "base_weight": round(base_weight),
        "weight_multiplier": 1.0,
        "happiness": 0.0,
        "happiness_boosts_today": 0,
        "days_old": 1,
        "days_since_milking": 0,
        "days_since_producing_fertilizer": 0,
        "is_bred": False,
        "is_using_hugging_machine": False,
        "owner_id": "",
        "original_owner_id": "",
        "times_traded": 0,
    }
    cow.update(overrides)
    if "color" in overrides and "colors_in_bloodline" not in overrides:
        cow["colors_in_bloodline"] = {cow["color"]: True}
    return cow


def get_cow_weight(cow: Cow) -> int:
    return round(cow["base_weight"] * cow["weight_multiplier"])


def get_cow_value(cow: Cow, is_being_sold: bool = False) -> float:
    """
    Purchase price scales with weight. Sale price also depends on age and
    peaks when the cow reaches maturity.
    """
    weight = get_cow_weight(cow)
    if not is_being_sold:
        return money_total(weight * COW_PRICE_PER_POUND)
    age_gap = abs(cow.get("days_old", 1) - COW_MAXIMUM_VALUE_MATURITY_AGE) / COW_MAXIMUM_VALUE_MATURITY_AGE
    multiplier = clamp(
        COW_MAXIMUM_VALUE_MULTIPLIER - age_gap,
        COW_MINIMUM_VALUE_MULTIPLIER,
        COW_MAXIMUM_VALUE_MULTIPLIER,
    )
    return money_total(weight * multiplier)


def get_cow_milk_rate(cow: Cow) -> int:
    """Days between milkings; happier cows are milked more often."""
    return round(interpolate(COW_MILK_RATE_SLOWEST, COW_MILK_RATE_FASTEST, cow["happiness"]))


def get_cow_milk_item_id(cow: Cow) -> str:
    happiness = cow["happiness"]
    if happiness < 1 / 3:
        return "milk-1"
    if happiness < 2 / 3:
        return "milk-2"
    return "milk-3"


def get_cow_fertilizer_production_rate(cow: Cow) -> int:
    return round(
        interpolate(COW_FERTILIZER_PRODUCTION_RATE_SLOWEST, COW_FERTILIZER_PRODUCTION_RATE_FASTEST, cow["happiness"])
    )


def get_cow_fertilizer_item_id(cow: Cow) -> str:
    return RAINBOW_FERTILIZER_ITEM_ID if cow["color"] == RAINBOW_COW_COLOR else FERTILIZER_ITEM_ID


def get_cow_pen_capacity(state: GameState) -> int:
    pen_id = state.get("purchased_cow_pen", 0)
    if not pen_id:
        return 0
    return PURCHASEABLE_COW_PENS[pen_id][0]


def find_cow(state: GameState, cow_id: str) -> Cow | None:
    for cow in state.get("cow_inventory", []):
        if cow["id"] == cow_id:
            return cow
    return None


def add_cow_to_inventory(state: GameState, cow: Cow) -> GameState:
    return {**state, "cow_inventory": [*state.get("cow_inventory", []), dict(cow)]}


def remove_cow_from_inventory(state: GameState, cow_id: str) -> GameState:
    """Remove a cow and release everything attached to it."""
    cow = find_cow(state, cow_id)
    if cow is None:
        return state
    state = {**state, "cow_inventory": [c for c in state["cow_inventory"] if c["id"] != cow_id]}
    if cow.get("is_using_hugging_machine"):
        state = add_item_to_inventory(state, HUGGING_MACHINE_ITEM_ID, allow_overage=True)

    pen = dict(state.get("cow_breeding_pen", empty_breeding_pen()))
    if cow_id in (pen["cow_id_1"], pen["cow_id_2"]):
        state = change_cow_breeding_pen_resident(state, cow, False)
    if state.get("cow_id_offered_for_trade") == cow_id:
        state = {**state, "cow_id_offered_for_trade": ""}
    if state.get("selected_cow_id") == cow_id:
        state = {**state, "selected_cow_id": ""}
    return state


def modify_cow(state: GameState, cow_id: str, fn: Callable[[Cow], Cow]) -> GameState:
    return {
        **state,
        "cow_inventory": [fn(dict(cow)) if cow["id"] == cow_id else cow for cow in state.get("cow_inventory", [])],
    }


def purchase_cow(state: GameState, cow: Cow, rng: Generator) -> GameState:
    """Buy a cow if there is money and pen room, then offer a new cow for sale."""
    value = get_cow_value(cow)
    capacity = get_cow_pen_capacity(state)
    if state.get("money", 0) < value or capacity == 0 or len(state.get("cow_inventory", [])) >= capacity:
        return state

    owner_id = state.get("id", "")
    purchased = {**cow, "owner_id": owner_id, "original_owner_id": cow.get("original_owner_id") or owner_id}
    state = add_cow_to_inventory(state, purchased)
    state = add_loss(state, value)
    return {**state, "cow_for_sale": generate_cow(rng)}


def sell_cow(state: GameState, cow_id: str) -> GameState:
    cow = find_cow(state, cow_id)
    if cow is None:
        return state
    value = get_cow_value(cow, is_being_sold=True)
    state = remove_cow_from_inventory(state, cow_id)
    state = add_revenue(state, value)
    cows_sold = dict(state.get("cows_sold", {}))
    cows_sold[cow["color"]] = cows_sold.get(cow["color"], 0) + 1
    state = {**state, "cows_sold": cows_sold}
    return show_notification(state, messages.cow_sold(cow["name"], value))


def change_cow_name(state: GameState, cow_id: str, name: str) -> GameState:
    return modify_cow(state, cow_id, lambda cow: {**cow, "name": name[:MAX_ANIMAL_NAME_LENGTH]})


def _hug(cow: Cow) -> Cow:
    if cow.get("happiness_boosts_today", 0) >= COW_MAXIMUM_HUGS_PER_DAY:
        return cow
    return {
        **cow,
        "happiness": min(1.0, cow["happiness"] + COW_HUG_BENEFIT),
        "happiness_boosts_today": cow.get("happiness_boosts_today", 0) + 1,
    }


def hug_cow(state: GameState, cow_id: str) -> GameState:
    """Make a cow happier, up to a daily limit of hugs."""
    return modify_cow(state, cow_id, _hug)


def change_cow_automatic_hug_state(state: GameState, cow_id: str, do_set: bool) -> GameState:
    """Attach or detach a hugging machine, moving it out of or into the inventory."""
    cow = find_cow(state, cow_id)
    if cow is None or bool(cow.get("is_using_hugging_machine")) == do_set:
        return state
    if do_set:
        if get_inventory_quantity(state.get("inventory", []), HUGGING_MACHINE_ITEM_ID) <= 0:
            return state
        state = decrement_item_from_inventory(state, HUGGING_MACHINE_ITEM_ID)
    else:
        if inventory_space_remaining(state) < 1:
            return state
        state = add_item_to_inventory(state, HUGGING_MACHINE_ITEM_ID)
    return modify_cow(state, cow_id, lambda c: {**c, "is_using_hugging_machine": do_set})


def change_cow_breeding_pen_resident(state: GameState, cow: Cow, do_add: bool) -> GameState:
    pen = dict(state.get("cow_breeding_pen", empty_breeding_pen()))
    slots = ("cow_id_1", "cow_id_2")
    if do_add:
        if cow["id"] in (pen["cow_id_1"], pen["cow_id_2"]):
            return state
        for slot in slots:
            if pen[slot] is None:
                pen[slot] = cow["id"]
                break
        else:
            return state
    else:
        if cow["id"] not in (pen["cow_id_1"], pen["cow_id_2"]):
            return state
        for slot in slots:
            if pen[slot] == cow["id"]:
                pen[slot] = None
        pen["days_until_birth"] = COW_GESTATION_PERIOD_DAYS
    return {**state, "cow_breeding_pen": pen}


def select_cow(state: GameState, cow_id: str) -> GameState:
    return {**state, "selected_cow_id": cow_id}


def offer_cow(state: GameState, cow_id: str) -> GameState:
    """Mark a cow as available for trade with peers."""
    if find_cow(state, cow_id) is None:
        return state
    return {**state, "cow_id_offered_for_trade": cow_id}


def withdraw_cow(state: GameState, cow_id: str) -> GameState:
    if state.get("cow_id_offered_for_trade") != cow_id:
        return state
    return {**state, "cow_id_offered_for_trade": ""}


def compute_cow_inventory_for_next_day(state: GameState) -> GameState:
    """Age cows, decay happiness and let hugging machines hug their cows."""
    cows = []
    for cow in state.get("cow_inventory", []):
        cow = {
            **cow,
            "days_old": cow.get("days_old", 0) + 1,
            "days_since_milking": cow.get("days_since_milking", 0) + 1,
            "days_since_producing_fertilizer": cow.get("days_since_producing_fertilizer", 0) + 1,
            "happiness": max(0.0, cow["happiness"] - COW_HUG_BENEFIT),
            "happiness_boosts_today": 0,
        }
        if cow.get("is_using_hugging_machine"):
            for _ in range(COW_MAXIMUM_HUGS_PER_DAY):
                cow = _hug(cow)
        cows.append(cow)
    return {**state, "cow_inventory": cows}


def process_feeding_cows(state: GameState) -> GameState:
    """Feed one Cow Feed per cow in inventory order; hungry cows lose weight."""
    cows = state.get("cow_inventory", [])
    if not cows:
        return state
    feed = get_inventory_quantity(state.get("inventory", []), COW_FEED_ITEM_ID)
    fed = min(feed, len(cows))

    new_cows = []
    for idx, cow in enumerate(cows):
        if idx < fed:
            multiplier = min(COW_WEIGHT_MULTIPLIER_MAXIMUM, cow["weight_multiplier"] + COW_WEIGHT_MULTIPLIER_FEED_BENEFIT)
        else:
            multiplier = max(COW_WEIGHT_MULTIPLIER_MINIMUM, cow["weight_multiplier"] - COW_WEIGHT_MULTIPLIER_FEED_BENEFIT)
        new_cows.append({**cow, "weight_multiplier": round(multiplier, 4)})

    state = {**state, "cow_inventory": new_cows}
    if fed:
        state = decrement_item_from_inventory(state, COW_FEED_ITEM_ID, fed)
    if fed < len(cows):
        state = show_notification(state, messages.OUT_OF_COW_FEED_MESSAGE, "warning")
    return state


def process_cow_attrition(state: GameState) -> GameState:
    """Cows starved down to the minimum weight run away."""
    for cow in list(state.get("cow_inventory", [])):
        if cow["weight_multiplier"] <= COW_WEIGHT_MULTIPLIER_MINIMUM:
            logger.debug("cow %s ran away", cow["id"])
            state = remove_cow_from_inventory(state, cow["id"])
            state = show_notification(state, messages.cow_ran_away(cow["name"]), "error")
    return state


def _process_cow_products(
    state: GameState,
    gender: str,
    counter_key: str,
    rate_fn: Callable[[Cow], int],
    item_fn: Callable[[Cow], str],
) -> tuple[GameState, dict[str, int]]:
    produced: dict[str, int] = {}
    catalog = default_catalog()
    for cow in state.get("cow_inventory", []):
        if cow["gender"] != gender or cow.get(counter_key, 0) < rate_fn(cow):
            continue
        if inventory_space_remaining(state) < 1:
            break
        item_id = item_fn(cow)
        state = add_item_to_inventory(state, item_id)
        state = modify_cow(state, cow["id"], lambda c: {**c, counter_key: 0})
        name = catalog.item(item_id).name
        produced[name] = produced.get(name, 0) + 1
    return state, produced


def process_milking_cows(state: GameState) -> GameState:
    """Milk every female cow that is due, with quality set by happiness."""
    state, produced = _process_cow_products(
        state, "female", "days_since_milking", get_cow_milk_rate, get_cow_milk_item_id
    )
    if produced:
        state = show_notification(state, messages.milks_produced(produced))
    return state


def process_cow_fertilizer_production(state: GameState) -> GameState:
    """Collect fertilizer from every male cow that is due."""
    state, produced = _process_cow_products(
        state,
        "male",
        "days_since_producing_fertilizer",
        get_cow_fertilizer_production_rate,
        get_cow_fertilizer_item_id,
    )
    if produced:
        state = show_notification(state, messages.fertilizer_produced(produced))
    return state


def _breed_offspring(state: GameState, parent_1: Cow, parent_2: Cow, rng: Generator) -> Cow:
    bloodline = {**parent_1.get("colors_in_bloodline", {}), **parent_2.get("colors_in_bloodline", {})}
    color = pick(rng, sorted(bloodline))
    owner_id = state.get("id", "")
    return generate_cow(
        rng,
        color=color,
        colors_in_bloodline=bloodline,
        base_weight=round((parent_1["base_weight"] + parent_2["base_weight"]) / 2),
        is_bred=True,
        owner_id=owner_id,
        original_owner_id=owner_id,
    )


def process_cow_breeding(state: GameState, rng: Generator) -> GameState:
    """
    A male and a female in the breeding pen produce a calf after the
    gestation period, as long as the cow pen has room.
    """
    pen = dict(state.get("cow_breeding_pen", empty_breeding_pen()))
    cow_1 = find_cow(state, pen["cow_id_1"]) if pen["cow_id_1"] else None
    cow_2 = find_cow(state, pen["cow_id_2"]) if pen["cow_id_2"] else None
    if cow_1 is None or cow_2 is None or cow_1["gender"] == cow_2["gender"]:
        if pen["days_until_birth"] != COW_GESTATION_PERIOD_DAYS:
            pen["days_until_birth"] = COW_GESTATION_PERIOD_DAYS
            state = {**state, "cow_breeding_pen": pen}
        return state

    days_until_birth = pen["days_until_birth"] - 1
    if days_until_birth > 0:
        return {**state, "cow_breeding_pen": {**pen, "days_until_birth": days_until_birth}}

    state = {**state, "cow_breeding_pen": {**pen, "days_until_birth": COW_GESTATION_PERIOD_DAYS}}
    if len(state.get("cow_inventory", [])) >= get_cow_pen_capacity(state):
        return state
    offspring = _breed_offspring(state, cow_1, cow_2, rng)
    state = add_cow_to_inventory(state, offspring)
    return show_notification(state, messages.cow_born(offspring["name"]), "success")
