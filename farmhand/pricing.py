from __future__ import annotations

import logging

from numpy.random import Generator

from farmhand import messages
from farmhand.catalog import Item, default_catalog
from farmhand.constants import (
    MAX_VALUE_ADJUSTMENT,
    MIN_VALUE_ADJUSTMENT,
    PRICE_EVENT_CHANCE,
    PRICE_EVENT_STANDARD_DURATION_DECREASE,
    GameState,
)
from farmhand.levels import get_shop_inventory
from farmhand.notifications import show_notification
from farmhand.utils import money_total, pick

logger = logging.getLogger(__name__)


def generate_value_adjustments(
    price_crashes: dict[str, dict],
    price_surges: dict[str, dict],
    rng: Generator,
) -> dict[str, float]:
    """
    Draw a price multiplier for every price-fluctuating item. Items under a
    crash or surge event are pinned to the minimum or maximum multiplier.
    """
    adjustments: dict[str, float] = {}
    for item in default_catalog().items.values():
        if not item.does_price_fluctuate:
            continue
        if item.id in price_crashes:
            adjustments[item.id] = MIN_VALUE_ADJUSTMENT
        elif item.id in price_surges:
            adjustments[item.id] = MAX_VALUE_ADJUSTMENT
        else:
            adjustments[item.id] = float(rng.uniform(MIN_VALUE_ADJUSTMENT, MAX_VALUE_ADJUSTMENT))
    return adjustments


def get_adjusted_item_value(value_adjustments: dict[str, float], item_id: str) -> float:
    item = default_catalog().item(item_id)
    return money_total(item.value * value_adjustments.get(item_id, 1.0))


def get_price_event_duration(item: Item) -> int:
    """Price events last about as long as the crop takes to grow."""
    if item.crop_timetable is None:
        return 1
    return max(1, item.crop_timetable.total - PRICE_EVENT_STANDARD_DURATION_DECREASE)


def create_price_event(item: Item, days_remaining: int | None = None) -> dict:
    if days_remaining is None:
        days_remaining = get_price_event_duration(item)
    return {"item_id": item.id, "days_remaining": int(days_remaining)}


def _unlocked_crop_ids(state: GameState) -> list[str]:
    """Return the crops grown from seeds the player can currently buy."""
    catalog = default_catalog()
    crop_ids = []
    for item_id in get_shop_inventory(state):
        item = catalog.item(item_id)
        if item.is_plantable_crop and item.grows_into is not None:
            crop_ids.append(item.grows_into)
    return crop_ids


def generate_price_events(
    state: GameState,
    rng: Generator,
    chance: float = PRICE_EVENT_CHANCE,
) -> GameState:
    """Possibly start a crash or surge for an unlocked crop without an active event."""
    if rng.random() >= chance:
        return state

    crashes = state.get("price_crashes", {})
    surges = state.get("price_surges", {})
    candidates = [crop_id for crop_id in _unlocked_crop_ids(state) if crop_id not in crashes and crop_id not in surges]
    if not candidates:
        return state

    item = default_catalog().item(pick(rng, candidates))
    event = create_price_event(item)
    if rng.random() < 0.5:
        logger.debug("price crash for %s (%s days)", item.id, event["days_remaining"])
        state = {**state, "price_crashes": {**crashes, item.id: event}}
        return show_notification(state, messages.price_crash(item.name), "warning")
    logger.debug("price surge for %s (%s days)", item.id, event["days_remaining"])
    state = {**state, "price_surges": {**surges, item.id: event}}
    return show_notification(state, messages.price_surge(item.name), "success")


def _count_down(events: dict[str, dict]) -> dict[str, dict]:
    out = {}
    for item_id, event in events.items():
        days_remaining = event["days_remaining"] - 1
        if days_remaining > 0:
            out[item_id] = {**event, "days_remaining": days_remaining}
    return out


def update_price_events(state: GameState) -> GameState:
    """Count down active price events and drop the ones that expired."""
    return {
        **state,
        "price_crashes": _count_down(state.get("price_crashes", {})),
        "price_surges": _count_down(state.get("price_surges", {})),
    }
