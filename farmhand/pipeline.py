from __future__ import annotations

import logging
from typing import Callable

from numpy.random import Generator

from farmhand.config import GameRules
from farmhand.constants import GameState
from farmhand.cows import (
    compute_cow_inventory_for_next_day,
    generate_cow,
    process_cow_attrition,
    process_cow_breeding,
    process_cow_fertilizer_production,
    process_feeding_cows,
    process_milking_cows,
)
from farmhand.economy import apply_loan_interest, update_financial_records, update_inventory_records_for_next_day
from farmhand.field import process_combine, process_field, process_sprinklers, reset_was_shoveled
from farmhand.notifications import rotate_notification_logs
from farmhand.pricing import generate_price_events, generate_value_adjustments, update_price_events
from farmhand.weather import process_nerfs, process_weather

logger = logging.getLogger(__name__)

Stage = Callable[[GameState], GameState]


def next_day_stages(rng: Generator, rules: GameRules) -> list[tuple[str, Stage]]:
    """Return the ordered reducers that advance the farm by one day."""
    return [
        ("rotate_notification_logs", rotate_notification_logs),
        ("compute_cow_inventory_for_next_day", compute_cow_inventory_for_next_day),
        ("process_nerfs", lambda state: process_nerfs(state, rng, rules.crow_chance)),
        ("process_field", process_field),
        ("process_combine", process_combine),
        ("reset_was_shoveled", reset_was_shoveled),
        ("process_sprinklers", process_sprinklers),
        (
            "process_weather",
            lambda state: process_weather(state, rng, rules.precipitation_chance, rules.storm_chance),
        ),
        ("process_feeding_cows", process_feeding_cows),
        ("process_cow_attrition", process_cow_attrition),
        ("process_milking_cows", process_milking_cows),
        ("process_cow_fertilizer_production", process_cow_fertilizer_production),
        ("process_cow_breeding", lambda state: process_cow_breeding(state, rng)),
        ("update_price_events", update_price_events),
        ("update_financial_records", update_financial_records),
        ("update_inventory_records_for_next_day", update_inventory_records_for_next_day),
        ("generate_price_events", lambda state: generate_price_events(state, rng, rules.price_event_chance)),
        ("apply_loan_interest", lambda state: apply_loan_interest(state, rules.loan_interest_rate)),
    ]


def first_day_stages() -> list[tuple[str, Stage]]:
    return [
        ("process_field", process_field),
        ("process_sprinklers", process_sprinklers),
    ]


def compute_state_for_next_day(
    state: GameState,
    rng: Generator,
    rules: GameRules | None = None,
    is_first_day: bool = False,
) -> GameState:
    """
    Advance the farm by one day. The day counter, the cow for sale and the
    day's prices are refreshed before the daily reducers run in order.
    """
    rules = rules or GameRules()
    stages = first_day_stages() if is_first_day else next_day_stages(rng, rules)

    state = {
        **state,
        "day_count": state.get("day_count", 0) + 1,
        "cow_for_sale": generate_cow(rng),
        "value_adjustments": generate_value_adjustments(
            state.get("price_crashes", {}),
            state.get("price_surges", {}),
            rng,
        ),
    }
    for name, stage in stages:
        logger.debug("day %s: %s", state["day_count"], name)
        state = stage(state)
    return state
