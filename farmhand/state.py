from __future__ import annotations

import uuid

import numpy as np
from numpy.random import Generator

from farmhand.config import GameConfig
from farmhand.constants import GameState
from farmhand.cows import empty_breeding_pen, generate_cow
from farmhand.field import create_new_field
from farmhand.pricing import generate_value_adjustments
from farmhand.tools import default_tool_levels

# Keys written to a save file. Everything else is session state rebuilt on load.
# Today's notifications are kept so the next day can archive them.
PERSISTED_KEYS: tuple[str, ...] = (
    "id",
    "day_count",
    "money",
    "experience",
    "field",
    "purchased_field",
    "inventory",
    "inventory_limit",
    "cow_inventory",
    "cow_for_sale",
    "cow_breeding_pen",
    "cow_id_offered_for_trade",
    "purchased_cow_pen",
    "purchased_combine",
    "purchased_smelter",
    "cows_sold",
    "items_sold",
    "crops_harvested",
    "learned_recipes",
    "completed_achievements",
    "tool_levels",
    "value_adjustments",
    "price_crashes",
    "price_surges",
    "loan_balance",
    "loans_taken_out",
    "todays_revenue",
    "todays_losses",
    "todays_purchases",
    "todays_starting_inventory",
    "historical_daily_revenues",
    "historical_daily_losses",
    "record_single_day_profit",
    "record_seven_day_profit",
    "todays_notifications",
    "notification_log",
    "latest_peer_messages",
)


def create_initial_state(config: GameConfig | None = None, rng: Generator | None = None) -> GameState:
    """Build the state of a brand new farm."""
    config = config or GameConfig()
    if rng is None:
        rng = np.random.default_rng(config.seed)
    return {
        "id": str(uuid.UUID(bytes=rng.bytes(16), version=4)),
        "day_count": 0,
        "money": float(config.starting_money),
        "experience": 0,
        "field": create_new_field(config.field.rows, config.field.columns),
        "purchased_field": 0,
        "inventory": [],
        "inventory_limit": config.inventory_limit,
        "field_mode": "observe",
        "selected_item_id": "",
        "hovered_plot_range_size": 0,
        "selected_cow_id": "",
        "cow_inventory": [],
        "cow_for_sale": generate_cow(rng),
        "cow_breeding_pen": empty_breeding_pen(),
        "cow_id_offered_for_trade": "",
        "purchased_cow_pen": 0,
        "purchased_combine": 0,
        "purchased_smelter": 0,
        "cows_sold": {},
        "items_sold": {},
        "crops_harvested": {},
        "learned_recipes": {},
        "completed_achievements": {},
        "tool_levels": default_tool_levels(),
        "value_adjustments": generate_value_adjustments({}, {}, rng),
        "price_crashes": {},
        "price_surges": {},
        "loan_balance": 0,
        "loans_taken_out": 0,
        "todays_revenue": 0,
        "todays_losses": 0,
        "todays_purchases": {},
        "todays_starting_inventory": {},
        "historical_daily_revenues": [],
        "historical_daily_losses": [],
        "record_single_day_profit": 0,
        "record_seven_day_profit": 0,
        "todays_notifications": [],
        "notification_log": [],
        "peers": {},
        "latest_peer_messages": [],
        "pending_peer_messages": [],
    }


def reduce_by_persisted_keys(state: GameState) -> GameState:
    """Return only the parts of a state that belong in a save file."""
    return {key: state[key] for key in PERSISTED_KEYS if key in state}
