from __future__ import annotations

import logging

from farmhand import messages
from farmhand.constants import (
    DAILY_FINANCIAL_HISTORY_RECORD_LENGTH,
    LOAN_INTEREST_RATE,
    GameState,
)
from farmhand.inventory import get_inventory_quantity_map
from farmhand.notifications import show_notification
from farmhand.utils import money_total

logger = logging.getLogger(__name__)


def add_revenue(state: GameState, amount: float) -> GameState:
    """Credit money and count it toward today's revenue."""
    return {
        **state,
        "money": money_total(state.get("money", 0), amount),
        "todays_revenue": money_total(state.get("todays_revenue", 0), amount),
    }


def add_loss(state: GameState, amount: float) -> GameState:
    """Debit money and count it toward today's losses (stored as a negative number)."""
    return {
        **state,
        "money": money_total(state.get("money", 0), -amount),
        "todays_losses": money_total(state.get("todays_losses", 0), -amount),
    }


def adjust_loan(state: GameState, adjustment_amount: float) -> GameState:
    """
    Move money and loan balance together. A positive amount borrows, a
    negative amount repays.
    """
    loan_balance = money_total(state.get("loan_balance", 0), adjustment_amount)
    state = {
        **state,
        "money": money_total(state.get("money", 0), adjustment_amount),
        "loan_balance": loan_balance,
    }
    if adjustment_amount > 0:
        state = {**state, "loans_taken_out": state.get("loans_taken_out", 0) + 1}
        state = show_notification(state, messages.loan_increased(loan_balance))
    elif adjustment_amount < 0 and loan_balance == 0:
        state = show_notification(state, messages.LOAN_PAYOFF_MESSAGE, "success")
    return state


def apply_loan_interest(state: GameState, interest_rate: float = LOAN_INTEREST_RATE) -> GameState:
    balance = state.get("loan_balance", 0)
    if balance <= 0:
        return state
    new_balance = money_total(balance * (1 + interest_rate))
    logger.debug("loan interest applied: %s -> %s", balance, new_balance)
    state = {**state, "loan_balance": new_balance}
    return show_notification(state, messages.loan_balance(new_balance), "warning")


def update_financial_records(state: GameState) -> GameState:
    """
    Roll today's revenue and losses into the seven-day history, update
    profit records and reset today's counters.
    """
    todays_revenue = state.get("todays_revenue", 0)
    todays_losses = state.get("todays_losses", 0)
    revenues = [todays_revenue, *state.get("historical_daily_revenues", [])][:DAILY_FINANCIAL_HISTORY_RECORD_LENGTH]
    losses = [todays_losses, *state.get("historical_daily_losses", [])][:DAILY_FINANCIAL_HISTORY_RECORD_LENGTH]

    single_day_profit = money_total(todays_revenue, todays_losses)
    seven_day_profit = money_total(*revenues, *losses)

    record_single = state.get("record_single_day_profit", 0)
    record_seven = state.get("record_seven_day_profit", 0)

    state = {
        **state,
        "historical_daily_revenues": revenues,
        "historical_daily_losses": losses,
        "todays_revenue": 0,
        "todays_losses": 0,
        "todays_purchases": {},
    }
    if single_day_profit > record_single:
        state = {**state, "record_single_day_profit": single_day_profit}
        state = show_notification(state, messages.record_single_day_profit(single_day_profit), "success")
    if seven_day_profit > record_seven:
        state = {**state, "record_seven_day_profit": seven_day_profit}
        state = show_notification(state, messages.record_seven_day_profit(seven_day_profit), "success")
    return state


def update_inventory_records_for_next_day(state: GameState) -> GameState:
    """Snapshot the inventory so the next day can report what changed."""
    return {**state, "todays_starting_inventory": get_inventory_quantity_map(state.get("inventory", []))}
