from farmhand import messages
from farmhand.config import GameRules
from farmhand.crops import get_crop_from_item_id
from farmhand.pipeline import compute_state_for_next_day, next_day_stages


def _with_crop(state, x=0, y=0, **overrides):
    field = [list(row) for row in state["field"]]
    field[y][x] = {**get_crop_from_item_id("carrot"), **overrides}
    return {**state, "field": field}


def test_stage_order(stub_rng):
    names = [name for name, _ in next_day_stages(stub_rng(), GameRules())]
    assert names == [
        "rotate_notification_logs",
        "compute_cow_inventory_for_next_day",
        "process_nerfs",
        "process_field",
        "process_combine",
        "reset_was_shoveled",
        "process_sprinklers",
        "process_weather",
        "process_feeding_cows",
        "process_cow_attrition",
        "process_milking_cows",
        "process_cow_fertilizer_production",
        "process_cow_breeding",
        "update_price_events",
        "update_financial_records",
        "update_inventory_records_for_next_day",
        "generate_price_events",
        "apply_loan_interest",
    ]


def test_first_day_only_ages_field(new_state, stub_rng):
    """The first morning should only grow crops and run sprinklers."""
    state = _with_crop(new_state, was_watered_today=True)
    state = {**state, "todays_notifications": [{"message": "welcome", "severity": "info"}], "loan_balance": 100}
    state = compute_state_for_next_day(state, stub_rng(), is_first_day=True)
    assert state["day_count"] == 1
    assert state["field"][0][0]["days_watered"] == 1
    assert state["todays_notifications"] == [{"message": "welcome", "severity": "info"}]
    assert state["loan_balance"] == 100


def test_quiet_day(new_state, stub_rng):
    """A day without random events should still age crops and roll the books."""
    state = _with_crop(new_state, was_watered_today=True)
    state = {**state, "todays_notifications": [{"message": "yesterday", "severity": "info"}], "todays_revenue": 40}
    state = compute_state_for_next_day(state, stub_rng())
    assert state["day_count"] == 1
    crop = state["field"][0][0]
    assert crop["days_watered"] == 1
    assert crop["was_watered_today"] is False
    assert state["notification_log"][0] == {"day": 1, "notifications": {"info": ["yesterday"]}}
    assert state["historical_daily_revenues"] == [40]
    assert state["todays_revenue"] == 0
    assert state["cow_for_sale"]["id"] != new_state["cow_for_sale"]["id"]
    assert state["price_crashes"] == {}
    assert state["price_surges"] == {}


def test_loan_interest_accrues(new_state, stub_rng):
    state = compute_state_for_next_day({**new_state, "loan_balance": 100}, stub_rng())
    assert state["loan_balance"] == 103
    assert {"message": messages.loan_balance(103), "severity": "warning"} in state["todays_notifications"]


def test_rules_drive_crows_and_rain(new_state, stub_rng):
    state = _with_crop(new_state)
    rules = GameRules(crow_chance=1.0, precipitation_chance=0.0)
    state = compute_state_for_next_day(state, stub_rng(), rules)
    assert state["field"][0][0] is None
    assert {"message": messages.crow_attacked("Carrot"), "severity": "error"} in state["todays_notifications"]


def test_rain_waters_after_growth(new_state, stub_rng):
    """Rain should water crops for the coming day, not count toward today's growth."""
    state = _with_crop(new_state)
    rules = GameRules(crow_chance=0.0, precipitation_chance=1.0)
    state = compute_state_for_next_day(state, stub_rng(), rules)
    crop = state["field"][0][0]
    assert crop["days_watered"] == 0
    assert crop["was_watered_today"] is True
    assert {"message": messages.RAIN_MESSAGE, "severity": "info"} in state["todays_notifications"]
