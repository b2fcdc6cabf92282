import numpy as np
import pytest

from farmhand import messages
from farmhand.constants import COW_COLORS, COW_GESTATION_PERIOD_DAYS, RAINBOW_COW_COLOR
from farmhand.cows import (
    change_cow_automatic_hug_state,
    change_cow_breeding_pen_resident,
    change_cow_name,
    compute_cow_inventory_for_next_day,
    empty_breeding_pen,
    generate_cow,
    get_cow_value,
    get_cow_weight,
    hug_cow,
    offer_cow,
    process_cow_attrition,
    process_cow_breeding,
    process_cow_fertilizer_production,
    process_feeding_cows,
    process_milking_cows,
    purchase_cow,
    sell_cow,
    withdraw_cow,
)
from farmhand.inventory import get_inventory_quantity


def _make_cow(**overrides):
    cow = {
        "id": "cow-1",
        "name": "Bessie",
        "color": "blue",
        "colors_in_bloodline": {"blue": True},
        "gender": "female",
        "base_weight": 1000,
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
    return cow


def _make_state(cows=(), **overrides):
    state = {
        "id": "player-1",
        "money": 0,
        "inventory": [],
        "inventory_limit": 100,
        "cow_inventory": list(cows),
        "cow_breeding_pen": empty_breeding_pen(),
        "purchased_cow_pen": 1,
        "cow_id_offered_for_trade": "",
        "selected_cow_id": "",
        "cows_sold": {},
        "todays_revenue": 0,
        "todays_losses": 0,
        "todays_notifications": [],
    }
    state.update(overrides)
    return state


def test_generate_cow():
    cow = generate_cow(np.random.default_rng(0))
    assert cow["color"] in COW_COLORS + (RAINBOW_COW_COLOR,)
    assert cow["colors_in_bloodline"] == {cow["color"]: True}
    assert cow["gender"] in ("female", "male")
    assert 900 <= cow["base_weight"] <= 1210
    assert cow["days_old"] == 1
    assert cow["happiness"] == 0


def test_generate_cow_overrides_color():
    cow = generate_cow(np.random.default_rng(0), color="green", gender="male")
    assert cow["color"] == "green"
    assert cow["gender"] == "male"
    assert cow["colors_in_bloodline"] == {"green": True}


def test_cow_weight_and_value():
    cow = _make_cow(weight_multiplier=1.2)
    assert get_cow_weight(cow) == 1200
    assert get_cow_value(cow) == 1800


def test_cow_sale_value_peaks_at_maturity():
    """Sale value should be highest at the maturity age and fall off either side."""
    assert get_cow_value(_make_cow(days_old=20), is_being_sold=True) == 1500
    assert get_cow_value(_make_cow(days_old=1), is_being_sold=True) == 550
    assert get_cow_value(_make_cow(days_old=60), is_being_sold=True) == 500


def test_purchase_cow():
    cow = _make_cow()
    state = purchase_cow(_make_state(money=2000, cow_for_sale=cow), cow, np.random.default_rng(1))
    assert state["money"] == 500
    assert state["cow_inventory"][0]["owner_id"] == "player-1"
    assert state["cow_inventory"][0]["original_owner_id"] == "player-1"
    assert state["cow_for_sale"]["id"] != cow["id"]


def test_purchase_cow_requires_pen_room():
    cow = _make_cow()
    rng = np.random.default_rng(1)
    state = _make_state(money=2000, purchased_cow_pen=0)
    assert purchase_cow(state, cow, rng) is state
    full = _make_state([_make_cow(id=f"cow-{i}") for i in range(10)], money=2000)
    assert purchase_cow(full, _make_cow(id="cow-new"), rng) is full


def test_sell_cow_releases_everything():
    """Selling a cow should clear its pen slot, trade offer and hugging machine."""
    cow = _make_cow(days_old=20, is_using_hugging_machine=True)
    state = _make_state([cow], cow_id_offered_for_trade="cow-1", selected_cow_id="cow-1")
    state = change_cow_breeding_pen_resident(state, cow, True)
    state = sell_cow(state, "cow-1")
    assert state["cow_inventory"] == []
    assert state["money"] == 1500
    assert state["cows_sold"] == {"blue": 1}
    assert state["cow_breeding_pen"]["cow_id_1"] is None
    assert state["cow_id_offered_for_trade"] == ""
    assert state["selected_cow_id"] == ""
    assert get_inventory_quantity(state["inventory"], "hugging-machine") == 1
    assert state["todays_notifications"] == [{"message": messages.cow_sold("Bessie", 1500), "severity": "info"}]


def test_hug_cow_is_limited_per_day():
    state = _make_state([_make_cow()])
    for _ in range(4):
        state = hug_cow(state, "cow-1")
    cow = state["cow_inventory"][0]
    assert cow["happiness"] == pytest.approx(0.6)
    assert cow["happiness_boosts_today"] == 3


def test_change_cow_name_truncates():
    state = change_cow_name(_make_state([_make_cow()]), "cow-1", "A" * 30)
    assert state["cow_inventory"][0]["name"] == "A" * 20


def test_hugging_machine_moves_between_inventory_and_cow():
    state = _make_state([_make_cow()], inventory=[{"id": "hugging-machine", "quantity": 1}])
    state = change_cow_automatic_hug_state(state, "cow-1", True)
    assert state["inventory"] == []
    assert state["cow_inventory"][0]["is_using_hugging_machine"] is True
    state = change_cow_automatic_hug_state(state, "cow-1", False)
    assert state["inventory"] == [{"id": "hugging-machine", "quantity": 1}]
    assert state["cow_inventory"][0]["is_using_hugging_machine"] is False


def test_hugging_machine_requires_one_in_inventory():
    state = _make_state([_make_cow()])
    assert change_cow_automatic_hug_state(state, "cow-1", True) is state


def test_breeding_pen_holds_two_cows():
    cows = [_make_cow(id="a"), _make_cow(id="b", gender="male"), _make_cow(id="c")]
    state = _make_state(cows)
    for cow in cows:
        state = change_cow_breeding_pen_resident(state, cow, True)
    assert state["cow_breeding_pen"]["cow_id_1"] == "a"
    assert state["cow_breeding_pen"]["cow_id_2"] == "b"

    state = {**state, "cow_breeding_pen": {**state["cow_breeding_pen"], "days_until_birth": 2}}
    state = change_cow_breeding_pen_resident(state, cows[0], False)
    assert state["cow_breeding_pen"] == {"cow_id_1": None, "cow_id_2": "b", "days_until_birth": COW_GESTATION_PERIOD_DAYS}


def test_offer_and_withdraw_cow():
    state = offer_cow(_make_state([_make_cow()]), "cow-1")
    assert state["cow_id_offered_for_trade"] == "cow-1"
    assert offer_cow(state, "missing") is state
    state = withdraw_cow(state, "cow-1")
    assert state["cow_id_offered_for_trade"] == ""


def test_cows_age_and_lose_happiness():
    cows = [_make_cow(happiness=0.5), _make_cow(id="cow-2", happiness=0.5, is_using_hugging_machine=True)]
    state = compute_cow_inventory_for_next_day(_make_state(cows))
    plain, hugged = state["cow_inventory"]
    assert plain["days_old"] == 2
    assert plain["days_since_milking"] == 1
    assert plain["happiness"] == pytest.approx(0.3)
    assert hugged["happiness"] == pytest.approx(0.9)
    assert hugged["happiness_boosts_today"] == 3


def test_feeding_cows_with_limited_feed():
    """Cows are fed in order until the feed runs out."""
    state = _make_state(
        [_make_cow(), _make_cow(id="cow-2")],
        inventory=[{"id": "cow-feed", "quantity": 1}],
    )
    state = process_feeding_cows(state)
    fed, hungry = state["cow_inventory"]
    assert fed["weight_multiplier"] == pytest.approx(1.05)
    assert hungry["weight_multiplier"] == pytest.approx(0.95)
    assert state["inventory"] == []
    assert state["todays_notifications"] == [{"message": messages.OUT_OF_COW_FEED_MESSAGE, "severity": "warning"}]


def test_starving_cow_runs_away():
    state = _make_state([_make_cow(weight_multiplier=0.5), _make_cow(id="cow-2")])
    state = process_cow_attrition(state)
    assert [cow["id"] for cow in state["cow_inventory"]] == ["cow-2"]
    assert state["todays_notifications"] == [{"message": messages.cow_ran_away("Bessie"), "severity": "error"}]


def test_milking_depends_on_happiness():
    cows = [
        _make_cow(days_since_milking=7),
        _make_cow(id="cow-2", happiness=1.0, days_since_milking=3),
        _make_cow(id="cow-3", days_since_milking=6),
    ]
    state = process_milking_cows(_make_state(cows))
    assert get_inventory_quantity(state["inventory"], "milk-1") == 1
    assert get_inventory_quantity(state["inventory"], "milk-3") == 1
    assert [cow["days_since_milking"] for cow in state["cow_inventory"]] == [0, 0, 6]
    assert state["todays_notifications"] == [
        {"message": messages.milks_produced({"Grade C Milk": 1, "Grade A Milk": 1}), "severity": "info"}
    ]


def test_male_cows_produce_fertilizer():
    cows = [
        _make_cow(gender="male", days_since_producing_fertilizer=10),
        _make_cow(id="cow-2", gender="male", color="rainbow", days_since_producing_fertilizer=10),
        _make_cow(id="cow-3", days_since_producing_fertilizer=10),
    ]
    state = process_cow_fertilizer_production(_make_state(cows))
    assert get_inventory_quantity(state["inventory"], "fertilizer") == 1
    assert get_inventory_quantity(state["inventory"], "rainbow-fertilizer") == 1
    assert state["cow_inventory"][2]["days_since_producing_fertilizer"] == 10


def _breeding_state(days_until_birth, **overrides):
    mother = _make_cow(id="mother", base_weight=1000)
    father = _make_cow(
        id="father",
        gender="male",
        color="brown",
        colors_in_bloodline={"brown": True},
        base_weight=1200,
    )
    pen = {"cow_id_1": "mother", "cow_id_2": "father", "days_until_birth": days_until_birth}
    return _make_state([mother, father], cow_breeding_pen=pen, **overrides)


def test_breeding_counts_down():
    state = process_cow_breeding(_breeding_state(3), np.random.default_rng(2))
    assert state["cow_breeding_pen"]["days_until_birth"] == 2
    assert len(state["cow_inventory"]) == 2


def test_breeding_produces_offspring():
    state = process_cow_breeding(_breeding_state(1), np.random.default_rng(2))
    assert len(state["cow_inventory"]) == 3
    calf = state["cow_inventory"][2]
    assert calf["is_bred"] is True
    assert calf["color"] in ("blue", "brown")
    assert calf["colors_in_bloodline"] == {"blue": True, "brown": True}
    assert calf["base_weight"] == 1100
    assert calf["owner_id"] == "player-1"
    assert state["cow_breeding_pen"]["days_until_birth"] == COW_GESTATION_PERIOD_DAYS
    assert state["todays_notifications"] == [{"message": messages.cow_born(calf["name"]), "severity": "success"}]


def test_breeding_needs_pen_room():
    state = process_cow_breeding(_breeding_state(1, purchased_cow_pen=0), np.random.default_rng(2))
    assert len(state["cow_inventory"]) == 2
    assert state["cow_breeding_pen"]["days_until_birth"] == COW_GESTATION_PERIOD_DAYS


def test_breeding_needs_opposite_genders():
    """A same-gender pair should reset the countdown without a birth."""
    state = _breeding_state(2)
    state = {**state, "cow_inventory": [cow if cow["id"] == "mother" else {**cow, "gender": "female"} for cow in state["cow_inventory"]]}
    state = process_cow_breeding(state, np.random.default_rng(2))
    assert len(state["cow_inventory"]) == 2
    assert state["cow_breeding_pen"]["days_until_birth"] == COW_GESTATION_PERIOD_DAYS
