from farmhand import messages
from farmhand.crops import get_crop_from_item_id
from farmhand.field import create_new_field
from farmhand.weather import apply_precipitation, process_nerfs, process_weather


def _make_state(*plots):
    field = create_new_field(2, 2)
    for x, y, plot in plots:
        field[y][x] = plot
    return {"field": field, "todays_notifications": [], "day_count": 1}


SCARECROW = {"type": "scarecrow", "item_id": "scarecrow"}


def test_rain_waters_every_crop(stub_rng):
    state = _make_state((0, 0, get_crop_from_item_id("carrot")), (1, 1, get_crop_from_item_id("pumpkin")))
    state = apply_precipitation(state, stub_rng(randoms=[0.5]))
    assert state["field"][0][0]["was_watered_today"] is True
    assert state["field"][1][1]["was_watered_today"] is True
    assert state["todays_notifications"] == [{"message": messages.RAIN_MESSAGE, "severity": "info"}]


def test_storm_destroys_scarecrows(stub_rng):
    state = _make_state((0, 0, get_crop_from_item_id("carrot")), (1, 0, SCARECROW))
    state = apply_precipitation(state, stub_rng(randoms=[0.05]))
    assert state["field"][0][1] is None
    assert state["field"][0][0]["was_watered_today"] is True
    assert state["todays_notifications"] == [
        {"message": messages.STORM_DESTROYS_SCARECROWS_MESSAGE, "severity": "error"}
    ]


def test_storm_without_scarecrows(stub_rng):
    state = apply_precipitation(_make_state(), stub_rng(randoms=[0.05]))
    assert state["todays_notifications"] == [{"message": messages.STORM_MESSAGE, "severity": "info"}]


def test_dry_day_changes_nothing(stub_rng):
    state = _make_state((0, 0, get_crop_from_item_id("carrot")))
    assert process_weather(state, stub_rng(randoms=[0.9])) is state


def test_scarecrow_keeps_crows_away(stub_rng):
    """A scarecrow anywhere in the field should stop crow attacks."""
    state = _make_state((0, 0, get_crop_from_item_id("carrot")), (1, 1, SCARECROW))
    assert process_nerfs(state, stub_rng(randoms=[0.0])) is state


def test_crow_eats_a_crop(stub_rng):
    state = _make_state((0, 0, get_crop_from_item_id("carrot")), (1, 0, get_crop_from_item_id("pumpkin")))
    state = process_nerfs(state, stub_rng(randoms=[0.1], integers=[1]))
    assert state["field"][0][0] is not None
    assert state["field"][0][1] is None
    assert state["todays_notifications"] == [{"message": messages.crow_attacked("Pumpkin"), "severity": "error"}]


def test_crow_misses(stub_rng):
    state = _make_state((0, 0, get_crop_from_item_id("carrot")))
    assert process_nerfs(state, stub_rng(randoms=[0.5])) is state
