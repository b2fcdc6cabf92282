from __future__ import annotations

import logging

from numpy.random import Generator

from farmhand import messages
from farmhand.catalog import default_catalog
from farmhand.constants import CROW_CHANCE, PRECIPITATION_CHANCE, STORM_CHANCE, GameState
from farmhand.field import iter_plots, remove_field_plot_at, water_all_plots
from farmhand.notifications import show_notification
from farmhand.utils import pick

logger = logging.getLogger(__name__)


def _has_scarecrow(state: GameState) -> bool:
    return any(plot["type"] == "scarecrow" for _, _, plot in iter_plots(state))


def apply_precipitation(state: GameState, rng: Generator, storm_chance: float = STORM_CHANCE) -> GameState:
    """Rain waters every crop. A storm also destroys every scarecrow."""
    if rng.random() < storm_chance:
        if _has_scarecrow(state):
            field = [
                [None if plot is not None and plot["type"] == "scarecrow" else plot for plot in row]
                for row in state["field"]
            ]
            state = {**state, "field": field}
            state = show_notification(state, messages.STORM_DESTROYS_SCARECROWS_MESSAGE, "error")
        else:
            state = show_notification(state, messages.STORM_MESSAGE)
    else:
        state = show_notification(state, messages.RAIN_MESSAGE)
    return water_all_plots(state)


def process_weather(
    state: GameState,
    rng: Generator,
    precipitation_chance: float = PRECIPITATION_CHANCE,
    storm_chance: float = STORM_CHANCE,
) -> GameState:
    if rng.random() < precipitation_chance:
        logger.debug("precipitation on day %s", state.get("day_count"))
        return apply_precipitation(state, rng, storm_chance)
    return state


def process_nerfs(state: GameState, rng: Generator, crow_chance: float = CROW_CHANCE) -> GameState:
    """A crow may eat one random crop unless a scarecrow guards the field."""
    if _has_scarecrow(state):
        return state
    crops = [(x, y, plot) for x, y, plot in iter_plots(state) if plot["type"] == "crop"]
    if not crops or rng.random() >= crow_chance:
        return state
    x, y, crop = pick(rng, crops)
    logger.debug("crow attacked (%s, %s)", x, y)
    state = remove_field_plot_at(state, x, y)
    return show_notification(state, messages.crow_attacked(default_catalog().item(crop["item_id"]).name), "error")
