from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import numpy as np
from numpy.random import Generator

from farmhand import messages
from farmhand.achievements import update_achievements
from farmhand.catalog import default_catalog
from farmhand.config import GameConfig, GameRules
from farmhand.constants import FIELD_MODES, GameState, ToolType
from farmhand.cows import (
    change_cow_automatic_hug_state,
    change_cow_breeding_pen_resident,
    change_cow_name,
    find_cow,
    hug_cow,
    offer_cow,
    purchase_cow,
    select_cow,
    sell_cow,
    withdraw_cow,
)
from farmhand.economy import adjust_loan
from farmhand.field import (
    clear_plot,
    fertilize_plot,
    harvest_plot,
    is_in_field,
    mine_plot,
    plant_in_plot,
    purchase_field,
    set_scarecrow,
    set_sprinkler,
    water_all_plots,
    water_plot_with_can,
)
from farmhand.levels import get_shop_inventory
from farmhand.notifications import show_notification
from farmhand.pipeline import compute_state_for_next_day
from farmhand.recipes import make_recipe
from farmhand.save_state import SaveError, load_game, save_game
from farmhand.shop import (
    purchase_combine,
    purchase_cow_pen,
    purchase_item,
    purchase_item_max,
    purchase_smelter,
    purchase_storage_expansion,
    sell_all_of_item,
    sell_item,
)
from farmhand.state import create_initial_state
from farmhand.tools import upgrade_tool
from farmhand.validation import validate_game_config

logger = logging.getLogger(__name__)


class InvalidActionError(ValueError):
    """Raised when a player action cannot be attempted at all."""


class Game:
    """A play session: the current state, its random source and the rules in effect."""

    def __init__(
        self,
        state: GameState,
        rng: Generator,
        rules: GameRules | None = None,
        save_path: str | Path | None = None,
    ) -> None:
        self.state = state
        self.rng = rng
        self.rules = rules or GameRules()
        self.save_path = Path(save_path) if save_path is not None else None

    @classmethod
    def new(cls, config: GameConfig | None = None, save_path: str | Path | None = None) -> "Game":
        """Start a new farm and run its first morning."""
        config = config or GameConfig()
        validate_game_config(config)
        rng = np.random.default_rng(config.seed)
        state = create_initial_state(config, rng)
        state = compute_state_for_next_day(state, rng, config.rules, is_first_day=True)
        return cls(state, rng, config.rules, save_path)

    @classmethod
    def load(cls, path: str | Path, config: GameConfig | None = None) -> "Game":
        """Resume a saved farm, continuing its random stream where the last save left it."""
        config = config or GameConfig()
        rng = np.random.default_rng(config.seed)
        state = load_game(path, config, rng)
        return cls(state, rng, config.rules, path)

    def dispatch(self, reducer: Callable[..., GameState], *args: Any) -> GameState:
        """Apply a reducer to the current state, then check achievements."""
        self.state = update_achievements(reducer(self.state, *args))
        return self.state

    def increment_day(self) -> GameState:
        """Advance to the next day and save. A failed save becomes an error notification."""
        state = compute_state_for_next_day(self.state, self.rng, self.rules)
        state = update_achievements(state)
        if self.save_path is not None:
            try:
                save_game(self.save_path, state, self.rng)
            except SaveError as exc:
                logger.warning("save failed: %s", exc)
                state = show_notification(state, messages.save_failed(str(exc)), "error")
            else:
                state = show_notification(state, messages.PROGRESS_SAVED_MESSAGE, "success")
        self.state = state
        return state

    def save(self) -> Path:
        if self.save_path is None:
            raise SaveError("no save path configured")
        return save_game(self.save_path, self.state, self.rng)

    # Field

    def _require_plot(self, x: int, y: int) -> None:
        if not is_in_field(self.state, x, y):
            raise InvalidActionError(f"({x}, {y}) is outside the field")

    def handle_item_select(self, item_id: str) -> GameState:
        """Select an inventory item and switch to the field mode it enables."""
        item = default_catalog().item(item_id)
        self.state = {
            **self.state,
            "selected_item_id": item_id,
            "field_mode": item.enables_field_mode or "observe",
            "hovered_plot_range_size": item.hovered_plot_range_size,
        }
        return self.state

    def handle_field_mode_select(self, field_mode: str) -> GameState:
        if field_mode not in FIELD_MODES:
            raise InvalidActionError(f"Unknown field mode: {field_mode}")
        self.state = {**self.state, "field_mode": field_mode}
        return self.state

    def handle_plot_click(self, x: int, y: int) -> GameState:
        """Apply the current field mode to a plot."""
        self._require_plot(x, y)
        mode = self.state.get("field_mode", "observe")
        selected = self.state.get("selected_item_id", "")
        if mode == "plant":
            return self.dispatch(plant_in_plot, x, y, selected)
        if mode == "harvest":
            return self.dispatch(harvest_plot, x, y)
        if mode == "cleanup":
            return self.dispatch(clear_plot, x, y, self.rng)
        if mode == "water":
            return self.dispatch(water_plot_with_can, x, y)
        if mode == "fertilize":
            return self.dispatch(fertilize_plot, x, y, selected)
        if mode == "set-scarecrow":
            return self.dispatch(set_scarecrow, x, y)
        if mode == "set-sprinkler":
            return self.dispatch(set_sprinkler, x, y)
        if mode == "mine":
            return self.dispatch(mine_plot, x, y, self.rng)
        return self.state

    def plant(self, x: int, y: int, seed_item_id: str) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(plant_in_plot, x, y, seed_item_id)

    def harvest(self, x: int, y: int) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(harvest_plot, x, y)

    def water(self, x: int, y: int) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(water_plot_with_can, x, y)

    def water_all(self) -> GameState:
        return self.dispatch(water_all_plots)

    def clear(self, x: int, y: int) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(clear_plot, x, y, self.rng)

    def fertilize(self, x: int, y: int, fertilizer_item_id: str) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(fertilize_plot, x, y, fertilizer_item_id)

    def place_scarecrow(self, x: int, y: int) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(set_scarecrow, x, y)

    def place_sprinkler(self, x: int, y: int) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(set_sprinkler, x, y)

    def mine(self, x: int, y: int) -> GameState:
        self._require_plot(x, y)
        return self.dispatch(mine_plot, x, y, self.rng)

    # Shop

    def _require_in_shop(self, item_id: str) -> None:
        if item_id not in get_shop_inventory(self.state):
            raise InvalidActionError(f"{item_id} is not sold in the shop")

    def buy(self, item_id: str, how_many: int = 1) -> GameState:
        self._require_in_shop(item_id)
        return self.dispatch(purchase_item, item_id, how_many)

    def buy_max(self, item_id: str) -> GameState:
        self._require_in_shop(item_id)
        return self.dispatch(purchase_item_max, item_id)

    def sell(self, item_id: str, how_many: int = 1) -> GameState:
        return self.dispatch(sell_item, item_id, how_many, self.rules.loan_garnishment_rate)

    def sell_all(self, item_id: str) -> GameState:
        return self.dispatch(sell_all_of_item, item_id, self.rules.loan_garnishment_rate)

    def buy_field(self, field_id: int) -> GameState:
        return self.dispatch(purchase_field, field_id)

    def buy_cow_pen(self, cow_pen_id: int) -> GameState:
        return self.dispatch(purchase_cow_pen, cow_pen_id)

    def buy_combine(self) -> GameState:
        return self.dispatch(purchase_combine)

    def buy_smelter(self) -> GameState:
        return self.dispatch(purchase_smelter)

    def expand_storage(self) -> GameState:
        return self.dispatch(purchase_storage_expansion)

    # Loans

    def take_loan(self, amount: float) -> GameState:
        if amount <= 0:
            raise InvalidActionError("loan amount must be positive")
        return self.dispatch(adjust_loan, amount)

    def repay_loan(self, amount: float) -> GameState:
        if amount <= 0:
            raise InvalidActionError("repayment must be positive")
        if amount > self.state.get("loan_balance", 0):
            raise InvalidActionError("repayment exceeds the loan balance")
        if amount > self.state.get("money", 0):
            raise InvalidActionError("not enough money to repay that much")
        return self.dispatch(adjust_loan, -amount)

    # Cows

    def _require_cow(self, cow_id: str) -> dict:
        cow = find_cow(self.state, cow_id)
        if cow is None:
            raise InvalidActionError(f"No cow with id {cow_id}")
        return cow

    def buy_cow(self) -> GameState:
        return self.dispatch(purchase_cow, self.state["cow_for_sale"], self.rng)

    def sell_cow(self, cow_id: str) -> GameState:
        self._require_cow(cow_id)
        return self.dispatch(sell_cow, cow_id)

    def hug_cow(self, cow_id: str) -> GameState:
        self._require_cow(cow_id)
        return self.dispatch(hug_cow, cow_id)

    def rename_cow(self, cow_id: str, name: str) -> GameState:
        self._require_cow(cow_id)
        return self.dispatch(change_cow_name, cow_id, name)

    def select_cow(self, cow_id: str) -> GameState:
        self._require_cow(cow_id)
        return self.dispatch(select_cow, cow_id)

    def set_automatic_hugging(self, cow_id: str, enabled: bool) -> GameState:
        self._require_cow(cow_id)
        return self.dispatch(change_cow_automatic_hug_state, cow_id, enabled)

    def set_breeding(self, cow_id: str, enabled: bool) -> GameState:
        cow = self._require_cow(cow_id)
        return self.dispatch(change_cow_breeding_pen_resident, cow, enabled)

    def offer_cow(self, cow_id: str) -> GameState:
        self._require_cow(cow_id)
        return self.dispatch(offer_cow, cow_id)

    def withdraw_cow(self, cow_id: str) -> GameState:
        return self.dispatch(withdraw_cow, cow_id)

    # Crafting

    def cook(self, recipe_id: str, how_many: int = 1) -> GameState:
        recipe = default_catalog().recipe(recipe_id)
        if recipe.id not in self.state.get("learned_recipes", {}):
            raise InvalidActionError(f"{recipe.name} has not been learned")
        return self.dispatch(make_recipe, recipe, how_many)

    def upgrade_tool(self, tool_type: ToolType) -> GameState:
        return self.dispatch(upgrade_tool, tool_type)
