from __future__ import annotations

from farmhand import messages
from farmhand.catalog import Recipe, default_catalog
from farmhand.constants import GameState
from farmhand.inventory import (
    add_item_to_inventory,
    decrement_item_from_inventory,
    get_inventory_quantity,
    inventory_space_remaining,
)
from farmhand.levels import get_player_level
from farmhand.notifications import show_notification


def is_recipe_condition_met(state: GameState, recipe: Recipe) -> bool:
    condition = recipe.condition
    items_sold = state.get("items_sold", {})
    if any(items_sold.get(item_id, 0) < quantity for item_id, quantity in condition.items_sold.items()):
        return False
    if condition.purchased_smelter and not state.get("purchased_smelter"):
        return False
    return get_player_level(state) >= condition.min_level


def update_learned_recipes(state: GameState) -> GameState:
    """Learn every recipe whose condition is now met, announcing new ones."""
    learned = dict(state.get("learned_recipes", {}))
    newly_learned = []
    for recipe in default_catalog().recipes.values():
        if recipe.id in learned:
            continue
        if is_recipe_condition_met(state, recipe):
            learned[recipe.id] = True
            newly_learned.append(recipe)
    if not newly_learned:
        return state
    state = {**state, "learned_recipes": learned}
    for recipe in newly_learned:
        state = show_notification(state, messages.recipe_learned(recipe.name), "success")
    return state


def max_yield_of_recipe(recipe: Recipe, inventory: list[dict]) -> int:
    """Return how many times a recipe can be made from the given inventory."""
    if not recipe.ingredients:
        return 0
    return min(get_inventory_quantity(inventory, item_id) // quantity for item_id, quantity in recipe.ingredients.items())


def can_make_recipe(recipe: Recipe, inventory: list[dict], how_many: int = 1) -> bool:
    return how_many > 0 and max_yield_of_recipe(recipe, inventory) >= how_many


def make_recipe(state: GameState, recipe: Recipe | str, how_many: int = 1) -> GameState:
    """Consume a recipe's ingredients to produce it. No-op when ingredients are short."""
    if isinstance(recipe, str):
        recipe = default_catalog().recipe(recipe)
    inventory = state.get("inventory", [])
    if not can_make_recipe(recipe, inventory, how_many):
        return state

    consumed = sum(recipe.ingredients.values()) * how_many
    if inventory_space_remaining(state) + consumed < how_many:
        return state

    for item_id, quantity in recipe.ingredients.items():
        state = decrement_item_from_inventory(state, item_id, quantity * how_many)
    return add_item_to_inventory(state, recipe.id, how_many)
