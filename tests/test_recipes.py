from farmhand import messages
from farmhand.catalog import Recipe, RecipeCondition
from farmhand.recipes import can_make_recipe, make_recipe, max_yield_of_recipe, update_learned_recipes

SOUP = Recipe(
    id="carrot-soup",
    name="Carrot Soup",
    recipe_type="kitchen",
    ingredients={"carrot": 2},
    condition=RecipeCondition(),
)


def test_make_recipe_consumes_ingredients():
    state = make_recipe({"inventory": [{"id": "carrot", "quantity": 3}]}, SOUP)
    assert state["inventory"] == [{"id": "carrot", "quantity": 1}, {"id": "carrot-soup", "quantity": 1}]


def test_make_recipe_without_ingredients_is_noop():
    state = {"inventory": [{"id": "carrot", "quantity": 1}]}
    assert make_recipe(state, SOUP) == state


def test_make_recipe_by_id():
    state = make_recipe({"inventory": [{"id": "carrot", "quantity": 8}]}, "carrot-soup", 2)
    assert state["inventory"] == [{"id": "carrot-soup", "quantity": 2}]


def test_max_yield():
    inventory = [{"id": "carrot", "quantity": 7}]
    assert max_yield_of_recipe(SOUP, inventory) == 3
    assert can_make_recipe(SOUP, inventory, 3)
    assert not can_make_recipe(SOUP, inventory, 4)


def test_update_learned_recipes():
    state = {
        "items_sold": {"carrot": 10, "pumpkin": 49},
        "experience": 0,
        "learned_recipes": {},
        "todays_notifications": [],
    }
    state = update_learned_recipes(state)
    assert state["learned_recipes"] == {"carrot-soup": True}
    assert state["todays_notifications"] == [
        {"message": messages.recipe_learned("Carrot Soup"), "severity": "success"}
    ]
    assert update_learned_recipes(state) is state


def test_forge_recipes_need_smelter_and_level():
    state = {"items_sold": {}, "experience": 0, "purchased_smelter": 1, "learned_recipes": {}}
    learned = update_learned_recipes(state)["learned_recipes"]
    assert set(learned) == {"bronze-ingot", "iron-ingot", "silver-ingot"}

    learned = update_learned_recipes({**state, "experience": 8100})["learned_recipes"]
    assert "gold-ingot" in learned
