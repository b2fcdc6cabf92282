"""Player-facing notification text."""

from __future__ import annotations

PROGRESS_SAVED_MESSAGE = "Progress saved!"
RAIN_MESSAGE = "It rained in the night, so all of your crops were watered!"
STORM_MESSAGE = "There was a storm in the night, but all of your crops were watered!"
STORM_DESTROYS_SCARECROWS_MESSAGE = (
    "There was a storm in the night! All of your crops were watered, but your scarecrows were destroyed."
)
OUT_OF_COW_FEED_MESSAGE = "You are out of Cow Feed! Some of your cows went hungry."
INVENTORY_FULL_MESSAGE = "Your inventory is full!"
LOAN_PAYOFF_MESSAGE = "You paid off your loan!"


def loan_increased(balance: float) -> str:
    return f"You took out a loan. Your balance is now ${balance:,.2f}."


def loan_garnished(amount: float) -> str:
    return f"${amount:,.2f} of your sale went toward your loan."


def loan_balance(balance: float) -> str:
    return f"Your loan balance has grown to ${balance:,.2f}."


def crow_attacked(crop_name: str) -> str:
    return f"Oh no! A crow ate one of your {crop_name} plants."


def price_crash(item_name: str) -> str:
    return f"{item_name} prices have bottomed out! Avoid selling them until prices return to normal."


def price_surge(item_name: str) -> str:
    return f"{item_name} prices are at their peak! Sell them while you can."


def cow_pen_purchased(cows: int) -> str:
    return f"You purchased a cow pen! You can now hold up to {cows} cows."


def cow_born(cow_name: str) -> str:
    return f"{cow_name} was born!"


def cow_ran_away(cow_name: str) -> str:
    return f"{cow_name} ran away because it was underfed."


def cow_sold(cow_name: str, value: float) -> str:
    return f"You sold {cow_name} for ${value:,.2f}."


def milks_produced(counts: dict[str, int]) -> str:
    lines = "\n".join(f"  {name} x {quantity}" for name, quantity in counts.items())
    return f"Your cows produced milk:\n{lines}"


def fertilizer_produced(counts: dict[str, int]) -> str:
    lines = "\n".join(f"  {name} x {quantity}" for name, quantity in counts.items())
    return f"Your cows produced fertilizer:\n{lines}"


def level_gained(level: int, unlocked_item_name: str | None = None, sprinkler_range: int | None = None) -> str:
    message = f"You reached level {level}!"
    if unlocked_item_name is not None:
        message += f" {unlocked_item_name} is now available in the shop."
    if sprinkler_range is not None:
        message += f" Sprinkler range increased to {sprinkler_range}."
    return message


def recipe_learned(recipe_name: str) -> str:
    return f"You learned a new recipe: {recipe_name}!"


def tool_upgraded(tool_name: str, level: str) -> str:
    return f"Your {tool_name} was upgraded to {level}!"


def achievement_completed(name: str, reward_description: str) -> str:
    return f'Achievement "{name}" completed! {reward_description}'


def record_single_day_profit(profit: float) -> str:
    return f"New record single-day profit: ${profit:,.2f}!"


def record_seven_day_profit(profit: float) -> str:
    return f"New record seven-day profit: ${profit:,.2f}!"


def storage_expanded(limit: int) -> str:
    return f"Your storage now holds {limit} items."


def purchased_equipment(name: str) -> str:
    return f"You purchased a {name}!"


def save_failed(error: str) -> str:
    return f"Your progress could not be saved: {error}"
