from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from farmhand import messages
from farmhand.constants import GameState
from farmhand.notifications import show_notification
from farmhand.utils import money_total

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    reward_description: str
    condition: Callable[[GameState], bool]
    reward: Callable[[GameState], GameState]


def _money_reward(amount: float) -> Callable[[GameState], GameState]:
    def apply(state: GameState) -> GameState:
        return {**state, "money": money_total(state.get("money", 0), amount)}

    return apply


def _total(mapping: dict[str, int]) -> int:
    return sum(mapping.values())


ACHIEVEMENTS: tuple[Achievement, ...] = (
    Achievement(
        id="first-harvest",
        name="First Harvest",
        description="Harvest a crop.",
        reward_description="Reward: $100.",
        condition=lambda state: _total(state.get("crops_harvested", {})) >= 1,
        reward=_money_reward(100),
    ),
    Achievement(
        id="plant-a-hundred",
        name="Green Thumb",
        description="Harvest 100 crops.",
        reward_description="Reward: $1,000.",
        condition=lambda state: _total(state.get("crops_harvested", {})) >= 100,
        reward=_money_reward(1000),
    ),
    Achievement(
        id="purchase-cow-pen",
        name="Moo!",
        description="Purchase a cow pen.",
        reward_description="Reward: $500.",
        condition=lambda state: state.get("purchased_cow_pen", 0) > 0,
        reward=_money_reward(500),
    ),
    Achievement(
        id="first-recipe",
        name="Home Cooking",
        description="Learn a recipe.",
        reward_description="Reward: $250.",
        condition=lambda state: len(state.get("learned_recipes", {})) >= 1,
        reward=_money_reward(250),
    ),
    Achievement(
        id="daily-profit-1",
        name="Making Bank",
        description="Earn $10,000 profit in a single day.",
        reward_description="Reward: $1,000.",
        condition=lambda state: state.get("record_single_day_profit", 0) >= 10_000,
        reward=_money_reward(1000),
    ),
    Achievement(
        id="loan-paid-off",
        name="Debt Free",
        description="Take out a loan and pay it back.",
        reward_description="Reward: $500.",
        condition=lambda state: state.get("loans_taken_out", 0) > 0 and state.get("loan_balance", 0) == 0,
        reward=_money_reward(500),
    ),
)

ACHIEVEMENTS_BY_ID = {achievement.id: achievement for achievement in ACHIEVEMENTS}


def update_achievements(
    state: GameState,
    achievements: tuple[Achievement, ...] = ACHIEVEMENTS,
) -> GameState:
    """Complete every achievement whose condition now holds and grant its reward once."""
    completed = state.get("completed_achievements", {})
    for achievement in achievements:
        if achievement.id in completed or not achievement.condition(state):
            continue
        logger.debug("achievement completed: %s", achievement.id)
        state = achievement.reward(state)
        completed = {**completed, achievement.id: True}
        state = {**state, "completed_achievements": completed}
        state = show_notification(
            state,
            messages.achievement_completed(achievement.name, achievement.reward_description),
            "success",
        )
    return state
