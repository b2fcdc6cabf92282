from __future__ import annotations

import math
from dataclasses import dataclass

from farmhand import messages
from farmhand.catalog import default_catalog
from farmhand.constants import INITIAL_SPRINKLER_RANGE, GameState
from farmhand.notifications import show_notification


@dataclass(frozen=True)
class LevelEntitlements:
    sprinkler_range: int
    items: tuple[str, ...]


def level_achieved(experience: float) -> int:
    """Return the player level earned for an experience total."""
    return int(math.floor(math.sqrt(max(0.0, experience)) / 10)) + 1


def get_level_entitlements(level: int) -> LevelEntitlements:
    """Return what the player has unlocked by a given level."""
    catalog = default_catalog()
    sprinkler_range = INITIAL_SPRINKLER_RANGE
    items = list(catalog.base_shop_inventory)
    for reward_level in sorted(catalog.levels):
        if reward_level > level:
            break
        reward = catalog.levels[reward_level]
        if reward.increases_sprinkler_range:
            sprinkler_range += 1
        if reward.unlocks_shop_item is not None and reward.unlocks_shop_item not in items:
            items.append(reward.unlocks_shop_item)
    return LevelEntitlements(sprinkler_range=sprinkler_range, items=tuple(items))


def get_player_level(state: GameState) -> int:
    return level_achieved(state.get("experience", 0))


def get_sprinkler_range(state: GameState) -> int:
    return get_level_entitlements(get_player_level(state)).sprinkler_range


def get_shop_inventory(state: GameState) -> tuple[str, ...]:
    return get_level_entitlements(get_player_level(state)).items


def process_level_up(state: GameState, old_level: int) -> GameState:
    """Notify the player of every level gained since ``old_level``."""
    catalog = default_catalog()
    new_level = get_player_level(state)
    sprinkler_range = get_level_entitlements(old_level).sprinkler_range
    for level in range(old_level + 1, new_level + 1):
        reward = catalog.levels.get(level)
        unlocked_name = None
        new_range = None
        if reward is not None:
            if reward.unlocks_shop_item is not None:
                unlocked_name = catalog.item(reward.unlocks_shop_item).name
            if reward.increases_sprinkler_range:
                sprinkler_range += 1
                new_range = sprinkler_range
        state = show_notification(state, messages.level_gained(level, unlocked_name, new_range), "success")
    return state
