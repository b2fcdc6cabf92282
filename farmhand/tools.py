from __future__ import annotations

from farmhand import messages
from farmhand.constants import TOOL_LEVELS, TOOL_TYPES, TOOL_UPGRADE_INGREDIENTS, GameState, ToolLevel, ToolType
from farmhand.inventory import decrement_item_from_inventory, get_inventory_quantity
from farmhand.notifications import show_notification


def default_tool_levels() -> dict[str, ToolLevel]:
    return {tool: "default" for tool in TOOL_TYPES}


def get_tool_level(state: GameState, tool_type: ToolType) -> ToolLevel:
    return state.get("tool_levels", {}).get(tool_type, "default")


def next_tool_level(level: ToolLevel) -> ToolLevel | None:
    idx = TOOL_LEVELS.index(level)
    if idx + 1 >= len(TOOL_LEVELS):
        return None
    return TOOL_LEVELS[idx + 1]


def can_upgrade_tool(state: GameState, tool_type: ToolType) -> bool:
    target = next_tool_level(get_tool_level(state, tool_type))
    if target is None:
        return False
    inventory = state.get("inventory", [])
    return all(
        get_inventory_quantity(inventory, item_id) >= quantity
        for item_id, quantity in TOOL_UPGRADE_INGREDIENTS[target].items()
    )


def upgrade_tool(state: GameState, tool_type: ToolType) -> GameState:
    """Spend ingots to raise a tool to its next level. No-op when not possible."""
    if tool_type not in TOOL_TYPES:
        raise ValueError(f"Unknown tool: {tool_type}")
    if not can_upgrade_tool(state, tool_type):
        return state
    target = next_tool_level(get_tool_level(state, tool_type))
    for item_id, quantity in TOOL_UPGRADE_INGREDIENTS[target].items():
        state = decrement_item_from_inventory(state, item_id, quantity)
    state = {**state, "tool_levels": {**default_tool_levels(), **state.get("tool_levels", {}), tool_type: target}}
    return show_notification(state, messages.tool_upgraded(tool_type.replace("_", " "), target), "success")
