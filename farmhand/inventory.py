from __future__ import annotations

from farmhand.constants import GameState


def inventory_space_consumed(inventory: list[dict]) -> int:
    return sum(int(entry["quantity"]) for entry in inventory)


def inventory_space_remaining(state: GameState) -> float:
    """Return free inventory slots; unlimited storage reports infinity."""
    limit = state.get("inventory_limit", -1)
    if limit == -1:
        return float("inf")
    return max(0, limit - inventory_space_consumed(state.get("inventory", [])))


def does_inventory_have_space(state: GameState, how_many: int = 1) -> bool:
    return inventory_space_remaining(state) >= how_many


def get_inventory_quantity(inventory: list[dict], item_id: str) -> int:
    for entry in inventory:
        if entry["id"] == item_id:
            return int(entry["quantity"])
    return 0


def get_inventory_quantity_map(inventory: list[dict]) -> dict[str, int]:
    return {entry["id"]: int(entry["quantity"]) for entry in inventory}


def add_item_to_inventory(
    state: GameState,
    item_id: str,
    how_many: int = 1,
    allow_overage: bool = False,
) -> GameState:
    """
    Add up to ``how_many`` of an item, limited by remaining storage unless
    ``allow_overage`` is set. New entries are appended to the inventory.
    """
    to_add = how_many if allow_overage else min(how_many, inventory_space_remaining(state))
    to_add = int(to_add)
    if to_add <= 0:
        return state

    inventory = [dict(entry) for entry in state.get("inventory", [])]
    for entry in inventory:
        if entry["id"] == item_id:
            entry["quantity"] += to_add
            break
    else:
        inventory.append({"id": item_id, "quantity": to_add})
    return {**state, "inventory": inventory}


def decrement_item_from_inventory(state: GameState, item_id: str, how_many: int = 1) -> GameState:
    """Remove up to ``how_many`` of an item, dropping entries that reach zero."""
    inventory = []
    for entry in state.get("inventory", []):
        if entry["id"] != item_id:
            inventory.append(entry)
            continue
        remaining = int(entry["quantity"]) - how_many
        if remaining > 0:
            inventory.append({**entry, "quantity": remaining})
    return {**state, "inventory": inventory}
