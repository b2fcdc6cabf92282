from __future__ import annotations

from farmhand.catalog import default_catalog
from farmhand.config import GameConfig, GameRules
from farmhand.constants import PURCHASEABLE_COW_PENS, PURCHASEABLE_FIELD_SIZES, TOOL_LEVELS, TOOL_TYPES, GameState


class ValidationError(ValueError):
    """Raised when input data is logically invalid."""


def validate_game_config(cfg: GameConfig) -> None:
    """Validate configuration invariants before a game starts."""
    _ensure_non_negative(cfg.starting_money, "starting_money")
    if cfg.field.rows <= 0 or cfg.field.columns <= 0:
        raise ValidationError(f"field must be at least 1x1 (got {cfg.field.rows}x{cfg.field.columns})")
    if cfg.inventory_limit < -1:
        raise ValidationError(f"inventory_limit must be -1 or >= 0 (got {cfg.inventory_limit})")
    _validate_rules(cfg.rules)


def _ensure_non_negative(value: float, name: str) -> None:
    if value < 0:
        raise ValidationError(f"{name} must be >= 0 (got {value})")


def _validate_rules(rules: GameRules) -> None:
    for name in ("precipitation_chance", "storm_chance", "crow_chance", "price_event_chance", "loan_garnishment_rate"):
        value = getattr(rules, name)
        if value < 0.0 or value > 1.0:
            raise ValidationError(f"{name} must be between 0 and 1 (got {value})")
    _ensure_non_negative(rules.loan_interest_rate, "loan_interest_rate")


def validate_state(state: GameState) -> None:
    """Check that a loaded state is internally consistent."""
    _ensure_non_negative(state.get("day_count", 0), "day_count")
    _ensure_non_negative(state.get("loan_balance", 0), "loan_balance")
    _ensure_non_negative(state.get("experience", 0), "experience")
    _validate_field(state)
    _validate_inventory(state)
    _validate_cows(state)
    _validate_tools(state)


def _validate_field(state: GameState) -> None:
    field = state.get("field")
    if not isinstance(field, list) or not field or not all(isinstance(row, list) and row for row in field):
        raise ValidationError("field must be a non-empty grid")
    purchased = state.get("purchased_field", 0)
    if purchased and purchased not in PURCHASEABLE_FIELD_SIZES:
        raise ValidationError(f"unknown purchased_field {purchased}")
    for y, row in enumerate(field):
        for x, plot in enumerate(row):
            if plot is None:
                continue
            if plot.get("type") not in ("crop", "scarecrow", "sprinkler", "shoveled"):
                raise ValidationError(f"plot ({x}, {y}) has unknown type {plot.get('type')!r}")


def _validate_inventory(state: GameState) -> None:
    catalog = default_catalog()
    for entry in state.get("inventory", []):
        if entry.get("id") not in catalog.items:
            raise ValidationError(f"inventory holds unknown item {entry.get('id')!r}")
        if entry.get("quantity", 0) <= 0:
            raise ValidationError(f"inventory quantity for {entry['id']} must be > 0")
    limit = state.get("inventory_limit", -1)
    if limit < -1:
        raise ValidationError(f"inventory_limit must be -1 or >= 0 (got {limit})")


def _validate_cows(state: GameState) -> None:
    cows = state.get("cow_inventory", [])
    ids = [cow.get("id") for cow in cows]
    if len(ids) != len(set(ids)):
        raise ValidationError("cow_inventory contains duplicate cow ids")
    pen_id = state.get("purchased_cow_pen", 0)
    if pen_id and pen_id not in PURCHASEABLE_COW_PENS:
        raise ValidationError(f"unknown purchased_cow_pen {pen_id}")
    for cow in cows:
        if cow.get("gender") not in ("male", "female"):
            raise ValidationError(f"cow {cow.get('id')} has unknown gender {cow.get('gender')!r}")
        if not 0.0 <= cow.get("happiness", 0.0) <= 1.0:
            raise ValidationError(f"cow {cow.get('id')} happiness must be between 0 and 1")


def _validate_tools(state: GameState) -> None:
    for tool, level in state.get("tool_levels", {}).items():
        if tool not in TOOL_TYPES:
            raise ValidationError(f"unknown tool {tool!r}")
        if level not in TOOL_LEVELS:
            raise ValidationError(f"tool {tool} has unknown level {level!r}")

