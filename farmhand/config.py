from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from farmhand.constants import (
    CROW_CHANCE,
    INITIAL_FIELD_HEIGHT,
    INITIAL_FIELD_WIDTH,
    INITIAL_MONEY,
    INITIAL_STORAGE_LIMIT,
    LOAN_GARNISHMENT_RATE,
    LOAN_INTEREST_RATE,
    PRECIPITATION_CHANCE,
    PRICE_EVENT_CHANCE,
    STORM_CHANCE,
)


@dataclass(frozen=True)
class GameRules:
    """Chances and rates the end-of-day simulation draws against."""

    precipitation_chance: float = PRECIPITATION_CHANCE
    storm_chance: float = STORM_CHANCE
    crow_chance: float = CROW_CHANCE
    price_event_chance: float = PRICE_EVENT_CHANCE
    loan_interest_rate: float = LOAN_INTEREST_RATE
    loan_garnishment_rate: float = LOAN_GARNISHMENT_RATE


@dataclass(frozen=True)
class FieldConfig:
    rows: int = INITIAL_FIELD_HEIGHT
    columns: int = INITIAL_FIELD_WIDTH


@dataclass(frozen=True)
class GameConfig:
    starting_money: float = INITIAL_MONEY
    field: FieldConfig = FieldConfig()
    # -1 means unlimited storage.
    inventory_limit: int = INITIAL_STORAGE_LIMIT
    seed: int | None = None
    save_path: Path = Path("farmhand-save.json")
    rules: GameRules = GameRules()

    @staticmethod
    def from_json_file(path: str | Path) -> "GameConfig":
        """Load config from a JSON file on disk."""
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        return GameConfig.from_dict(raw)

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> "GameConfig":
        """Build config from a decoded JSON dict."""
        field_raw = raw.get("field", {})
        rules_raw = raw.get("rules", {})
        if not isinstance(field_raw, dict):
            raise ValueError("field must be an object")
        if not isinstance(rules_raw, dict):
            raise ValueError("rules must be an object")

        rules = GameRules(
            precipitation_chance=_parse_chance(rules_raw, "precipitation_chance", PRECIPITATION_CHANCE),
            storm_chance=_parse_chance(rules_raw, "storm_chance", STORM_CHANCE),
            crow_chance=_parse_chance(rules_raw, "crow_chance", CROW_CHANCE),
            price_event_chance=_parse_chance(rules_raw, "price_event_chance", PRICE_EVENT_CHANCE),
            loan_interest_rate=float(rules_raw.get("loan_interest_rate", LOAN_INTEREST_RATE)),
            loan_garnishment_rate=float(rules_raw.get("loan_garnishment_rate", LOAN_GARNISHMENT_RATE)),
        )
        return GameConfig(
            starting_money=float(raw.get("starting_money", INITIAL_MONEY)),
            field=FieldConfig(
                rows=int(field_raw.get("rows", INITIAL_FIELD_HEIGHT)),
                columns=int(field_raw.get("columns", INITIAL_FIELD_WIDTH)),
            ),
            inventory_limit=_normalize_inventory_limit(raw.get("inventory_limit", INITIAL_STORAGE_LIMIT)),
            seed=_normalize_seed(raw.get("seed")),
            save_path=Path(raw.get("save_path", "farmhand-save.json")),
            rules=rules,
        )


def _parse_chance(raw: dict[str, Any], key: str, default: float) -> float:
    """Read a chance that may be given as a fraction or a percentage string."""
    value = raw.get(key, default)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("%"):
            return float(text[:-1]) / 100
        return float(text)
    return float(value)


def _normalize_inventory_limit(raw: Any) -> int:
    """Normalize storage limits; 'unlimited' and 'none' map to -1."""
    if raw is None:
        return -1
    if isinstance(raw, str):
        key = raw.strip().lower()
        if key in ("unlimited", "none", "infinite"):
            return -1
        return int(key)
    return int(raw)


def _normalize_seed(raw: Any) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        key = raw.strip().lower()
        if key in ("", "random", "none"):
            return None
        return int(key)
    return int(raw)
