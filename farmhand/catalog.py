from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from farmhand.constants import FIELD_MODES, FieldMode


class DataError(RuntimeError):
    pass


class UnknownItemError(KeyError):
    """Raised when an item or recipe id is not in the catalog."""


DATA_DIR = Path(os.getenv("FARMHAND_DATA_DIR", Path(__file__).resolve().parent / "data"))


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise DataError(f"Missing data file: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


@dataclass(frozen=True)
class CropTimetable:
    seed: int
    growing: int

    @property
    def total(self) -> int:
        """Return the watered days needed for the crop to be fully grown."""
        return self.seed + self.growing


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    type: str
    value: float
    does_price_fluctuate: bool = False
    is_farm_product: bool = False
    is_plantable_crop: bool = False
    grows_into: str | None = None
    crop_timetable: CropTimetable | None = None
    is_replantable: bool = False
    enables_field_mode: FieldMode | None = None
    hovered_plot_range_size: int = 0


@dataclass(frozen=True)
class RecipeCondition:
    items_sold: dict[str, int] = field(default_factory=dict)
    purchased_smelter: bool = False
    min_level: int = 0


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    recipe_type: str
    ingredients: dict[str, int]
    condition: RecipeCondition


@dataclass(frozen=True)
class LevelReward:
    level: int
    unlocks_shop_item: str | None = None
    increases_sprinkler_range: bool = False


@dataclass(frozen=True)
class Catalog:
    items: dict[str, Item]
    recipes: dict[str, Recipe]
    levels: dict[int, LevelReward]
    base_shop_inventory: tuple[str, ...]

    def item(self, item_id: str) -> Item:
        """Return the item for an id, raising UnknownItemError when absent."""
        try:
            return self.items[item_id]
        except KeyError:
            raise UnknownItemError(item_id) from None

    def recipe(self, recipe_id: str) -> Recipe:
        """Return the recipe for an id, raising UnknownItemError when absent."""
        try:
            return self.recipes[recipe_id]
        except KeyError:
            raise UnknownItemError(recipe_id) from None

    def crop_item_ids(self) -> tuple[str, ...]:
        """Return ids of every harvestable crop item."""
        return tuple(item.id for item in self.items.values() if item.crop_timetable is not None)


def _parse_item(raw: dict[str, Any]) -> Item:
    if "id" not in raw:
        raise DataError(f"item entry missing id: {raw}")
    timetable_raw = raw.get("crop_timetable")
    timetable = None
    if timetable_raw is not None:
        timetable = CropTimetable(seed=int(timetable_raw["seed"]), growing=int(timetable_raw["growing"]))
    mode = raw.get("enables_field_mode")
    if mode is not None and mode not in FIELD_MODES:
        raise DataError(f"item {raw['id']} has unknown field mode: {mode}")
    return Item(
        id=str(raw["id"]),
        name=str(raw.get("name", raw["id"])),
        type=str(raw.get("type", "")),
        value=float(raw.get("value", 0)),
        does_price_fluctuate=bool(raw.get("does_price_fluctuate", False)),
        is_farm_product=bool(raw.get("is_farm_product", False)),
        is_plantable_crop=bool(raw.get("is_plantable_crop", False)),
        grows_into=raw.get("grows_into"),
        crop_timetable=timetable,
        is_replantable=bool(raw.get("is_replantable", False)),
        enables_field_mode=mode,
        hovered_plot_range_size=int(raw.get("hovered_plot_range_size", 0)),
    )


def _parse_recipe(raw: dict[str, Any]) -> Recipe:
    cond_raw = raw.get("condition", {})
    return Recipe(
        id=str(raw["id"]),
        name=str(raw.get("name", raw["id"])),
        recipe_type=str(raw.get("type", "kitchen")),
        ingredients={str(k): int(v) for k, v in raw.get("ingredients", {}).items()},
        condition=RecipeCondition(
            items_sold={str(k): int(v) for k, v in cond_raw.get("items_sold", {}).items()},
            purchased_smelter=bool(cond_raw.get("purchased_smelter", False)),
            min_level=int(cond_raw.get("min_level", 0)),
        ),
    )


def load_catalog(data_dir: Path = DATA_DIR) -> Catalog:
    """Load items, recipes and level rewards from the data directory."""
    items_raw = _load_json(data_dir / "items.json")
    recipes_raw = _load_json(data_dir / "recipes.json")
    levels_raw = _load_json(data_dir / "levels.json")

    items = {item.id: item for item in (_parse_item(raw) for raw in items_raw)}
    recipes = {recipe.id: recipe for recipe in (_parse_recipe(raw) for raw in recipes_raw)}
    levels = {
        int(raw["level"]): LevelReward(
            level=int(raw["level"]),
            unlocks_shop_item=raw.get("unlocks_shop_item"),
            increases_sprinkler_range=bool(raw.get("increases_sprinkler_range", False)),
        )
        for raw in levels_raw.get("levels", [])
    }
    base_shop = tuple(str(item_id) for item_id in levels_raw.get("base_shop_inventory", []))

    catalog = Catalog(items=items, recipes=recipes, levels=levels, base_shop_inventory=base_shop)
    _check_references(catalog)
    return catalog


def _check_references(catalog: Catalog) -> None:
    """Ensure every id referenced by seeds, recipes and levels exists."""
    for item in catalog.items.values():
        if item.grows_into is not None and item.grows_into not in catalog.items:
            raise DataError(f"seed {item.id} grows into unknown item {item.grows_into}")
    for recipe in catalog.recipes.values():
        if recipe.id not in catalog.items:
            raise DataError(f"recipe {recipe.id} has no matching item")
        for ingredient in recipe.ingredients:
            if ingredient not in catalog.items:
                raise DataError(f"recipe {recipe.id} uses unknown ingredient {ingredient}")
    for reward in catalog.levels.values():
        if reward.unlocks_shop_item is not None and reward.unlocks_shop_item not in catalog.items:
            raise DataError(f"level {reward.level} unlocks unknown item {reward.unlocks_shop_item}")
    for item_id in catalog.base_shop_inventory:
        if item_id not in catalog.items:
            raise DataError(f"shop inventory lists unknown item {item_id}")


_DEFAULT_CATALOG: Catalog | None = None


def default_catalog() -> Catalog:
    """Return the catalog from DATA_DIR, loading it on first use."""
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = load_catalog()
    return _DEFAULT_CATALOG
