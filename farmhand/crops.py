from __future__ import annotations

from farmhand.catalog import default_catalog
from farmhand.constants import FERTILIZER_BONUS, CropLifeStage


def get_crop_from_item_id(item_id: str, fertilizer_type: str = "none") -> dict:
    """Return fresh plot content for a crop item."""
    item = default_catalog().item(item_id)
    if item.crop_timetable is None:
        raise ValueError(f"{item_id} is not a crop")
    return {
        "type": "crop",
        "item_id": item_id,
        "days_old": 0,
        "days_watered": 0.0,
        "was_watered_today": False,
        "fertilizer_type": fertilizer_type,
    }


def get_plot_content_from_item_id(item_id: str) -> dict:
    """Return plot content for a placeable field tool (scarecrow or sprinkler)."""
    item = default_catalog().item(item_id)
    if item.type not in ("scarecrow", "sprinkler"):
        raise ValueError(f"{item_id} cannot be placed in the field")
    return {"type": item.type, "item_id": item_id}


def get_final_crop_item_id_from_seed_item_id(seed_item_id: str) -> str:
    seed = default_catalog().item(seed_item_id)
    if not seed.is_plantable_crop or seed.grows_into is None:
        raise ValueError(f"{seed_item_id} is not plantable")
    return seed.grows_into


def get_seed_item_id_from_crop_item_id(crop_item_id: str) -> str | None:
    for item in default_catalog().items.values():
        if item.grows_into == crop_item_id:
            return item.id
    return None


def is_crop(plot: dict | None) -> bool:
    return plot is not None and plot.get("type") == "crop"


def get_crop_life_stage(crop: dict) -> CropLifeStage:
    """Return the life stage for the watered days a crop has accumulated."""
    timetable = default_catalog().item(crop["item_id"]).crop_timetable
    days_watered = crop.get("days_watered", 0)
    if days_watered >= timetable.total:
        return "grown"
    if days_watered >= timetable.seed:
        return "growing"
    return "seed"


def increment_plot_content_age(plot: dict | None) -> dict | None:
    """Age a crop by a day. Watered crops grow, fertilized ones faster."""
    if not is_crop(plot):
        return plot
    growth = 0.0
    if plot.get("was_watered_today"):
        growth = 1.0
        if plot.get("fertilizer_type", "none") != "none":
            growth += FERTILIZER_BONUS
    return {
        **plot,
        "days_old": plot.get("days_old", 0) + 1,
        "days_watered": plot.get("days_watered", 0) + growth,
        "was_watered_today": False,
    }
