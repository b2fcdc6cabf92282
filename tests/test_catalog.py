import json

import pytest

from farmhand.catalog import DataError, UnknownItemError, default_catalog, load_catalog


def _write_data(tmp_path, items=None, recipes=None, levels=None):
    items = items if items is not None else [
        {"id": "seed", "type": "seed", "value": 1, "is_plantable_crop": True, "grows_into": "crop"},
        {"id": "crop", "type": "crop", "value": 2, "crop_timetable": {"seed": 1, "growing": 1}},
    ]
    (tmp_path / "items.json").write_text(json.dumps(items), encoding="utf-8")
    (tmp_path / "recipes.json").write_text(json.dumps(recipes or []), encoding="utf-8")
    (tmp_path / "levels.json").write_text(
        json.dumps(levels or {"base_shop_inventory": ["seed"], "levels": []}), encoding="utf-8"
    )


def test_load_catalog_from_directory(tmp_path):
    _write_data(tmp_path)
    catalog = load_catalog(tmp_path)
    assert catalog.item("crop").crop_timetable.total == 2
    assert catalog.item("seed").name == "seed"
    assert catalog.crop_item_ids() == ("crop",)
    assert catalog.base_shop_inventory == ("seed",)


def test_missing_data_file(tmp_path):
    with pytest.raises(DataError):
        load_catalog(tmp_path)


def test_dangling_references_are_rejected(tmp_path):
    """Seeds, recipes and levels must point at items that exist."""
    _write_data(tmp_path, items=[{"id": "seed", "grows_into": "nothing"}])
    with pytest.raises(DataError):
        load_catalog(tmp_path)

    _write_data(tmp_path, recipes=[{"id": "crop", "ingredients": {"ghost": 1}}])
    with pytest.raises(DataError):
        load_catalog(tmp_path)


def test_unknown_field_mode_is_rejected(tmp_path):
    _write_data(tmp_path, items=[{"id": "hoe", "enables_field_mode": "dig"}])
    with pytest.raises(DataError):
        load_catalog(tmp_path)


def test_default_catalog_contents():
    catalog = default_catalog()
    carrot = catalog.item("carrot")
    assert carrot.is_farm_product
    assert carrot.does_price_fluctuate
    assert carrot.crop_timetable.total == 5
    assert catalog.item("carrot-seed").grows_into == "carrot"
    assert catalog.recipe("carrot-soup").ingredients == {"carrot": 4}
    assert len(catalog.crop_item_ids()) == 10
    with pytest.raises(UnknownItemError):
        catalog.item("ancient-fruit")
    with pytest.raises(UnknownItemError):
        catalog.recipe("carrot")


def test_every_seed_has_a_crop():
    """Every plantable seed should grow into a crop with a timetable."""
    catalog = default_catalog()
    seeds = [item for item in catalog.items.values() if item.is_plantable_crop]
    assert len(seeds) == 10
    for seed in seeds:
        assert catalog.item(seed.grows_into).crop_timetable is not None
