from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from numpy.random import Generator

from farmhand.config import GameConfig
from farmhand.constants import GameState
from farmhand.state import create_initial_state, reduce_by_persisted_keys
from farmhand.validation import validate_state

logger = logging.getLogger(__name__)

SAVE_FORMAT_VERSION = 1


class SaveError(RuntimeError):
    """Raised when a save file cannot be written or read."""


def save_game(path: str | Path, state: GameState, rng: Generator | None = None) -> Path:
    """
    Write the persisted part of a state as JSON, replacing the file atomically.
    When ``rng`` is given its bit generator state is saved too, so a resumed
    game continues the same random stream.
    """
    path = Path(path)
    payload = {"version": SAVE_FORMAT_VERSION, "state": reduce_by_persisted_keys(state)}
    if rng is not None:
        payload["rng"] = rng.bit_generator.state
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        tmp_path.replace(path)
    except OSError as exc:
        raise SaveError(f"could not write {path}: {exc}") from exc
    logger.debug("saved day %s to %s", state.get("day_count"), path)
    return path


def _restore_rng(path: Path, rng: Generator, saved: Any) -> None:
    current = rng.bit_generator.state
    if not isinstance(saved, dict) or saved.get("bit_generator") != current["bit_generator"]:
        raise SaveError(f"{path} holds random state for a different generator")
    try:
        rng.bit_generator.state = saved
    except (TypeError, ValueError, KeyError) as exc:
        raise SaveError(f"{path} holds invalid random state: {exc}") from exc


def load_game(path: str | Path, config: GameConfig | None = None, rng: Generator | None = None) -> GameState:
    """
    Read a save file and merge it over a fresh state, so keys added since the
    save was written get their defaults. A saved random state is restored
    into ``rng`` in place.
    """
    path = Path(path)
    if not path.exists():
        raise SaveError(f"Save file not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise SaveError(f"could not read {path}: {exc}") from exc
    if not isinstance(raw, dict) or not isinstance(raw.get("state"), dict):
        raise SaveError(f"{path} is not a farmhand save file")
    if raw.get("version", SAVE_FORMAT_VERSION) > SAVE_FORMAT_VERSION:
        raise SaveError(f"{path} was written by a newer version (format {raw['version']})")

    state = {**create_initial_state(config, rng), **reduce_by_persisted_keys(raw["state"])}
    validate_state(state)
    if rng is not None and "rng" in raw:
        _restore_rng(path, rng, raw["rng"])
    return state
