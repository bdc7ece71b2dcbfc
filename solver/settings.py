"""
GaussSolver — Local JSON storage for solver settings.

Data is persisted in ``<project>/data/gausssolver.json``.
"""

import json
import logging
import os

LOG = logging.getLogger(__name__)

_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "data")
_DATA_FILE = os.path.join(_DATA_DIR, "gausssolver.json")

# ── Default settings (used when nothing has been saved yet) ─────────────
DEFAULT_SETTINGS = {
    "reduce_to_normal_form": False,
    "max_size": 4,
    "strict_parsing": False,
    "display": "exact",            # "exact", "decimal"
}

_DISPLAY_MODES = ("exact", "decimal")


def _ensure_dir() -> None:
    os.makedirs(_DATA_DIR, exist_ok=True)


def _load_db() -> dict:
    _ensure_dir()
    if os.path.exists(_DATA_FILE):
        try:
            with open(_DATA_FILE, "r", encoding="utf-8") as f:
                db = json.load(f)
            if isinstance(db, dict):
                return db
            LOG.warning("Ignoring settings file %s: not a JSON object.", _DATA_FILE)
        except (json.JSONDecodeError, OSError) as e:
            LOG.warning("Ignoring unreadable settings file %s: %s", _DATA_FILE, e)
    return {"settings": dict(DEFAULT_SETTINGS)}


def _save_db(db: dict) -> None:
    _ensure_dir()
    with open(_DATA_FILE, "w", encoding="utf-8") as f:
        json.dump(db, f, indent=2, ensure_ascii=False)


def validate_settings(settings: dict) -> dict:
    """Return a copy of *settings* restricted to known keys.

    Raises ValueError when *settings* is not a mapping, or for a value of
    the wrong type or out of range.
    """
    if not isinstance(settings, dict):
        raise ValueError("Settings must be a JSON object.")
    clean = {}
    for key, value in settings.items():
        if key not in DEFAULT_SETTINGS:
            continue
        if key in ("reduce_to_normal_form", "strict_parsing"):
            if not isinstance(value, bool):
                raise ValueError(f"Setting '{key}' must be true or false.")
        elif key == "max_size":
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError("Setting 'max_size' must be a positive integer.")
        elif key == "display":
            if value not in _DISPLAY_MODES:
                raise ValueError(
                    f"Setting 'display' must be one of: {', '.join(_DISPLAY_MODES)}."
                )
        clean[key] = value
    return clean


# ── Settings ─────────────────────────────────────────────────────────────

def get_settings() -> dict:
    """Return the saved settings merged over the defaults."""
    db = _load_db()
    merged = dict(DEFAULT_SETTINGS)
    try:
        merged.update(validate_settings(db.get("settings", {})))
    except ValueError as e:
        LOG.warning("Falling back to default settings: %s", e)
    return merged


def save_settings(settings: dict) -> dict:
    """Validate and persist *settings* on top of the current ones."""
    merged = get_settings()
    merged.update(validate_settings(settings))
    db = _load_db()
    db["settings"] = merged
    _save_db(db)
    return merged


def reset_settings() -> dict:
    """Restore the defaults on disk."""
    db = _load_db()
    db["settings"] = dict(DEFAULT_SETTINGS)
    _save_db(db)
    return dict(DEFAULT_SETTINGS)
