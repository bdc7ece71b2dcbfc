import json
from pathlib import Path

import pytest

from solver import settings


def test_defaults_when_nothing_saved() -> None:
    assert settings.get_settings() == settings.DEFAULT_SETTINGS


def test_settings_get_and_save(isolated_settings: Path) -> None:
    settings.save_settings({"reduce_to_normal_form": True, "display": "decimal"})
    current = settings.get_settings()
    assert current["reduce_to_normal_form"] is True
    assert current["display"] == "decimal"
    assert current["max_size"] == 4

    content = json.loads(isolated_settings.read_text(encoding="utf-8"))
    assert content["settings"]["display"] == "decimal"


def test_unknown_keys_are_dropped() -> None:
    saved = settings.save_settings({"theme": "dark", "max_size": 6})
    assert "theme" not in saved
    assert saved["max_size"] == 6


@pytest.mark.parametrize(
    "bad",
    [
        {"reduce_to_normal_form": "yes"},
        {"max_size": 0},
        {"max_size": True},
        {"display": "fancy"},
    ],
)
def test_invalid_values_rejected(bad) -> None:
    with pytest.raises(ValueError):
        settings.save_settings(bad)


def test_reset_settings() -> None:
    settings.save_settings({"strict_parsing": True})
    assert settings.reset_settings() == settings.DEFAULT_SETTINGS
    assert settings.get_settings()["strict_parsing"] is False


def test_load_db_handles_invalid_json(isolated_settings: Path) -> None:
    isolated_settings.parent.mkdir(parents=True, exist_ok=True)
    isolated_settings.write_text("{not-json", encoding="utf-8")

    db = settings._load_db()
    assert db["settings"] == settings.DEFAULT_SETTINGS
    assert settings.get_settings() == settings.DEFAULT_SETTINGS


def test_corrupt_values_fall_back_to_defaults(isolated_settings: Path) -> None:
    isolated_settings.parent.mkdir(parents=True, exist_ok=True)
    isolated_settings.write_text(json.dumps({"settings": {"max_size": -1}}), encoding="utf-8")
    assert settings.get_settings() == settings.DEFAULT_SETTINGS


@pytest.mark.parametrize("stored", ["oops", ["max_size", 6], 7, None])
def test_non_object_settings_fall_back_to_defaults(isolated_settings: Path, stored) -> None:
    isolated_settings.parent.mkdir(parents=True, exist_ok=True)
    isolated_settings.write_text(json.dumps({"settings": stored}), encoding="utf-8")
    assert settings.get_settings() == settings.DEFAULT_SETTINGS

    saved = settings.save_settings({"max_size": 5})
    assert saved["max_size"] == 5
    assert settings.get_settings()["max_size"] == 5


def test_validate_settings_requires_a_mapping() -> None:
    with pytest.raises(ValueError, match="JSON object"):
        settings.validate_settings("oops")


def test_save_db_persists_content(isolated_settings: Path) -> None:
    settings._save_db({"settings": {"display": "exact"}})
    content = json.loads(isolated_settings.read_text(encoding="utf-8"))
    assert content["settings"]["display"] == "exact"
