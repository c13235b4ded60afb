"""Tests for the settings profile."""

import json

import pytest

from nexusview.core.settings import DEFAULTS, Settings
from nexusview.ui.expansion import ExpansionStore


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "profile" / "settings.json"


class TestSettings:
    def test_defaults_without_file(self, settings_path):
        settings = Settings(str(settings_path)).load()
        assert settings.get("currencyFilterMode") == "filtered"
        assert settings.get("currencyShowZero") is True
        assert settings.get("lastTab") == "currency"
        assert not settings.dirty

    def test_set_validates_choices(self):
        settings = Settings()
        settings.set("itemsSubTab", "personal")
        assert settings.get("itemsSubTab") == "personal"
        with pytest.raises(ValueError):
            settings.set("itemsSubTab", "void")

    def test_save_round_trip(self, settings_path):
        settings = Settings(str(settings_path))
        settings.set("currencyFilterMode", "nonfiltered")
        settings.set_expansion_flag("currencyExpanded", "currency-char-Bob-Draenor", True)
        assert settings.dirty
        assert settings.save() is True
        assert settings.save() is False

        loaded = Settings(str(settings_path)).load()
        assert loaded.get("currencyFilterMode") == "nonfiltered"
        assert loaded.get_expansion_flag("currencyExpanded", "currency-char-Bob-Draenor") is True
        assert loaded.get_expansion_flag("currencyExpanded", "unknown") is None

    def test_invalid_values_fall_back(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({
            "currencyFilterMode": "sideways",
            "reputationExpanded": [],
            "customKey": 3,
        }))
        settings = Settings(str(settings_path)).load()
        assert settings.get("currencyFilterMode") == DEFAULTS["currencyFilterMode"]
        assert settings.get_expansion_flag("reputationExpanded", "x") is None
        assert settings.get("customKey") == 3

    def test_non_object_file_rejected(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("[1, 2]")
        with pytest.raises(ValueError):
            Settings(str(settings_path)).load()

    def test_malformed_file_rejected(self, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{not json")
        with pytest.raises(ValueError):
            Settings(str(settings_path)).load()

    def test_unknown_namespace(self):
        with pytest.raises(KeyError):
            Settings().backend("mountsExpanded")


class TestNamespaceBackend:
    def test_store_writes_through(self):
        settings = Settings()
        store = ExpansionStore(settings.backend("itemsExpanded"))
        store.collapse("items-warband-type-Consumable")

        assert settings.get_expansion_flag("itemsExpanded", "items-warband-type-Consumable") is False
        assert settings.get_expansion_flag("storageExpanded", "items-warband-type-Consumable") is None
        assert settings.dirty
