"""Tests for the per-tab tree builders."""

import pytest

from nexusview.core.settings import Settings
from nexusview.core.snapshot import SnapshotSource
from nexusview.ui.tabs import (
    CurrencyTab,
    ItemsTab,
    ReputationTab,
    StorageTab,
    is_season_header,
    make_tabs,
)

ALICE = "currency-char-Alice-Silvermoon"
TWW = f"{ALICE}-exp-The War Within"


@pytest.fixture
def settings():
    return Settings()


def _keys(root):
    return [n.key for n in root.iter_groups()]


class TestCurrencyTab:
    def test_filtered_layout(self, source, settings):
        root = CurrencyTab().build(source, settings)

        alice, bob = root.child_groups()
        assert alice.title(alice.label, alice.leaf_count()) == "Alice (Online) - 5 currencies"
        assert bob.title(bob.label, bob.leaf_count()) == "Bob - 2 currencies"
        assert alice.default_expanded is True
        assert bob.default_expanded is False
        assert alice.color == "#3fc7eb"
        assert bob.color == "#c69b6d"

        assert [g.label for g in alice.child_groups()] == ["The War Within", "Dragonflight", "Other"]
        assert [g.label for g in bob.child_groups()] == ["Legion", "Account-Wide"]

    def test_season_wrapped_under_war_within(self, source, settings):
        root = CurrencyTab().build(source, settings)
        tww = root.child_groups()[0].child_groups()[0]

        assert tww.key == TWW
        assert [g.label for g in tww.child_groups()] == ["Currency", "Season 3"]
        season = tww.wrapped
        assert season.key == f"{TWW}-season"
        assert [g.label for g in season.child_groups()] == ["Crest", "Upgrade"]
        assert f"{TWW}-season-cat-Crest" in _keys(root)

    def test_hide_zero(self, source, settings):
        settings.set("currencyShowZero", False)
        alice = CurrencyTab().build(source, settings).child_groups()[0]
        assert "Dragonflight" not in [g.label for g in alice.child_groups()]

    def test_nonfiltered_layout(self, source, settings):
        settings.set("currencyFilterMode", "nonfiltered")
        root = CurrencyTab().build(source, settings)
        alice = root.child_groups()[0]

        # Timerunning header and Infinite Knowledge are left out
        assert alice.leaf_count() == 4
        assert [g.label for g in alice.child_groups()] == ["The War Within", "Dragonflight"]

        tww = alice.child_groups()[0]
        assert tww.key == f"{ALICE}-header-The War Within"
        assert [l.entity.name for l in tww.leaves()] == ["Kej"]
        assert tww.wrapped.label == "Season 3"
        assert [l.entity.name for l in tww.wrapped.leaves()] == ["Valorstones", "Weathered Ethereal Crest"]

    def test_category_searchable(self, source, settings):
        tab = CurrencyTab()
        assert tab.search.matches(source.get_entities("currencies")[0], "upgrade")

    @pytest.mark.parametrize("header,expected", [
        ("Season 3", True),
        ("The War Within Season Three", True),
        ("Season 2", False),
        ("Legion", False),
        (None, False),
    ])
    def test_is_season_header(self, header, expected):
        assert is_season_header(header) is expected


class TestItemsTab:
    def test_warband(self, source, settings):
        root = ItemsTab().build(source, settings)
        assert root.key == "items-warband"
        assert root.label == "Warband Bank"
        assert [g.label for g in root.child_groups()] == ["Consumable", "Trade Goods"]
        trade = root.child_groups()[1]
        assert trade.key == "items-warband-type-Trade Goods"
        assert [l.entity.name for l in trade.leaves()] == ["Linen Cloth", "Mycobloom"]

    def test_personal_is_current_character_only(self, source, settings):
        settings.set("itemsSubTab", "personal")
        root = ItemsTab().build(source, settings)
        assert root.key == "items-personal"
        assert [l.entity.name for l in root.iter_leaves()] == ["Charged Runeaxe"]

    def test_guild_is_empty(self, source, settings):
        settings.set("itemsSubTab", "guild")
        assert ItemsTab().build(source, settings).leaf_count() == 0


class TestStorageTab:
    def test_sections(self, source, settings):
        root = StorageTab().build(source, settings)
        warband, personal = root.child_groups()

        assert (warband.key, warband.label, warband.level) == ("storage-warband", "Warband Bank", 0)
        assert (personal.key, personal.label, personal.level) == ("storage-personal", "Personal Banks", 0)
        assert warband.default_expanded is False
        assert warband.leaf_count() == 3
        assert personal.leaf_count() == 2

        alice = personal.child_groups()[0]
        assert alice.key == "storage-personal-char-Alice-Silvermoon"
        assert alice.level == 1
        assert alice.default_expanded is False
        assert alice.child_groups()[0].level == 2

    def test_empty_sections_left_out(self, settings):
        root = StorageTab().build(SnapshotSource.empty(), settings)
        assert root.child_groups() == ()


class TestReputationTab:
    def test_sub_factions_nested(self, source, settings):
        root = ReputationTab().build(source, settings)
        alice = root.child_groups()[0]
        assert alice.title(alice.label, alice.leaf_count()) == "Alice (Online) - 5 factions"

        khaz = alice.child_groups()[0]
        assert khaz.label == "Khaz Algar"
        threads = khaz.leaves()[1]
        assert threads.entity.name == "The Severed Threads"
        assert threads.key == "reputation-char-Alice-Silvermoon-header-Khaz Algar-sub-2600"
        assert [c.name for c in threads.children] == ["The Weaver", "The General"]
        assert khaz.leaf_count() == 4


def test_make_tabs():
    tabs = make_tabs()
    assert list(tabs) == ["currency", "items", "storage", "reputation"]
    assert {t.namespace for t in tabs.values()} == {
        "currencyExpanded", "itemsExpanded", "storageExpanded", "reputationExpanded",
    }
