"""Tests for loading scanner snapshots."""

import json

import pytest

from nexusview.core.snapshot import SnapshotSource


class TestSnapshotSource:
    def test_characters(self, source):
        chars = source.get_characters()
        assert [c.key for c in chars] == ["Alice-Silvermoon", "Bob-Draenor"]
        assert source.current_character().name == "Alice"
        assert source.character("Bob-Draenor").class_file == "WARRIOR"
        assert source.character("Nobody-Nowhere") is None

    def test_stats_skip_malformed(self, source):
        assert source.stats() == {"characters": 2, "currencies": 7, "items": 5, "reputations": 6}

    def test_currency_fields(self, source):
        valor = next(e for e in source.get_entities("currencies") if e.entity_id == 3008)
        assert valor.kind == "currency"
        assert valor.owner == "Alice-Silvermoon"
        assert valor.quantity == 1500
        assert valor.tag("season") == "Season 3"
        assert valor.get("max_quantity") == 2000

    def test_item_stack_is_quantity(self, source):
        linen = next(e for e in source.get_entities("items") if e.entity_id == 2589)
        assert linen.quantity == 200
        assert linen.tag("bank") == "warband"
        assert linen.get("sell_price") == 13

    def test_reputation_renames(self, source):
        council = next(e for e in source.get_entities("reputations") if e.entity_id == 2590)
        assert council.get("renown_level") == 25
        assert council.get("renown_max_level") == 25
        assert council.get("max_value") == 2500
        assert council.get("paragon_value") == 4000
        assert not council.has("standing_id")

    def test_unknown_scope(self, source):
        with pytest.raises(KeyError):
            source.get_entities("mounts")

    def test_returned_lists_are_copies(self, source):
        source.get_entities("items").clear()
        assert len(source.get_entities("items")) == 5

    def test_from_file(self, fixtures_dir):
        source = SnapshotSource.from_file(fixtures_dir / "snapshot.json")
        assert source.origin.endswith("snapshot.json")
        assert source.current_key == "Alice-Silvermoon"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError):
            SnapshotSource.from_file(tmp_path / "missing.json")

    def test_non_object_file(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2, 3]))
        with pytest.raises(ValueError):
            SnapshotSource.from_file(path)

    def test_empty(self):
        source = SnapshotSource.empty()
        assert source.current_character() is None
        assert source.get_entities("currencies") == []
