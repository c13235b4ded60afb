"""Tests for the expansion state store."""

from nexusview.ui.expansion import ExpansionStore, MemoryBackend


class TestExpansionStore:
    def test_default_used_without_flag(self, store):
        assert store.is_expanded("a") is True
        assert store.is_expanded("a", default=False) is False
        assert not store.has_flag("a")

    def test_stored_flag_wins(self, store, backend):
        store.set_expanded("a", False)
        assert backend.flags == {"a": False}
        assert store.is_expanded("a", default=True) is False

    def test_toggle_returns_new_state(self, store):
        assert store.toggle("a", default=True) is False
        assert store.toggle("a", default=True) is True
        assert store.toggle("b", default=False) is True

    def test_on_change_only_when_effective_state_changes(self):
        changes = []
        store = ExpansionStore(MemoryBackend(), on_change=changes.append)

        assert store.set_expanded("a", True, default=True) is False
        assert changes == []
        assert store.has_flag("a")

        assert store.collapse("a") is True
        assert changes == ["a"]

        store.expand("a")
        assert changes == ["a", "a"]

    def test_existing_backend_flags(self):
        store = ExpansionStore(MemoryBackend({"x": False}))
        assert store.is_expanded("x") is False


class TestForceExpand:
    def test_search_forces_open(self, store):
        store.collapse("a")
        assert store.force_expand_if_searching("a", True) is True
        # nothing written back
        assert store.is_expanded("a") is False

    def test_no_search_uses_stored_state(self, store):
        store.collapse("a")
        assert store.force_expand_if_searching("a", False) is False
        assert store.force_expand_if_searching("b", False, default=False) is False

    def test_only_matched_keys_forced(self, store):
        assert store.force_expand_if_searching("a", True, False, matched_keys={"a"}) is True
        assert store.force_expand_if_searching("b", True, False, matched_keys={"a"}) is False
