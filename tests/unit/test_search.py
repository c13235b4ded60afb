"""Tests for search filtering over group trees."""

import pytest

from nexusview.ui.grouping import GroupBuilder, GroupLevel, NestRule, build_tree
from nexusview.ui.search import SearchFilter, highlight, normalize_query
from nexusview.ui.types import Leaf


@pytest.fixture
def tree(scenario_entities, scenario_levels):
    return build_tree(scenario_entities, scenario_levels, root_key="currency")


class TestMatching:
    def test_normalize(self):
        assert normalize_query("  LeGion ") == "legion"
        assert normalize_query(None) == ""

    def test_name_substring_case_insensitive(self, entity):
        search = SearchFilter()
        assert search.matches(entity(1, "Legionfall War Supplies"), "LEGION")
        assert not search.matches(entity(1, "Kej"), "legion")
        assert search.matches(entity(1, None), "")

    def test_extra_fields(self, entity):
        search = SearchFilter(tag_fields=("category",), data_fields=("link",))
        e = entity(1, "Kej", category="Currency", data={"link": "|Hitem:1|h[Kej]|h"})
        assert search.matches(e, "curr")
        assert search.matches(e, "hitem")
        assert not SearchFilter().matches(e, "curr")

    def test_nested_leaf(self, entity):
        search = SearchFilter()
        leaf = Leaf(entity(1, "Threads"), "k", (entity(2, "Weaver"), entity(3, "General")))
        assert [c.name for c in search.visible_children(leaf, "weaver")] == ["Weaver"]
        assert len(search.visible_children(leaf, "threads")) == 2
        # the parent does not match, so only the sub-faction is counted
        assert search.leaf_count(leaf, "weaver") == 1
        assert search.leaf_count(leaf, "threads") == 3
        assert search.leaf_count(leaf, "nothing") == 0


class TestTree:
    def test_count(self, tree):
        search = SearchFilter()
        alice, bob = tree.child_groups()
        assert search.count(alice, "") == 3
        assert search.count(alice, "legion") == 0
        assert search.count(bob, "legion") == 1
        assert search.count(tree, "s") == 3

    def test_annotate_marks_ancestors(self, tree):
        keys = SearchFilter().annotate_tree(tree, "legion")
        assert keys == {"currency", "currency-char-Bob-Realm", "currency-char-Bob-Realm-header-Legion"}

    def test_annotate_empty_query_returns_all(self, tree):
        keys = SearchFilter().annotate_tree(tree, "")
        assert keys == {n.key for n in tree.iter_groups()}

    def test_annotate_no_match(self, tree):
        assert SearchFilter().annotate_tree(tree, "zzz") == set()

    def test_prune(self, tree):
        search = SearchFilter()
        pruned = search.prune(tree, "legion")
        assert [g.label for g in pruned.child_groups()] == ["Bob"]
        assert pruned.leaf_count() == 1
        assert search.prune(tree, "zzz") is None
        assert search.prune(tree, "") is tree


class TestHighlight:
    def test_segments(self):
        assert highlight("Legionfall War Supplies", "war") == [
            ("Legionfall ", False), ("War", True), (" Supplies", False),
        ]

    def test_repeated(self):
        assert highlight("aXa", "a") == [("a", True), ("X", False), ("a", True)]

    def test_empty(self):
        assert highlight("Kej", "") == [("Kej", False)]
        assert highlight("", "k") == []


class TestNestedSearch:
    @pytest.fixture
    def rep_tree(self, entity):
        nest = NestRule(is_parent=lambda e: bool(e.get("header_with_rep")), parent_name=lambda e: e.tag("parent"))
        level = GroupLevel(segment="header", classify=lambda e: e.tag("header"))
        entities = [
            entity(1, "Steamwheedle Cartel", kind="reputation", header="Goblins", data={"header_with_rep": True}),
            entity(2, "Booty Bay Sub", kind="reputation", header="Goblins", parent="Steamwheedle Cartel"),
            entity(3, "Gadgetzan", kind="reputation", header="Goblins", parent="Steamwheedle Cartel"),
        ]
        return GroupBuilder([level], "reputation", nest=nest).build(entities)

    def test_matching_child_replaces_parent(self, rep_tree):
        search = SearchFilter()
        pruned = search.prune(rep_tree, "booty")
        (group,) = pruned.child_groups()

        assert [l.entity.name for l in group.leaves()] == ["Booty Bay Sub"]
        assert group.leaves()[0].children == ()
        assert all(search.matches(l.entity, "booty") for l in pruned.iter_leaves())
        assert search.count(rep_tree, "booty") == 1

    def test_parent_key_only_forced_when_parent_matches(self, rep_tree):
        search = SearchFilter()
        sub_key = "reputation-header-Goblins-sub-1"
        assert sub_key not in search.annotate_tree(rep_tree, "booty")
        assert sub_key in search.annotate_tree(rep_tree, "cartel")
        assert search.count(rep_tree, "cartel") == 3
