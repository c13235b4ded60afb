'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Dict, List, Optional

from nexusview.core.gamedata import (
    BANK_LABELS,
    CLASS_COLORS,
    CURRENCY_CATEGORY_ORDER,
    CURRENT_SEASON,
    DEFAULT_TYPE_ICON,
    EXPANSION_ICONS,
    EXPANSION_ORDER,
    ITEM_CLASS_NAMES,
    ITEM_TYPE_ICONS,
    SEASON_CATEGORY_ORDER,
    SKIPPED_CURRENCY_HEADERS,
    SKIPPED_CURRENCY_NAMES,
    WAR_WITHIN,
)
from nexusview.core.models import Entity
from nexusview.ui.constants import EMPTY_HINT, EMPTY_TITLE
from nexusview.ui.expansion import ExpansionStore
from nexusview.ui.grouping import GroupBuilder, GroupLevel, NestRule, WrapRule
from nexusview.ui.renderer import RenderPlan
from nexusview.ui.search import SearchFilter
from nexusview.ui.types import GroupNode, Groups

__all__ = ["Tab", "CurrencyTab", "ItemsTab", "StorageTab", "ReputationTab", "TABS", "make_tabs"]

_TYPE_IDS = {name: class_id for class_id, name in ITEM_CLASS_NAMES.items()}


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def character_level(source, singular: str, plural: str, expand_online: bool = True) -> GroupLevel:
    """Top level shared by the per-character tabs: online character first, then by name."""
    chars = {c.key: c for c in source.get_characters()}
    current = source.current_key

    def label(key: str) -> str:
        char = chars.get(key)
        name = char.name if char else key.split("-")[0]
        return f"{name} (Online)" if key == current else name

    def color(key: str) -> Optional[str]:
        char = chars.get(key)
        return CLASS_COLORS.get(char.class_file) if char else None

    def title(text: str, count: int) -> str:
        return f"{text} - {count} {_plural(count, singular, plural)}"

    return GroupLevel(
        segment="char",
        classify=lambda e: e.owner,
        sort_key=lambda key: (0 if key == current else 1, label(key).casefold(), key),
        label=label,
        color=color,
        default_expanded=lambda key: expand_online and key == current,
        title=title,
    )


def item_type_of(entity: Entity) -> str:
    return entity.tag("type") or ITEM_CLASS_NAMES.get(entity.get("class_id"), "Miscellaneous")


def item_type_level(default_expanded: bool = True) -> GroupLevel:
    return GroupLevel(
        segment="type",
        classify=item_type_of,
        icon=lambda name: ITEM_TYPE_ICONS.get(_TYPE_IDS.get(name), DEFAULT_TYPE_ICON),
        default_expanded=default_expanded,
    )


def _item_sort(entity: Entity):
    return ((entity.name or "").casefold(), entity.entity_id)


class Tab:
    """
    One tab of the window: which entities it shows, how they are grouped
    and which row kind draws them.
    """

    name = ""
    title = ""
    scope = ""
    row_kind = ""
    namespace = ""
    search = SearchFilter()

    def entities(self, source, settings) -> List[Entity]:
        return source.get_entities(self.scope)

    def build(self, source, settings) -> GroupNode:
        raise NotImplementedError

    def plan(self, source, settings, query: str = "", store: Optional[ExpansionStore] = None) -> RenderPlan:
        return RenderPlan(
            root=self.build(source, settings),
            row_kind=self.row_kind,
            query=query,
            search=self.search,
            empty_title=EMPTY_TITLE.get(self.name, ""),
            empty_text=EMPTY_HINT.get(self.name, ""),
            store=store,
        )


# ---------------------------------------------------------------------- #
# currency
# ---------------------------------------------------------------------- #

def is_season_header(header: Optional[str]) -> bool:
    text = (header or "").lower()
    return "season" in text and ("3" in text or "three" in text)


def _skipped_header(header: Optional[str]) -> bool:
    text = (header or "").lower().replace("time running", "timerunning")
    return any(word in text for word in SKIPPED_CURRENCY_HEADERS)


class CurrencyTab(Tab):
    name = "currency"
    title = "Currency"
    scope = "currencies"
    row_kind = "currency"
    namespace = "currencyExpanded"
    search = SearchFilter(tag_fields=("category",))

    def entities(self, source, settings) -> List[Entity]:
        show_zero = bool(settings.get("currencyShowZero", True))
        out = []
        for e in source.get_entities(self.scope):
            if e.get("hidden"):
                continue
            if not show_zero and e.quantity <= 0:
                continue
            out.append(e)
        return out

    def levels(self, source, mode: str) -> List[GroupLevel]:
        chars = character_level(source, "currency", "currencies")
        if mode == "nonfiltered":
            header = GroupLevel(
                segment="header",
                classify=lambda e: WAR_WITHIN if is_season_header(e.tag("header")) else e.tag("header"),
                appearance_order=True,
                pinned=(WAR_WITHIN,),
                wrap=WrapRule(
                    matches=lambda e: is_season_header(e.tag("header")),
                    label=CURRENT_SEASON,
                    segment="season",
                    parent_value=WAR_WITHIN,
                ),
            )
            return [chars, header]

        expansion = GroupLevel(
            segment="exp",
            classify=lambda e: e.tag("expansion"),
            order=EXPANSION_ORDER,
            icon=EXPANSION_ICONS.get,
            wrap=WrapRule(
                matches=lambda e: e.tag("season") == CURRENT_SEASON,
                label=CURRENT_SEASON,
                segment="season",
                parent_value=WAR_WITHIN,
                order=SEASON_CATEGORY_ORDER,
            ),
        )
        category = GroupLevel(
            segment="cat",
            classify=lambda e: e.tag("category"),
            order=CURRENCY_CATEGORY_ORDER,
        )
        return [chars, expansion, category]

    def build(self, source, settings) -> GroupNode:
        mode = settings.get("currencyFilterMode", "filtered")
        entities = self.entities(source, settings)
        if mode == "nonfiltered":
            entities = [
                e for e in entities
                if not _skipped_header(e.tag("header"))
                and not any(n in (e.name or "").lower() for n in SKIPPED_CURRENCY_NAMES)
            ]
        return GroupBuilder(self.levels(source, mode), root_key="currency").build(entities)


# ---------------------------------------------------------------------- #
# items / storage
# ---------------------------------------------------------------------- #

class ItemsTab(Tab):
    name = "items"
    title = "Items"
    scope = "items"
    row_kind = "item"
    namespace = "itemsExpanded"
    search = SearchFilter(data_fields=("link",))

    def entities(self, source, settings) -> List[Entity]:
        sub_tab = settings.get("itemsSubTab", "warband")
        current = source.current_key
        out = []
        for e in source.get_entities(self.scope):
            if e.tag("bank", "warband") != sub_tab:
                continue
            if sub_tab == "personal" and current and e.owner != current:
                continue
            out.append(e)
        return out

    def build(self, source, settings) -> GroupNode:
        sub_tab = settings.get("itemsSubTab", "warband")
        builder = GroupBuilder([item_type_level()], root_key=f"items-{sub_tab}", leaf_sort=_item_sort)
        return builder.build(self.entities(source, settings), label=BANK_LABELS.get(sub_tab, sub_tab))


class StorageTab(Tab):
    name = "storage"
    title = "Storage"
    scope = "items"
    row_kind = "storage"
    namespace = "storageExpanded"
    search = SearchFilter(data_fields=("link",))

    def build(self, source, settings) -> GroupNode:
        warband: List[Entity] = []
        personal: List[Entity] = []
        for e in source.get_entities(self.scope):
            bank = e.tag("bank", "warband")
            if bank == "warband":
                warband.append(e)
            elif bank == "personal":
                personal.append(e)

        sections = []
        if warband:
            tree = GroupBuilder([item_type_level(False)], "storage-warband", leaf_sort=_item_sort).build(warband)
            sections.append(self._section(tree, BANK_LABELS["warband"]))
        if personal:
            levels = [character_level(source, "item", "items", expand_online=False), item_type_level(False)]
            tree = GroupBuilder(levels, "storage-personal", leaf_sort=_item_sort).build(personal)
            sections.append(self._section(tree, "Personal Banks"))
        return GroupNode(key="storage", label="", children=Groups(tuple(sections)), level=-1)

    def _section(self, tree: GroupNode, label: str) -> GroupNode:
        # Lift the sub-tree one level so its groups sit under the section header.
        for node in tree.iter_groups():
            if node is not tree:
                node.level += 1
        tree.label = label
        tree.level = 0
        tree.default_expanded = False
        return tree


# ---------------------------------------------------------------------- #
# reputation
# ---------------------------------------------------------------------- #

class ReputationTab(Tab):
    name = "reputation"
    title = "Reputations"
    scope = "reputations"
    row_kind = "reputation"
    namespace = "reputationExpanded"
    search = SearchFilter()

    def build(self, source, settings) -> GroupNode:
        levels = [
            character_level(source, "faction", "factions"),
            GroupLevel(segment="header", classify=lambda e: e.tag("header"), appearance_order=True),
        ]
        nest = NestRule(
            is_parent=lambda e: bool(e.get("header_with_rep")),
            parent_name=lambda e: e.tag("parent"),
        )
        return GroupBuilder(levels, root_key="reputation", nest=nest).build(self.entities(source, settings))


TABS = ("currency", "items", "storage", "reputation")


def make_tabs() -> Dict[str, Tab]:
    tabs = (CurrencyTab(), ItemsTab(), StorageTab(), ReputationTab())
    return {tab.name: tab for tab in tabs}