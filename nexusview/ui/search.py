from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Set, Tuple

from nexusview.core.models import Entity
from nexusview.ui.types import GroupNode, Groups, Leaf, Leaves

__all__ = ["SearchFilter", "normalize_query", "highlight"]


def normalize_query(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def highlight(text: str, query: str) -> List[Tuple[str, bool]]:
    """
    Split `text` into (segment, is_match) pairs for every case-insensitive
    occurrence of `query`. An empty query returns the whole text unmatched.
    """
    query = normalize_query(query)
    if not text:
        return []
    if not query:
        return [(text, False)]

    parts: List[Tuple[str, bool]] = []
    lower = text.lower()
    pos = 0
    while True:
        hit = lower.find(query, pos)
        if hit < 0:
            break
        if hit > pos:
            parts.append((text[pos:hit], False))
        parts.append((text[hit:hit + len(query)], True))
        pos = hit + len(query)
    if pos < len(text):
        parts.append((text[pos:], False))
    return parts


class SearchFilter:
    """
    Case-insensitive substring filter over entities and group trees.

    `tag_fields` / `data_fields` name extra entity fields that are searched
    besides the name (currency category, item link).
    """

    def __init__(self, tag_fields: Sequence[str] = (), data_fields: Sequence[str] = ()):
        self.tag_fields = tuple(tag_fields)
        self.data_fields = tuple(data_fields)

    def matches(self, entity: Entity, query: str) -> bool:
        query = normalize_query(query)
        if not query:
            return True
        if query in (entity.name or "").lower():
            return True
        for name in self.tag_fields:
            if query in (entity.tag(name) or "").lower():
                return True
        for name in self.data_fields:
            value = entity.get(name)
            if value is not None and query in str(value).lower():
                return True
        return False

    def visible_children(self, leaf: Leaf, query: str) -> Tuple[Entity, ...]:
        """Nested entities to show for `leaf`: all when the leaf itself matches, else only
        the matching ones, which then take the place of the leaf."""
        if not normalize_query(query) or self.matches(leaf.entity, query):
            return leaf.children
        return tuple(c for c in leaf.children if self.matches(c, query))

    def leaf_count(self, leaf: Leaf, query: str) -> int:
        if not self.matches(leaf.entity, query):
            return len(self.visible_children(leaf, query))
        return 1 + len(leaf.children)

    def count(self, node: GroupNode, query: str) -> int:
        """Number of entity positions under `node` that survive `query`."""
        if not normalize_query(query):
            return node.leaf_count()
        return sum(self.leaf_count(leaf, query) for leaf in node.iter_leaves())

    def annotate_tree(self, root: GroupNode, query: str) -> Set[str]:
        """
        Keys of every group (and nested leaf) with at least one matching
        descendant. With an empty query every key in the tree is returned.
        """
        query = normalize_query(query)
        keys: Set[str] = set()
        self._annotate(root, query, keys)
        return keys

    def _annotate(self, node: GroupNode, query: str, keys: Set[str]) -> bool:
        found = False
        for leaf in node.leaves():
            if not query or self.matches(leaf.entity, query):
                found = True
                if leaf.key:
                    keys.add(leaf.key)
            elif self.visible_children(leaf, query):
                found = True
        for child in node.child_groups():
            if self._annotate(child, query, keys):
                found = True
        if found or not query:
            keys.add(node.key)
        return found

    def prune(self, root: GroupNode, query: str) -> Optional[GroupNode]:
        """Copy of `root` keeping only matching leaves and their ancestors."""
        query = normalize_query(query)
        if not query:
            return root
        return self._prune(root, query)

    def _prune(self, node: GroupNode, query: str) -> Optional[GroupNode]:
        wrapped = self._prune(node.wrapped, query) if node.wrapped is not None else None
        if isinstance(node.children, Groups):
            kept = tuple(c for c in (self._prune(g, query) for g in node.children.nodes) if c is not None)
            children = Groups(kept)
            empty = not kept
        else:
            kept_leaves = tuple(self._prune_leaves(node.children.leaves, query))
            children = Leaves(kept_leaves)
            empty = not kept_leaves
        if empty and wrapped is None:
            return None
        return GroupNode(
            key=node.key,
            label=node.label,
            children=children,
            default_expanded=node.default_expanded,
            icon=node.icon,
            color=node.color,
            level=node.level,
            value=node.value,
            wrapped=wrapped,
            title=node.title,
        )

    def _prune_leaves(self, leaves: Sequence[Leaf], query: str) -> Iterator[Leaf]:
        for leaf in leaves:
            if self.matches(leaf.entity, query):
                yield leaf
            else:
                for child in self.visible_children(leaf, query):
                    yield Leaf(child)
