# ui/types.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Tuple, Union

from nexusview.core.models import Entity


@dataclass(slots=True, frozen=True)
class Leaf:
    """
    One leaf position in a group.

    • entity    – the record rendered as a row
    • key       – expansion key for `children`, None when there are none
    • children  – nested entities shown under this row (reputation sub-factions)
    """
    entity: Entity
    key: Optional[str] = None
    children: Tuple[Entity, ...] = ()

    def size(self) -> int:
        return 1 + len(self.children)


@dataclass(slots=True, frozen=True)
class Groups:
    nodes: Tuple["GroupNode", ...] = ()


@dataclass(slots=True, frozen=True)
class Leaves:
    leaves: Tuple[Leaf, ...] = ()


Children = Union[Groups, Leaves]

# (label, count) -> header text
TitleFn = Callable[[str, int], str]


def default_title(label: str, count: int) -> str:
    return f"{label} ({count})"


@dataclass(slots=True)
class GroupNode:
    """
    A collapsible header and everything under it.

    • key              – unique, derived from the ancestor chain
    • children         – sub-groups or leaves, never both
    • wrapped          – optional synthetic sub-group rendered after `children`
    • default_expanded – used when the expansion store has no entry for `key`
    • level            – depth below the root (root = -1, top-level groups = 0)
    """
    key: str
    label: str
    children: Children
    default_expanded: bool = True
    icon: Optional[str] = None
    color: Optional[str] = None
    level: int = 0
    value: Optional[str] = None
    wrapped: Optional["GroupNode"] = None
    title: TitleFn = default_title

    def child_groups(self) -> Tuple["GroupNode", ...]:
        groups = self.children.nodes if isinstance(self.children, Groups) else ()
        return groups + ((self.wrapped,) if self.wrapped is not None else ())

    def leaves(self) -> Tuple[Leaf, ...]:
        return self.children.leaves if isinstance(self.children, Leaves) else ()

    def iter_groups(self) -> Iterator["GroupNode"]:
        """This node and every descendant group, depth first."""
        yield self
        for child in self.child_groups():
            yield from child.iter_groups()

    def iter_leaves(self) -> Iterator[Leaf]:
        yield from self.leaves()
        for child in self.child_groups():
            yield from child.iter_leaves()

    def leaf_count(self) -> int:
        return sum(leaf.size() for leaf in self.iter_leaves())

    def is_empty(self) -> bool:
        return not self.leaves() and not self.child_groups()


@dataclass(slots=True, frozen=True)
class Emitted:
    """
    A single node produced by a render pass.

    • kind   – "header", "row", "subrow" or "empty"
    • key    – group key for headers, "<kind>:<entity_id>" for rows
    • level  – indent level
    • y      – top offset in content coordinates
    • text   – what the node displays (header title, row name, empty message)
    """
    kind: str
    key: str
    level: int
    y: int
    text: str = ""
