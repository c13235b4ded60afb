# core/models.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

__all__ = ["Entity", "Character", "character_key"]


def character_key(name: Optional[str], realm: Optional[str]) -> str:
    return f"{name or 'Unknown'}-{realm or 'Unknown'}"


@dataclass(slots=True, frozen=True)
class Character:
    """
    One scanned character.

    • name / realm – together form the character key ("Name-Realm")
    • class_file   – upper-case class token, e.g. "MAGE" (used for colouring)
    • is_online    – True for the character the snapshot was taken on
    """
    name: str
    realm: str
    class_file: str = ""
    level: int = 0
    is_online: bool = False

    @property
    def key(self) -> str:
        return character_key(self.name, self.realm)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], current_key: Optional[str] = None) -> "Character":
        name = data.get("name") or "Unknown"
        realm = data.get("realm") or "Unknown"
        return cls(
            name=name,
            realm=realm,
            class_file=data.get("class", "") or "",
            level=int(data.get("level", 0) or 0),
            is_online=character_key(name, realm) == current_key,
        )


@dataclass(slots=True, frozen=True, eq=False)
class Entity:
    """
    A leaf record: an item stack, a currency balance or a faction standing.

    `tags` carries the classification fields the grouping levels look at
    (expansion, category, season, header, bank, type, parent). `data` carries
    the kind specific display fields (max_quantity, quality, link, standing_id,
    renown_level, paragon_value ...). Missing values are left out rather than
    stored as None so row code can tell "absent" from "zero".
    """
    entity_id: int
    name: Optional[str]
    kind: str
    owner: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)
    quantity: int = 0
    icon: Union[str, int, None] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def tag(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self.tags.get(name)
        return value if value not in (None, "") else default

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def has(self, name: str) -> bool:
        return self.data.get(name) is not None
