'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from nexusview.core.jsonio import read_json
from nexusview.core.log import Log
from nexusview.core.models import Character, Entity

__all__ = ["SnapshotSource", "SCOPES"]

SCOPES = ("currencies", "items", "reputations")

# snapshot field -> where it lands on the Entity ("tags" or "data")
_CURRENCY_FIELDS = {
    "expansion": "tags", "category": "tags", "season": "tags", "header": "tags",
    "max": "data", "hidden": "data", "quality": "data",
}
_ITEM_FIELDS = {
    "bank": "tags", "type": "tags",
    "class_id": "data", "quality": "data", "link": "data", "tab": "data",
    "bag": "data", "slot": "data", "level": "data", "sell_price": "data",
}
_REPUTATION_FIELDS = {
    "header": "tags", "parent": "tags",
    "standing": "data", "current": "data", "max": "data", "renown": "data",
    "renown_max": "data", "paragon": "data", "paragon_threshold": "data",
    "reward_pending": "data", "major": "data", "header_with_rep": "data",
}

# snapshot names -> names used by the row code
_DATA_RENAMES = {
    "max": "max_quantity",
    "standing": "standing_id",
    "current": "current_value",
    "renown": "renown_level",
    "renown_max": "renown_max_level",
    "paragon": "paragon_value",
}
_REPUTATION_RENAMES = dict(_DATA_RENAMES, max="max_value")


def _entity_from_dict(kind: str, raw: Dict[str, Any], fields: Dict[str, str],
                      renames: Dict[str, str] = _DATA_RENAMES) -> Entity:
    tags: Dict[str, str] = {}
    data: Dict[str, Any] = {}
    for name, target in fields.items():
        value = raw.get(name)
        if value is None:
            continue
        if target == "tags":
            tags[name] = str(value)
        else:
            data[renames.get(name, name)] = value
    return Entity(
        entity_id=int(raw["id"]),
        name=raw.get("name"),
        kind=kind,
        owner=raw.get("owner"),
        tags=tags,
        quantity=int(raw.get("quantity", raw.get("stack", 0)) or 0),
        icon=raw.get("icon"),
        data=data,
    )


class SnapshotSource:
    """
    Read-only view over one scanner snapshot.

    The snapshot is a JSON document written by the in-game scanner:

        {
          "current": "Alice-Realm",
          "characters": [{"name": "Alice", "realm": "Realm", "class": "MAGE"}],
          "currencies": [{"id": 3008, "name": "Valorstones", "owner": "Alice-Realm", ...}],
          "items": [{"id": 2589, "name": "Linen Cloth", "bank": "warband", ...}],
          "reputations": [{"id": 2590, "name": "Council of Dornogal", ...}]
        }

    Entities are converted once on load and shared between render passes.
    """

    def __init__(self, data: Dict[str, Any], origin: str = "<memory>"):
        self.origin = origin
        self.current_key: Optional[str] = data.get("current")
        self._characters: List[Character] = []
        self._entities: Dict[str, List[Entity]] = {scope: [] for scope in SCOPES}
        self._load(data)

    @classmethod
    def from_file(cls, path) -> "SnapshotSource":
        p = Path(path).expanduser()
        data = read_json(p, None)
        if data is None:
            raise ValueError(f"Snapshot not found: {p}")
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot {p} must contain a JSON object")
        return cls(data, origin=str(p))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SnapshotSource":
        return cls(data)

    @classmethod
    def empty(cls) -> "SnapshotSource":
        return cls({})

    def _load(self, data: Dict[str, Any]) -> None:
        for raw in data.get("characters", []) or []:
            self._characters.append(Character.from_dict(raw, self.current_key))

        table = (
            ("currencies", "currency", _CURRENCY_FIELDS, _DATA_RENAMES),
            ("items", "item", _ITEM_FIELDS, _DATA_RENAMES),
            ("reputations", "reputation", _REPUTATION_FIELDS, _REPUTATION_RENAMES),
        )
        for scope, kind, fields, renames in table:
            bad = 0
            for raw in data.get(scope, []) or []:
                try:
                    self._entities[scope].append(_entity_from_dict(kind, raw, fields, renames))
                except (KeyError, TypeError, ValueError) as e:
                    bad += 1
                    Log.debug(f"Skipping malformed {kind} record in {self.origin}: {e}", 1)
            if bad:
                Log.debug(f"{bad} {kind} record(s) skipped in {self.origin}", 0)

        Log.debug(
            f"Snapshot {self.origin}: {len(self._characters)} characters, "
            + ", ".join(f"{len(v)} {k}" for k, v in self._entities.items()),
            1,
        )

    # ------------------------------------------------------------------ #
    # queries
    # ------------------------------------------------------------------ #

    def get_characters(self) -> List[Character]:
        return list(self._characters)

    def current_character(self) -> Optional[Character]:
        for char in self._characters:
            if char.is_online:
                return char
        return None

    def character(self, key: Optional[str]) -> Optional[Character]:
        for char in self._characters:
            if char.key == key:
                return char
        return None

    def get_entities(self, scope: str) -> List[Entity]:
        if scope not in self._entities:
            raise KeyError(f"Unknown snapshot scope: {scope!r}")
        return list(self._entities[scope])

    def stats(self) -> Dict[str, int]:
        out = {"characters": len(self._characters)}
        out.update({scope: len(v) for scope, v in self._entities.items()})
        return out
