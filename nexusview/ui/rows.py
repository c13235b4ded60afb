'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from nexusview.core.gamedata import (
    DEFAULT_RENOWN_MAX,
    MAXED_COLOR,
    PARAGON_COLOR,
    QUALITY_COLORS,
    RENOWN_COLOR,
    STANDING_COLORS,
    STANDING_NAMES,
)
from nexusview.core.models import Entity
from nexusview.ui.constants import (
    PLACEHOLDER_ICON,
    ROW_BG_EVEN,
    ROW_BG_ODD,
    TEXT_DIM,
    TEXT_MUTED,
    TEXT_NORMAL,
)

__all__ = [
    "format_number",
    "format_gold",
    "format_currency_amount",
    "quality_hex",
    "standing_name",
    "standing_color",
    "reputation_progress",
    "base_reputation_maxed",
    "reputation_status",
    "format_reputation_progress",
    "RowPopulator",
    "ItemRowPopulator",
    "StorageRowPopulator",
    "CurrencyRowPopulator",
    "ReputationRowPopulator",
    "POPULATORS",
    "populator_for",
]

# ------------------------------------------------------------------ #
# formatting
# ------------------------------------------------------------------ #

def format_number(num) -> str:
    """Thousands separated by '.', the way the game client shows them: 1.234.567"""
    try:
        value = int(num or 0)
    except (TypeError, ValueError):
        return str(num)
    sign = "-" if value < 0 else ""
    digits = str(abs(value))
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return sign + ".".join(groups)


def format_gold(copper) -> str:
    """Copper amount as '12.345g 67s 89c'; zero parts after the gold are dropped."""
    copper = int(copper or 0)
    gold, rest = divmod(copper, 10000)
    silver, cop = divmod(rest, 100)
    parts = [f"{format_number(gold)}g"] if gold else []
    if silver:
        parts.append(f"{silver}s")
    if cop or not parts:
        parts.append(f"{cop}c")
    return " ".join(parts)


def format_currency_amount(quantity: int, max_quantity: int = 0) -> Tuple[str, str]:
    """
    Amount text and its colour. Capped currencies show "have / cap" and
    turn yellow at half, orange at 80% and red when full.
    """
    quantity = int(quantity or 0)
    max_quantity = int(max_quantity or 0)
    if max_quantity <= 0:
        return format_number(quantity), TEXT_NORMAL

    pct = quantity * 100.0 / max_quantity
    if pct >= 100:
        color = "#ff4444"
    elif pct >= 80:
        color = "#ffaa00"
    elif pct >= 50:
        color = "#ffff00"
    else:
        color = TEXT_NORMAL
    return f"{format_number(quantity)} / {format_number(max_quantity)}", color


def quality_hex(quality) -> str:
    return QUALITY_COLORS.get(quality, TEXT_NORMAL)


def standing_name(standing_id) -> str:
    return STANDING_NAMES.get(standing_id, "Unknown")


def standing_color(standing_id) -> str:
    return STANDING_COLORS.get(standing_id, TEXT_NORMAL)


def reputation_progress(rep: Entity) -> Tuple[int, int, bool]:
    """(current, maximum, is_paragon); paragon values win over base values."""
    if rep.has("paragon_value") and rep.has("paragon_threshold"):
        return int(rep.get("paragon_value")), int(rep.get("paragon_threshold")), True
    return int(rep.get("current_value", 0) or 0), int(rep.get("max_value", 1) or 0), False


def base_reputation_maxed(rep: Entity) -> bool:
    # Paragon only unlocks once the base track is complete.
    if rep.has("paragon_value") and rep.has("paragon_threshold"):
        return True
    if rep.has("renown_level") and rep.has("renown_max_level"):
        return int(rep.get("renown_level")) >= int(rep.get("renown_max_level"))
    return int(rep.get("current_value", 0) or 0) >= int(rep.get("max_value", 1) or 0)


def _uses_renown(rep: Entity) -> bool:
    return bool(rep.get("major")) or int(rep.get("renown_level", 0) or 0) > 0


def reputation_status(rep: Entity) -> Tuple[str, str]:
    """Standing label and colour: "Renown 12" for renown factions, else the standing name."""
    if _uses_renown(rep):
        return f"Renown {int(rep.get('renown_level', 0) or 0)}", RENOWN_COLOR
    standing = rep.get("standing_id", 4)
    return standing_name(standing), standing_color(standing)


def format_reputation_progress(current: int, maximum: int) -> str:
    if maximum > 0:
        return f"{format_number(current)} / {format_number(maximum)}"
    return format_number(current)


# ------------------------------------------------------------------ #
# populators
# ------------------------------------------------------------------ #

class RowPopulator:
    """
    Turns an entity into the field dict a host row displays.

    `fields` returns (fields, missing) where `missing` names the entity
    fields that had to be replaced by placeholders; the renderer logs those.
    Common fields: text, text_color, icon, icon_alpha, right, right_color,
    bg, dimmed.
    """

    kind = "row"
    unknown_name = "Unknown"

    def background(self, index: int) -> str:
        return ROW_BG_EVEN if index % 2 == 0 else ROW_BG_ODD

    def _base(self, entity: Entity, index: int, missing: List[str]) -> Dict[str, Any]:
        name = entity.name
        if not name:
            missing.append("name")
            name = self.unknown_name
        icon = entity.icon
        if icon is None or icon == "":
            missing.append("icon")
            icon = PLACEHOLDER_ICON
        return {
            "text": name,
            "text_color": TEXT_NORMAL,
            "icon": icon,
            "icon_alpha": 1.0,
            "right": "",
            "right_color": TEXT_MUTED,
            "bg": self.background(index),
            "dimmed": bool(missing),
        }

    def fields(self, entity: Entity, index: int) -> Tuple[Dict[str, Any], List[str]]:
        missing: List[str] = []
        return self._base(entity, index, missing), missing

    def tooltip(self, entity: Entity) -> List[str]:
        return [entity.name or self.unknown_name]


class ItemRowPopulator(RowPopulator):
    kind = "item"
    unknown_name = "Unknown Item"

    def location(self, entity: Entity) -> str:
        if entity.tag("bank") == "personal":
            bag = entity.get("bag")
            return f"Bag {bag}" if bag is not None else ""
        tab = entity.get("tab")
        return f"Tab {tab}" if tab is not None else ""

    def fields(self, entity: Entity, index: int):
        missing: List[str] = []
        out = self._base(entity, index, missing)
        quality = entity.get("quality")
        if quality is not None:
            out["text_color"] = quality_hex(quality)
        out["quantity"] = str(max(entity.quantity, 1))
        out["right"] = self.location(entity)
        out["right_color"] = TEXT_DIM
        return out, missing

    def tooltip(self, entity: Entity) -> List[str]:
        lines = [entity.name or self.unknown_name]
        if entity.quantity > 1:
            lines.append(f"Quantity: {format_number(entity.quantity)}")
        item_type = entity.tag("type")
        if item_type:
            lines.append(item_type)
        if entity.has("sell_price") and entity.get("sell_price"):
            lines.append(f"Sell price: {format_gold(entity.get('sell_price'))}")
        location = self.location(entity)
        if location:
            lines.append(f"Location: {location}")
        return lines


class StorageRowPopulator(ItemRowPopulator):
    kind = "storage"


class CurrencyRowPopulator(RowPopulator):
    kind = "currency"
    unknown_name = "Unknown Currency"

    def fields(self, entity: Entity, index: int):
        missing: List[str] = []
        out = self._base(entity, index, missing)
        amount, color = format_currency_amount(entity.quantity, entity.get("max_quantity", 0))
        out["right"] = amount
        out["right_color"] = color
        if entity.quantity <= 0:
            out["icon_alpha"] = 0.4
            out["text_color"] = TEXT_DIM
            out["right_color"] = TEXT_DIM
            out["dimmed"] = True
        return out, missing

    def tooltip(self, entity: Entity) -> List[str]:
        lines = [entity.name or self.unknown_name]
        max_quantity = int(entity.get("max_quantity", 0) or 0)
        if max_quantity > 0:
            lines.append(f"Maximum: {format_number(max_quantity)}")
        for tag in ("expansion", "category"):
            if entity.tag(tag):
                lines.append(f"{tag.capitalize()}: {entity.tag(tag)}")
        return lines


class ReputationRowPopulator(RowPopulator):
    kind = "reputation"
    unknown_name = "Unknown Faction"

    def fields(self, entity: Entity, index: int):
        missing: List[str] = []
        out = self._base(entity, index, missing)
        if not entity.has("max_value") and not entity.has("paragon_threshold") \
                and not entity.has("renown_max_level"):
            missing.append("max_value")
            out["dimmed"] = True

        status, status_color = reputation_status(entity)
        current, maximum, paragon = reputation_progress(entity)
        maxed = base_reputation_maxed(entity)

        if paragon:
            right = format_reputation_progress(current, maximum)
            bar_color = PARAGON_COLOR
        elif maxed:
            right = "Maxed"
            bar_color = MAXED_COLOR
        else:
            right = format_reputation_progress(current, maximum)
            bar_color = RENOWN_COLOR if _uses_renown(entity) else standing_color(entity.get("standing_id", 4))

        if maxed and not paragon:
            progress = 1.0
        elif maximum > 0:
            progress = min(1.0, max(0.0, current / maximum))
        else:
            progress = 0.0

        out.update(
            status=status,
            status_color=status_color,
            right=right,
            right_color=MAXED_COLOR if (maxed and not paragon) else TEXT_NORMAL,
            progress=progress,
            bar_color=bar_color,
            maxed=maxed,
            paragon=paragon,
            reward_pending=bool(entity.get("reward_pending")),
        )
        return out, missing

    def tooltip(self, entity: Entity) -> List[str]:
        lines = [entity.name or self.unknown_name]
        if int(entity.get("renown_level", 0) or 0) > 0:
            renown_max = entity.get("renown_max_level", DEFAULT_RENOWN_MAX)
            lines.append(f"Renown Level: {entity.get('renown_level')} / {renown_max}")
        else:
            lines.append(f"Standing: {standing_name(entity.get('standing_id', 4))}")
        current, maximum, paragon = reputation_progress(entity)
        if paragon:
            lines.append(f"Paragon Progress: {format_reputation_progress(current, maximum)}")
            if entity.get("reward_pending"):
                lines.append("Paragon reward available!")
        elif base_reputation_maxed(entity):
            lines.append("Maxed")
        else:
            lines.append(f"Progress: {format_reputation_progress(current, maximum)}")
        return lines


POPULATORS: Dict[str, RowPopulator] = {
    p.kind: p for p in (
        ItemRowPopulator(),
        StorageRowPopulator(),
        CurrencyRowPopulator(),
        ReputationRowPopulator(),
    )
}


def populator_for(kind: str) -> RowPopulator:
    try:
        return POPULATORS[kind]
    except KeyError:
        raise ValueError(f"No row populator for kind {kind!r}") from None
