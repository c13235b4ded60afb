'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

# Constant tables describing the game. Grouping and row code read these;
# nothing here contains logic.

WAR_WITHIN = "The War Within"
CURRENT_SEASON = "Season 3"

EXPANSION_ORDER = (
    WAR_WITHIN,
    "Dragonflight",
    "Shadowlands",
    "Battle for Azeroth",
    "Legion",
    "Warlords of Draenor",
    "Mists of Pandaria",
    "Cataclysm",
    "Wrath of the Lich King",
    "The Burning Crusade",
    "Account-Wide",
    "Other",
)

EXPANSION_ICONS = {
    WAR_WITHIN: "Interface\\Icons\\INV_Misc_Gem_Diamond_01",
    "Dragonflight": "Interface\\Icons\\INV_Misc_Head_Dragon_Bronze",
    "Shadowlands": "Interface\\Icons\\INV_Misc_Bone_HumanSkull_01",
    "Battle for Azeroth": "Interface\\Icons\\INV_Sword_39",
    "Legion": "Interface\\Icons\\Spell_Shadow_Twilight",
    "Warlords of Draenor": "Interface\\Icons\\INV_Misc_Tournaments_banner_Orc",
    "Mists of Pandaria": "Interface\\Icons\\Achievement_Character_Pandaren_Female",
    "Cataclysm": "Interface\\Icons\\Spell_Fire_Flameshock",
    "Wrath of the Lich King": "Interface\\Icons\\Spell_Shadow_SoulLeech_3",
    "The Burning Crusade": "Interface\\Icons\\Spell_Fire_FelFlameStrike",
    "Account-Wide": "Interface\\Icons\\INV_Misc_Coin_02",
    "Other": "Interface\\Icons\\INV_Misc_QuestionMark",
}

CURRENCY_CATEGORY_ORDER = ("Crest", "Upgrade", "Supplies", "Currency", "Profession", "PvP", "Event", "Other")
SEASON_CATEGORY_ORDER = ("Crest", "Upgrade", "Other")

# Currency headers / names left out of the "as the game lists them" view
SKIPPED_CURRENCY_HEADERS = ("timerunning",)
SKIPPED_CURRENCY_NAMES = ("infinite knowledge",)

STANDING_NAMES = {
    1: "Hated",
    2: "Hostile",
    3: "Unfriendly",
    4: "Neutral",
    5: "Friendly",
    6: "Honored",
    7: "Revered",
    8: "Exalted",
}

STANDING_COLORS = {
    1: "#cc2121",
    2: "#ed6666",
    3: "#ff9933",
    4: "#ffff00",
    5: "#00ff00",
    6: "#00ff96",
    7: "#00ffff",
    8: "#ba66ff",
}

PARAGON_COLOR = "#ff66ff"
RENOWN_COLOR = "#ffd100"
MAXED_COLOR = "#00ff00"
DEFAULT_RENOWN_MAX = 25

QUALITY_COLORS = {
    0: "#9d9d9d",
    1: "#ffffff",
    2: "#1eff00",
    3: "#0070dd",
    4: "#a335ee",
    5: "#ff8000",
    6: "#e6cc80",
    7: "#00ccff",
}

ITEM_CLASS_NAMES = {
    0: "Consumable",
    1: "Container",
    2: "Weapon",
    3: "Gem",
    4: "Armor",
    5: "Reagent",
    6: "Projectile",
    7: "Trade Goods",
    8: "Item Enhancement",
    9: "Recipe",
    12: "Quest",
    15: "Miscellaneous",
    16: "Glyph",
    17: "Battle Pets",
    18: "WoW Token",
}

ITEM_TYPE_ICONS = {
    0: "Interface\\Icons\\INV_Potion_51",
    1: "Interface\\Icons\\INV_Box_02",
    2: "Interface\\Icons\\INV_Sword_27",
    3: "Interface\\Icons\\INV_Misc_Gem_01",
    4: "Interface\\Icons\\INV_Chest_Cloth_07",
    5: "Interface\\Icons\\INV_Enchant_DustArcane",
    6: "Interface\\Icons\\INV_Ammo_Arrow_02",
    7: "Interface\\Icons\\Trade_Engineering",
    8: "Interface\\Icons\\INV_Misc_EnchantedScroll",
    9: "Interface\\Icons\\INV_Scroll_04",
    12: "Interface\\Icons\\INV_Misc_Key_03",
    15: "Interface\\Icons\\INV_Misc_Gear_01",
    16: "Interface\\Icons\\INV_Inscription_Tradeskill01",
    17: "Interface\\Icons\\PetJournalPortrait",
    18: "Interface\\Icons\\WoW_Token01",
}
DEFAULT_TYPE_ICON = "Interface\\Icons\\INV_Misc_Gear_01"

CLASS_COLORS = {
    "DEATHKNIGHT": "#c41e3a",
    "DEMONHUNTER": "#a330c9",
    "DRUID": "#ff7c0a",
    "EVOKER": "#33937f",
    "HUNTER": "#aad372",
    "MAGE": "#3fc7eb",
    "MONK": "#00ff98",
    "PALADIN": "#f48cba",
    "PRIEST": "#ffffff",
    "ROGUE": "#fff468",
    "SHAMAN": "#0070dd",
    "WARLOCK": "#8788ee",
    "WARRIOR": "#c69b6d",
}

BANK_LABELS = {
    "warband": "Warband Bank",
    "personal": "Personal Bank",
    "guild": "Guild Bank",
}
