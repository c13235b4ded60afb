import sys
import random
import json
from pathlib import Path

# Usage: create_sample_snapshot.py /path/to/snapshot.json N_CHARACTERS [SEED]

REALMS = ["Silvermoon", "Draenor", "Kazzak", "Argent Dawn", "Ravencrest"]
NAMES = ["Alice", "Brannor", "Cyrelle", "Dusk", "Elowen", "Faelith", "Gorrak", "Hestia", "Ithil", "Jorun"]
CLASSES = ["MAGE", "PRIEST", "WARRIOR", "ROGUE", "DRUID", "PALADIN", "HUNTER", "SHAMAN", "EVOKER", "MONK"]

CURRENCIES = [
    # (id, name, expansion, category, season, header, max)
    (3008, "Valorstones", "The War Within", "Upgrade", "Season 3", "Season 3", 2000),
    (3284, "Weathered Ethereal Crest", "The War Within", "Crest", "Season 3", "Season 3", 0),
    (3286, "Carved Ethereal Crest", "The War Within", "Crest", "Season 3", "Season 3", 0),
    (3056, "Kej", "The War Within", "Currency", None, "The War Within", 0),
    (3028, "Restored Coffer Key", "The War Within", "Supplies", None, "The War Within", 0),
    (2003, "Dragon Isles Supplies", "Dragonflight", "Supplies", None, "Dragonflight", 0),
    (2245, "Flightstones", "Dragonflight", "Upgrade", None, "Dragonflight", 0),
    (1767, "Stygia", "Shadowlands", "Currency", None, "Shadowlands", 0),
    (1220, "Order Resources", "Legion", "Currency", None, "Legion", 0),
    (1226, "Nethershard", "Legion", "Currency", None, "Legion", 0),
    (1792, "Honor", "Account-Wide", "PvP", None, "Player vs. Player", 15000),
    (2032, "Trader's Tender", "Account-Wide", "Event", None, "Miscellaneous", 0),
    (3001, "Infinite Knowledge", "Other", "Other", None, "Timerunning", 0),
]

ITEMS = [
    # (id, name, class_id, type, quality)
    (2589, "Linen Cloth", 7, "Trade Goods", 1),
    (4306, "Silk Cloth", 7, "Trade Goods", 1),
    (210796, "Mycobloom", 7, "Trade Goods", 1),
    (212241, "Algari Healing Potion", 0, "Consumable", 1),
    (211878, "Algari Mana Potion", 0, "Consumable", 1),
    (219906, "Charged Runeaxe", 2, "Weapon", 3),
    (221089, "Cavedweller's Shoulderguards", 4, "Armor", 4),
    (213777, "Magnificent Jeweler's Setting", 3, "Gem", 2),
    (224025, "Crackling Shard", 15, "Miscellaneous", 3),
]

REPUTATIONS = [
    # (id, name, header, parent, header_with_rep, renown_max)
    (2590, "Council of Dornogal", "Khaz Algar", None, False, 25),
    (2594, "The Assembly of the Deeps", "Khaz Algar", None, False, 25),
    (2570, "Hallowfall Arathi", "Khaz Algar", None, False, 25),
    (2600, "The Severed Threads", "Khaz Algar", None, True, 25),
    (2601, "The Weaver", "Khaz Algar", "The Severed Threads", False, None),
    (2605, "The General", "Khaz Algar", "The Severed Threads", False, None),
    (2607, "The Vizier", "Khaz Algar", "The Severed Threads", False, None),
    (2507, "Dragonscale Expedition", "Dragonflight", None, False, 25),
    (1090, "Kirin Tor", "Wrath of the Lich King", None, False, None),
]


def make_characters(count, rng):
    chars = []
    for i in range(count):
        name = NAMES[i % len(NAMES)] + ("" if i < len(NAMES) else str(i))
        chars.append({
            "name": name,
            "realm": rng.choice(REALMS),
            "class": rng.choice(CLASSES),
            "level": rng.choice([70, 80, 80, 80]),
        })
    return chars


def make_currencies(chars, rng):
    out = []
    for char in chars:
        owner = f"{char['name']}-{char['realm']}"
        for cid, name, expansion, category, season, header, cap in CURRENCIES:
            if rng.random() < 0.25:
                continue
            row = {
                "id": cid, "name": name, "owner": owner,
                "quantity": rng.choice([0, rng.randint(1, 50), rng.randint(100, 250000)]),
                "icon": f"Interface\\Icons\\Currency_{cid}",
                "expansion": expansion, "category": category, "header": header,
            }
            if season:
                row["season"] = season
            if cap:
                row["max"] = cap
                row["quantity"] = min(row["quantity"], cap)
            out.append(row)
    return out


def make_items(chars, rng):
    out = []
    for tab in range(1, 6):
        for iid, name, class_id, item_type, quality in rng.sample(ITEMS, 4):
            out.append({
                "id": iid, "name": name, "bank": "warband", "tab": tab,
                "stack": rng.randint(1, 200), "class_id": class_id, "type": item_type,
                "quality": quality, "icon": f"Interface\\Icons\\Item_{iid}",
                "link": f"|cff9d9d9d|Hitem:{iid}::::::::80:::::|h[{name}]|h|r",
                "sell_price": rng.randint(0, 500000),
            })
    for char in chars:
        owner = f"{char['name']}-{char['realm']}"
        for bag in range(6, 9):
            for iid, name, class_id, item_type, quality in rng.sample(ITEMS, 3):
                out.append({
                    "id": iid, "name": name, "bank": "personal", "bag": bag, "owner": owner,
                    "stack": rng.randint(1, 20), "class_id": class_id, "type": item_type,
                    "quality": quality, "icon": f"Interface\\Icons\\Item_{iid}",
                })
    return out


def make_reputations(chars, rng):
    out = []
    for char in chars:
        owner = f"{char['name']}-{char['realm']}"
        for fid, name, header, parent, with_rep, renown_max in REPUTATIONS:
            row = {"id": fid, "name": name, "owner": owner, "header": header}
            if parent:
                row["parent"] = parent
            if with_rep:
                row["header_with_rep"] = True
            if renown_max:
                row["major"] = True
                row["renown"] = rng.randint(1, renown_max)
                row["renown_max"] = renown_max
                row["current"] = rng.randint(0, 2500)
                row["max"] = 2500
                if row["renown"] == renown_max and rng.random() < 0.5:
                    row["paragon"] = rng.randint(0, 10000)
                    row["paragon_threshold"] = 10000
                    row["reward_pending"] = rng.random() < 0.2
            else:
                row["standing"] = rng.randint(4, 8)
                row["current"] = rng.randint(0, 21000)
                row["max"] = 21000
            out.append(row)
    return out


def main():
    if len(sys.argv) not in (3, 4):
        print(f"Usage: {sys.argv[0]} /path/to/snapshot.json N_CHARACTERS [SEED]")
        sys.exit(1)

    path = Path(sys.argv[1])
    count = int(sys.argv[2])
    rng = random.Random(int(sys.argv[3]) if len(sys.argv) == 4 else None)
    if count < 1:
        print("Error: need at least one character")
        sys.exit(1)

    chars = make_characters(count, rng)
    snapshot = {
        "current": f"{chars[0]['name']}-{chars[0]['realm']}",
        "characters": chars,
        "currencies": make_currencies(chars, rng),
        "items": make_items(chars, rng),
        "reputations": make_reputations(chars, rng),
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(snapshot, f, indent=2)

    print(f"Wrote {path}: {len(chars)} characters, {len(snapshot['currencies'])} currencies, "
          f"{len(snapshot['items'])} items, {len(snapshot['reputations'])} reputations")

if __name__ == '__main__':
    main()
