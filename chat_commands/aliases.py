"""Boss, activity and skill name aliases.

Users type short forms in chat commands ("!kc jad", "!lvl wc"). Everything
downstream (stat store keys, chat service queries) uses one canonical name,
so aliases are resolved before any lookup.

Unknown boss names fall back to capitalising the first letter of each word:
"zulrah" → "Zulrah", "the nightmare" → "The Nightmare".
"""

from types import MappingProxyType

BOSS_ALIASES = MappingProxyType({
    "corp": "Corporeal Beast",
    "jad": "TzTok-Jad",
    "kq": "Kalphite Queen",
    "chaos ele": "Chaos Elemental",
    "dusk": "Grotesque Guardians",
    "dawn": "Grotesque Guardians",
    "gargs": "Grotesque Guardians",
    "crazy arch": "Crazy Archaeologist",
    "deranged arch": "Deranged Archaeologist",
    "mole": "Giant Mole",
    "vetion": "Vet'ion",
    "vene": "Venenatis",
    "kbd": "King Black Dragon",
    "vork": "Vorkath",
    "sire": "Abyssal Sire",
    "smoke devil": "Thermonuclear Smoke Devil",
    "thermy": "Thermonuclear Smoke Devil",
    "cerb": "Cerberus",
    "zuk": "TzKal-Zuk",
    "inferno": "TzKal-Zuk",
    "hydra": "Alchemical Hydra",
    # gwd
    "sara": "Commander Zilyana",
    "saradomin": "Commander Zilyana",
    "zilyana": "Commander Zilyana",
    "zily": "Commander Zilyana",
    "zammy": "K'ril Tsutsaroth",
    "zamorak": "K'ril Tsutsaroth",
    "kril": "K'ril Tsutsaroth",
    "kril trutsaroth": "K'ril Tsutsaroth",
    "arma": "Kree'arra",
    "kree": "Kree'arra",
    "kreearra": "Kree'arra",
    "armadyl": "Kree'arra",
    "bando": "General Graardor",
    "bandos": "General Graardor",
    "graardor": "General Graardor",
    # dks
    "supreme": "Dagannoth Supreme",
    "rex": "Dagannoth Rex",
    "prime": "Dagannoth Prime",
    "wt": "Wintertodt",
    "barrows": "Barrows Chests",
    "herbi": "Herbiboar",
    # cox
    "cox": "Chambers of Xeric",
    "xeric": "Chambers of Xeric",
    "chambers": "Chambers of Xeric",
    "olm": "Chambers of Xeric",
    "raids": "Chambers of Xeric",
    "cox cm": "Chambers of Xeric Challenge Mode",
    "xeric cm": "Chambers of Xeric Challenge Mode",
    "chambers cm": "Chambers of Xeric Challenge Mode",
    "olm cm": "Chambers of Xeric Challenge Mode",
    "raids cm": "Chambers of Xeric Challenge Mode",
    # tob
    "tob": "Theatre of Blood",
    "theatre": "Theatre of Blood",
    "verzik": "Theatre of Blood",
    "verzik vitur": "Theatre of Blood",
    "raids 2": "Theatre of Blood",
    # agility courses
    "prif": "Prifddinas Agility Course",
    "prifddinas": "Prifddinas Agility Course",
    "gaunt": "Gauntlet",
    "gauntlet": "Gauntlet",
    "cgaunt": "Corrupted Gauntlet",
    "cgauntlet": "Corrupted Gauntlet",
    # pvp, until !pks covers every world type
    "pks": "Player Kills",
    "pks bh": "Player Kills Bounty",
    "pks pvp": "Player Kills Pvp",
})

SKILL_ABBREVIATIONS = MappingProxyType({
    "att": "Attack",
    "atk": "Attack",
    "attk": "Attack",
    "def": "Defence",
    "defense": "Defence",
    "str": "Strength",
    "hp": "Hitpoints",
    "range": "Ranged",
    "ranging": "Ranged",
    "pray": "Prayer",
    "mage": "Magic",
    "cook": "Cooking",
    "wc": "Woodcutting",
    "fletch": "Fletching",
    "fish": "Fishing",
    "fm": "Firemaking",
    "fming": "Firemaking",
    "craft": "Crafting",
    "smith": "Smithing",
    "mine": "Mining",
    "herb": "Herblore",
    "agi": "Agility",
    "agil": "Agility",
    "thief": "Thieving",
    "slay": "Slayer",
    "farm": "Farming",
    "rc": "Runecraft",
    "runecrafting": "Runecraft",
    "hunt": "Hunter",
    "con": "Construction",
    "cons": "Construction",
    "overall": "Overall",
    "total": "Overall",
})


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of each space-separated word, leave the rest."""
    return " ".join(w[:1].upper() + w[1:] for w in text.split(" "))


def resolve(boss: str) -> str:
    """Return the canonical boss/activity name for a user-typed alias."""
    boss = boss.strip()
    canonical = BOSS_ALIASES.get(boss.lower())
    if canonical is not None:
        return canonical
    return capitalize_words(boss)


def skill_full_name(abbrev: str) -> str:
    """Expand a skill abbreviation; unknown input is returned as typed."""
    return SKILL_ABBREVIATIONS.get(abbrev.strip().lower(), abbrev.strip())
