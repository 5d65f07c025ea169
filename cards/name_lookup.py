"""Canonical player-name lookup.

The built-in table below is merged with known_players.json at the project
root. The JSON file wins on conflicts and is the only thing the
add_name_mapping tool edits, so new variants never require a code change.
"""

import re
from typing import Dict, List, Optional

from cards.term_rules import INITIALS, NAME_SUFFIXES
from util.helpers import load_json, save_json_atomic, collapse_spaces
from util.paths import KNOWN_PLAYERS_PATH

# ------------------------------------------------------------
# BUILT-IN TABLE (lowercase variant -> canonical display name)
# ------------------------------------------------------------
KNOWN_PLAYERS: Dict[str, str] = {
    "lebron": "LeBron James",
    "lebron james": "LeBron James",
    "j.j. mccarthy": "J.J. McCarthy",
    "j j mccarthy": "J.J. McCarthy",
    "jj mccarthy": "J.J. McCarthy",
    "t.j. watt": "T.J. Watt",
    "t j watt": "T.J. Watt",
    "tj watt": "T.J. Watt",
    "ryan ohearn": "Ryan O'Hearn",
    "ryan o'hearn": "Ryan O'Hearn",
    "pedro de la vega": "Pedro De La Vega",
    "elly de la cruz": "Elly De La Cruz",
    "xavier worthy": "Xavier Worthy",
    "caleb williams": "Caleb Williams",
    "anthony edwards": "Anthony Edwards",
    "brock purdy": "Brock Purdy",
    "aaron judge": "Aaron Judge",
    "shohei ohtani": "Shohei Ohtani",
    "michael jordan": "Michael Jordan",
    "kobe bryant": "Kobe Bryant",
    "kobe": "Kobe Bryant",
    "tom brady": "Tom Brady",
    "ja marr chase": "Ja'Marr Chase",
    "jamarr chase": "Ja'Marr Chase",
    "ja'marr chase": "Ja'Marr Chase",
    "michael harris ii": "Michael Harris II",
    "patrick mahomes ii": "Patrick Mahomes II",
    "patrick mahomes": "Patrick Mahomes II",
    "yoshinobu yamamoto": "Yoshinobu Yamamoto",
    "davante adams": "Davante Adams",
    "shaq": "Shaquille O'Neal",
    "shaquille": "Shaquille O'Neal",
    "shaquille oneal": "Shaquille O'Neal",
    "shaquille o'neal": "Shaquille O'Neal",
    "michael penix jr": "Michael Penix Jr",
    "penix jr": "Michael Penix Jr",
    "de von achane": "De'Von Achane",
    "devon achane": "De'Von Achane",
    "vladimir guerrero jr": "Vladimir Guerrero Jr",
    "ronald acuna jr": "Ronald Acuna Jr",
    "ken griffey jr": "Ken Griffey Jr",
    "cj stroud": "CJ Stroud",
    "c.j. stroud": "CJ Stroud",
    "cj kayfus": "CJ Kayfus",
    "daniels": "Jayden Daniels",
    "bowers": "Brock Bowers",
    "worthy": "Xavier Worthy",
    "ohtani": "Shohei Ohtani",
    "wembanyama": "Victor Wembanyama",
    "clark": "Caitlin Clark",
    "hurts": "Jalen Hurts",
    "prescott": "Dak Prescott",
}

# Canonical names matched anywhere in a title before term stripping runs.
# These are names whose pieces collide with card or team vocabulary.
PINNED_NAMES: List[str] = [
    "CJ Stroud",
    "Malik Nabers",
    "Cooper Flagg",
    "Xavier Worthy",
    "Ja'Marr Chase",
]

_TABLE_CACHE: Optional[Dict[str, str]] = None


def _key(name: str) -> str:
    return collapse_spaces((name or "").lower())


def load_known_players(path: str = KNOWN_PLAYERS_PATH) -> Dict[str, str]:
    """Built-in table merged with the JSON overrides at `path`."""
    table = dict(KNOWN_PLAYERS)
    extra = load_json(path, default={})
    if not isinstance(extra, dict):
        print(f"⚠ {path} is not a JSON object. Using built-in names only.")
        return table
    for variant, canonical in extra.items():
        if isinstance(variant, str) and isinstance(canonical, str) and variant.strip():
            table[_key(variant)] = canonical.strip()
    return table


def get_known_players() -> Dict[str, str]:
    global _TABLE_CACHE
    if _TABLE_CACHE is None:
        _TABLE_CACHE = load_known_players()
    return _TABLE_CACHE


def reload_known_players(path: str = KNOWN_PLAYERS_PATH) -> Dict[str, str]:
    global _TABLE_CACHE
    _TABLE_CACHE = load_known_players(path)
    return _TABLE_CACHE


def lookup_canonical(name: str, table: Optional[Dict[str, str]] = None) -> Optional[str]:
    if not name:
        return None
    table = get_known_players() if table is None else table
    return table.get(_key(name))


# ------------------------------------------------------------
# RUNTIME EDITING (known_players.json only)
# ------------------------------------------------------------
def _read_overrides(path: str) -> Dict[str, str]:
    data = load_json(path, default={})
    return dict(data) if isinstance(data, dict) else {}


def save_known_players(mapping: Dict[str, str], path: str = KNOWN_PLAYERS_PATH):
    save_json_atomic({_key(k): v for k, v in mapping.items()}, path)


def add_mapping(variant: str, canonical: str, path: str = KNOWN_PLAYERS_PATH) -> Dict[str, str]:
    variant_key = _key(variant)
    canonical = collapse_spaces(canonical)
    if not variant_key or not canonical:
        raise ValueError("Both a variant and a canonical name are required")
    overrides = _read_overrides(path)
    overrides[variant_key] = canonical
    save_known_players(overrides, path)
    if path == KNOWN_PLAYERS_PATH:
        reload_known_players(path)
    return overrides


def remove_mapping(variant: str, path: str = KNOWN_PLAYERS_PATH) -> bool:
    overrides = _read_overrides(path)
    removed = overrides.pop(_key(variant), None) is not None
    if removed:
        save_known_players(overrides, path)
        if path == KNOWN_PLAYERS_PATH:
            reload_known_players(path)
    return removed


# ------------------------------------------------------------
# CAPITALIZATION
# ------------------------------------------------------------
_ROMAN = {"ii", "iii", "iv"}

# "mac" words that are ordinary names, not a Mac prefix
MAC_EXCEPTIONS = {
    "mack", "macy", "macey", "mace", "machado", "macias", "mackey", "macon",
    "macklin", "mackie", "macho", "maceo", "machete", "macauley", "mackenzie",
}


def _cap_word(word: str) -> str:
    lw = word.lower()
    if not lw:
        return lw
    if lw in _ROMAN:
        return lw.upper()
    if lw in NAME_SUFFIXES:
        return lw.capitalize()
    if lw in INITIALS or re.fullmatch(r"(?:[a-z]\.){1,3}", lw):
        return lw.upper()
    if "-" in lw:
        return "-".join(_cap_word(part) for part in lw.split("-"))
    if "'" in lw:
        return "'".join(part[:1].upper() + part[1:] for part in lw.split("'"))
    if lw.startswith("mc") and len(lw) > 3:
        return "Mc" + lw[2].upper() + lw[3:]
    if lw.startswith("mac") and len(lw) > 5 and lw not in MAC_EXCEPTIONS:
        return "Mac" + lw[3].upper() + lw[4:]
    return lw[0].upper() + lw[1:]


def capitalize_player_name(name: str) -> str:
    """Title-case a player name: McCarthy, MacDonald, O'Neal, Smith-Njigba, CJ, Jr, III."""
    if not name:
        return ""
    return " ".join(_cap_word(w) for w in collapse_spaces(name).split(" "))
