"""Listing-title normalizer.

Turns a free-text marketplace title into the pieces the pricing database
stores: player name, set terms, brand/set, parallel, sport, year, card
number, print run and grade.

Player-name extraction is a fixed sequence of passes:

    start -> afterGradingStrip -> afterInitialsCleanup -> pinnedNameHit?
          -> afterNumberStrip -> afterTermStrip -> candidate
          -> knownPlayersHit? -> afterTargetedFixes -> final

Pass a list as `steps` to get one {"step", "clean_title"} dict per pass.
Every function here takes untrusted text and returns a best guess; none
of them raise on str input.
"""

import re
from typing import Dict, List, Optional, Tuple

from cards import term_rules as R
from cards.name_lookup import (
    PINNED_NAMES,
    capitalize_player_name,
    get_known_players,
    lookup_canonical,
)
from util.config import env_flag
from util.helpers import collapse_spaces
from util.logger import log

COLOR_TERMS = {
    "gold", "silver", "bronze", "black", "white", "red", "blue", "green", "yellow",
    "orange", "purple", "pink", "teal", "aqua", "lime", "magenta", "fuchsia",
}

_TERM_LISTS = (
    R.SPORT_TERMS, R.CARD_BRAND_TERMS, R.PARALLEL_TERMS, R.FEATURE_TERMS,
    R.TEAM_TERMS, R.CITY_TERMS, R.DESCRIPTION_TERMS,
)

# Phrases containing a space go through the phrase pass, longest first.
PHRASE_TERMS: List[str] = sorted(
    {t for lst in _TERM_LISTS for t in lst if " " in t},
    key=len,
    reverse=True,
)
SINGLE_TERMS = {t for lst in _TERM_LISTS for t in lst if " " not in t} - COLOR_TERMS
PARALLEL_SINGLES = {t for t in R.PARALLEL_TERMS if " " not in t} - COLOR_TERMS

_SUFFIX_BARE = {s.rstrip(".") for s in R.NAME_SUFFIXES}


def _apply_patterns(text: str, patterns: List[Tuple[str, str]]) -> str:
    for pattern, repl in patterns:
        text = re.sub(pattern, repl, text, flags=re.IGNORECASE)
    return collapse_spaces(text)


def _phrase_regex(phrase: str) -> str:
    return r"(?<![\w'])" + re.escape(phrase) + r"(?![\w'])"


# ============================================================
# TITLE CLEANERS
# ============================================================

def clean_summary_title(title: str) -> str:
    """Strip grades, hype, card-feature, sport, team and city words."""
    if not title:
        return ""
    t = title
    for pattern, repl in R.SUMMARY_STRIP_PATTERNS:
        t = re.sub(pattern, repl, t, flags=re.IGNORECASE)
    # special characters and emojis; keep - . # /
    t = re.sub(r"[^\w\s\-.#/]", "", t)
    # standalone hyphens go, year ranges like 1994-95 stay
    t = re.sub(r"(?<!\d)\s*-\s*(?!\d)", " ", t)
    t = re.sub(r"^\s*-\s*", "", t)
    t = re.sub(r"\s*-\s*$", "", t)
    return collapse_spaces(t)


def clean_title_for_search(title: str) -> str:
    """Lowercased search query: grades and feature words removed, #numbers and /runs kept."""
    if not title:
        return ""
    return _apply_patterns(title.lower(), R.SEARCH_STRIP_PATTERNS)


def cleanup_initials(text: str) -> str:
    """Repair period-mangled initials: Cj.s.troud, C.J.stroud, C.J. Stroud -> CJ Stroud."""
    if not text:
        return ""
    t = re.sub(
        r"\b([A-Za-z]{2})\.([A-Za-z])\.([a-z]+)\b",
        lambda m: f"{m.group(1).upper()} {m.group(2).upper()}{m.group(3)}",
        text,
    )
    t = re.sub(
        r"\b([A-Za-z])\.([A-Za-z])\.([A-Za-z]{2,})\b",
        lambda m: f"{(m.group(1) + m.group(2)).upper()} {m.group(3).capitalize()}",
        t,
    )
    t = re.sub(
        r"\b([A-Za-z])\.\s?([A-Za-z])\.(?=\s|$)",
        lambda m: (m.group(1) + m.group(2)).upper(),
        t,
    )
    return t


def find_pinned_name(text: str, names: Optional[List[str]] = None) -> Optional[str]:
    if not text:
        return None
    lowered = text.lower()
    for name in PINNED_NAMES if names is None else names:
        parts = name.lower().replace("'", " ").split()
        pattern = r"\b" + r"['\s\-.]*".join(re.escape(p) for p in parts) + r"\b"
        if re.search(pattern, lowered):
            return name
    return None


def strip_terms(text: str) -> List[str]:
    """Remove card, team, city and description vocabulary; return the remaining words."""
    t = (text or "").lower()
    t = re.sub(r"[^\w\s'\-.&/]", " ", t)
    for phrase in PHRASE_TERMS:
        t = re.sub(_phrase_regex(phrase), " ", t)
    for pattern in R.CODE_PATTERNS:
        t = re.sub(pattern, " ", t)

    raw = [w.strip(".-'/&,") for w in t.split()]
    raw = [w for w in raw if w]
    kept: List[str] = []
    for i, word in enumerate(raw):
        if len(word) < 2:
            continue
        if word in R.TERMS_TO_KEEP:
            kept.append(word)
            continue
        if word in SINGLE_TERMS:
            continue
        if word in COLOR_TERMS:
            # A color right after a lone first name is usually a surname (Jalen Green).
            nxt = raw[i + 1] if i + 1 < len(raw) else ""
            if len(kept) == 1 and nxt not in PARALLEL_SINGLES:
                kept.append(word)
            continue
        kept.append(word)
    return kept


def select_name_words(words: List[str]) -> List[str]:
    """First two words, extended through particles (de, la) and suffixes (jr, ii)."""
    if not words:
        return []
    out = [words[0]]
    for word in words[1:]:
        if len(out) >= 4:
            break
        if len(out) < 2:
            out.append(word)
        elif out[-1] in R.NAME_PARTICLES or word.rstrip(".") in _SUFFIX_BARE:
            out.append(word)
        else:
            break
    while len(out) > 1 and out[-1] in R.NAME_PARTICLES:
        out.pop()
    return out


def _lookup_words(words: List[str], table: Dict[str, str]) -> Optional[str]:
    for n in range(min(4, len(words)), 1, -1):
        hit = lookup_canonical(" ".join(words[:n]), table)
        if hit:
            return hit
    # single-word keys (shaq, ohtani) only when nothing but a color follows
    if words and (len(words) == 1 or words[1] in COLOR_TERMS):
        return lookup_canonical(words[0], table)
    return None


def apply_targeted_fixes(player_name: str) -> str:
    """Drop a leading sport word and trailing city/description words."""
    if not player_name:
        return ""
    fixed = player_name
    changed = False
    for prefix in R.PREFIX_FIXES:
        new = re.sub(r"^" + re.escape(prefix) + r"\s+", "", fixed, flags=re.IGNORECASE)
        if new != fixed:
            fixed, changed = new, True
    for suffix in R.SUFFIX_FIXES:
        new = re.sub(r"\s+" + re.escape(suffix) + r"$", "", fixed, flags=re.IGNORECASE)
        if new != fixed:
            fixed, changed = new, True
    fixed = collapse_spaces(fixed)
    if changed and fixed:
        return capitalize_player_name(fixed)
    return player_name


# ============================================================
# PLAYER NAME
# ============================================================

def extract_player_name(
    title: str,
    steps: Optional[List[Dict]] = None,
    table: Optional[Dict[str, str]] = None,
) -> str:
    verbose = env_flag("VERBOSE_EXTRACTION")

    def _step(name: str, value: str, **extra):
        if steps is not None:
            entry = {"step": name, "clean_title": value}
            entry.update(extra)
            steps.append(entry)
        if verbose:
            suffix = f" → {extra['result']}" if "result" in extra else ""
            log(f"{name}: \"{value}\"{suffix}", "debug")

    if not title or not isinstance(title, str):
        _step("start", "")
        _step("final", "")
        return ""

    table = get_known_players() if table is None else table

    clean = collapse_spaces(title)
    _step("start", clean)

    clean = _apply_patterns(clean, R.GRADING_PATTERNS)
    _step("afterGradingStrip", clean)

    clean = cleanup_initials(clean)
    _step("afterInitialsCleanup", clean)

    pinned = find_pinned_name(clean)
    if pinned:
        _step("pinnedNameHit", clean, result=pinned)
        return pinned

    clean = _apply_patterns(clean, R.NUMBER_PATTERNS)
    _step("afterNumberStrip", clean)

    words = strip_terms(clean)
    _step("afterTermStrip", " ".join(words))

    candidate = " ".join(select_name_words(words))
    _step("candidate", candidate)
    if not candidate:
        _step("final", "")
        return ""

    hit = _lookup_words(words, table)
    if hit:
        _step("knownPlayersHit", candidate, result=hit)
        return hit

    fixed = apply_targeted_fixes(candidate)
    _step("afterTargetedFixes", fixed)

    result = capitalize_player_name(fixed)
    _step("final", result)
    return result


# ============================================================
# SET / BRAND / TYPE / SPORT
# ============================================================

def extract_set_terms(title: str) -> List[str]:
    """Brand and set phrases in title order, longest phrase wins an overlap."""
    if not title:
        return []
    t = re.sub(r"[^\w\s'\-&/]", " ", title.lower())
    found: List[Tuple[int, str]] = []
    for phrase in sorted(R.CARD_BRAND_TERMS, key=len, reverse=True):
        for m in re.finditer(_phrase_regex(phrase), t):
            found.append((m.start(), phrase))
            t = t[:m.start()] + " " * (m.end() - m.start()) + t[m.end():]
    found.sort()
    return list(dict.fromkeys(p for _, p in found))


def extract_brand_and_set(title: str) -> Tuple[str, str]:
    if not title:
        return "Unknown", "Unknown"
    t = title.lower()
    for needle, brand, set_name in R.BRAND_SET_TABLE:
        if needle in t:
            return brand, set_name
    return "Unknown", "Unknown"


def detect_card_type(title: str) -> str:
    t = (title or "").lower()
    if re.search(r"\b(rookie|rc)\b", t):
        return "Rookie"
    if re.search(r"\b(auto|autograph|autographed)\b", t):
        return "Autograph"
    if re.search(r"\b(jersey|patch|relic)\b", t):
        return "Relic"
    if "refractor" in t:
        return "Refractor"
    if "parallel" in t:
        return "Parallel"
    return "Base"


def extract_parallel(title: str) -> Optional[str]:
    """First parallel descriptor in the title, title-cased (Silver Prizm, Gold Refractor)."""
    if not title:
        return None
    t = title.lower()
    for phrase in R.PARALLEL_PHRASES:
        if re.search(_phrase_regex(phrase), t):
            return " ".join(w.capitalize() for w in phrase.split())
    return None


def detect_sport(title: str) -> str:
    if not title:
        return "Unknown"
    t = title.lower()
    for sport, keywords in R.SPORT_KEYWORDS:
        for kw in keywords:
            if re.search(_phrase_regex(kw), t):
                return sport
    return "Unknown"


def is_rookie(title: str) -> bool:
    return bool(re.search(r"\b(rookie|rc|1st bowman|first bowman)\b", (title or "").lower()))


def is_autograph(title: str) -> bool:
    return bool(re.search(r"\b(auto|autograph|autographed|signed|on card auto)\b", (title or "").lower()))


# ============================================================
# NUMBERS
# ============================================================

def extract_year(title: str) -> Optional[int]:
    if not title:
        return None
    m = re.search(r"\b(19[0-9]{2}|20[0-4][0-9])\b", title)
    if m:
        return int(m.group(1))
    return None


def extract_card_number(title: str) -> Optional[str]:
    """Card number like '#8', '#BDC-72', 'No. 8'. Serials (#/99) and grades are ignored."""
    if not title:
        return None
    t = title.lower()

    m = re.search(r"#\s*(?!/)([a-z0-9]+(?:-[a-z0-9]+)*)", t)
    if m and (re.search(r"\d", m.group(1)) or "-" in m.group(1)):
        return m.group(1).upper()

    m = re.search(r"\bno\.?\s*([0-9]{1,4}[a-z]?)\b", t)
    if m:
        return m.group(1).upper()

    m = re.search(r"\bcard\s*#?\s*([0-9]{1,4}[a-z]?)\b", t)
    if m:
        return m.group(1).upper()

    return None


def extract_print_run(title: str) -> Optional[str]:
    if not title:
        return None
    m = re.search(r"/\s*(\d{1,5})\b", title)
    if m:
        return f"/{m.group(1)}"
    return None


def extract_grade(title: str) -> Optional[str]:
    if not title:
        return None
    m = re.search(r"\b(PSA|BGS|SGC|CGC|CSG|HGA)\s*-?\s*(\d{1,2}(?:\.5)?)\b", title, flags=re.IGNORECASE)
    if m:
        return f"{m.group(1).upper()} {m.group(2)}"
    return None
