"""Card record and summary-title builders.

build_card_record() runs every normalizer pass over one title and returns
the dict the `cards` table stores. build_summary_title() rebuilds the short
display title from those stored components.
"""

import re
from typing import Any, Dict, Optional

from cards.title_normalizer import (
    clean_summary_title,
    detect_card_type,
    detect_sport,
    extract_brand_and_set,
    extract_card_number,
    extract_grade,
    extract_parallel,
    extract_player_name,
    extract_print_run,
    extract_set_terms,
    extract_year,
    is_autograph,
    is_rookie,
)


def format_card_set(brand: str, set_name: str) -> Optional[str]:
    if not brand or brand == "Unknown":
        return None
    if not set_name or set_name in ("Base", "Unknown"):
        return brand
    return f"{brand} {set_name}"


def _price_field_for_grade(grade: Optional[str]) -> str:
    if grade in ("PSA 10",):
        return "psa10_price"
    if grade in ("PSA 9",):
        return "psa9_average_price"
    return "raw_average_price"


def build_card_record(title: str, price: Optional[float] = None, **extra: Any) -> Dict[str, Any]:
    """Normalize one listing title into a card record.

    Any keyword in `extra` (ebay_item_id, image_url, search_term, source)
    is copied onto the record and overrides a computed field of the same name.
    """
    title = title or ""
    brand, set_name = extract_brand_and_set(title)
    grade = extract_grade(title)
    player = extract_player_name(title)

    record: Dict[str, Any] = {
        "title": title,
        "summary_title": clean_summary_title(title),
        "player_name": player or None,
        "sport": detect_sport(title),
        "year": extract_year(title),
        "brand": brand,
        "set_name": set_name,
        "card_set": format_card_set(brand, set_name),
        "set_terms": extract_set_terms(title),
        "card_type": extract_parallel(title) or "Base",
        "card_category": detect_card_type(title),
        "card_number": extract_card_number(title),
        "print_run": extract_print_run(title),
        "grade": grade,
        "condition": "Graded" if grade else "Raw",
        "is_rookie": is_rookie(title),
        "is_autograph": is_autograph(title),
        "raw_average_price": None,
        "psa9_average_price": None,
        "psa10_price": None,
        "psa10_average_price": None,
    }
    if price is not None:
        record[_price_field_for_grade(grade)] = round(float(price), 2)
    record.update(extra)
    return record


def _card_number_looks_like_grade(raw: str, title: str) -> bool:
    # "PSA 10" parsed as card number 10 on titles that carry no '#'
    return (
        bool(re.fullmatch(r"\d{1,3}", raw))
        and bool(re.search(rf"\bPSA\s*-?\s*{re.escape(raw)}\b", title or "", re.I))
        and not re.search(r"#\s*\w+", title or "")
    )


def build_summary_title(components: Dict[str, Any]) -> str:
    """year card_set [card_type] player [auto] #number print_run."""
    parts = []

    year = components.get("year")
    if year:
        parts.append(str(year))

    card_set = components.get("card_set")
    if card_set:
        parts.append(str(card_set))

    card_type = components.get("card_type")
    if card_type and str(card_type).lower() != "base":
        parts.append(str(card_type))

    player = components.get("player_name")
    if player:
        parts.append(str(player))

    if components.get("is_autograph"):
        parts.append("auto")

    card_number = components.get("card_number")
    if card_number:
        raw = re.sub(r"^#\s*", "", str(card_number).strip())
        if raw and not _card_number_looks_like_grade(raw, components.get("title") or ""):
            parts.append(f"#{raw}")

    print_run = components.get("print_run")
    if print_run:
        parts.append(str(print_run))

    return " ".join(parts).strip()
