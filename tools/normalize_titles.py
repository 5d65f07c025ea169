"""
normalize_titles.py

Run the title normalizer by hand.

    --title "..."   print every extraction step and the full card record
    --csv FILE      normalize a CSV with a Title column (eBay active-listings
                    export) and write the records next to it, or to --output
"""

from pathlib import Path
import argparse
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pandas as pd

from cards.title_normalizer import extract_player_name
from cards.title_signature import build_card_record, build_summary_title
from util.logger import BOLD, CYAN, DIM, RESET, banner, log
from util.paths import RESULTS_FOLDER


def debug_title(title: str) -> dict:
    steps = []
    name = extract_player_name(title, steps=steps)
    banner("🔍 Extraction steps")
    for step in steps:
        hit = f"  → {BOLD}{step['result']}{RESET}" if "result" in step else ""
        print(f"  {CYAN}{step['step']:<22}{RESET} {DIM}\"{step['clean_title']}\"{RESET}{hit}")
    print(f"\n👤 Player: {BOLD}{name or '(none)'}{RESET}")

    record = build_card_record(title)
    banner("🧾 Card record")
    for key, value in record.items():
        if value not in (None, "", []):
            print(f"  {key:<20} {value}")
    print(f"\n📝 Summary: {build_summary_title(record)}")
    return record


def normalize_frame(df: pd.DataFrame, column: str = "Title") -> pd.DataFrame:
    if column not in df.columns:
        raise ValueError(f"CSV has no '{column}' column")
    titles = df[column].fillna("").astype(str)
    records = [build_card_record(t) for t in titles if t.strip()]
    out = pd.DataFrame(records)
    if not out.empty:
        out["set_terms"] = out["set_terms"].apply(lambda terms: "; ".join(terms))
        out["rebuilt_summary"] = [build_summary_title(r) for r in records]
    return out


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Normalize listing titles")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--title")
    group.add_argument("--csv")
    ap.add_argument("--column", default="Title")
    ap.add_argument("--output", default=None)
    args = ap.parse_args(argv)

    if args.title is not None:
        debug_title(args.title)
        return 0

    src = Path(args.csv)
    if not src.exists():
        log(f"{src} not found", "error")
        return 1
    try:
        df = pd.read_csv(src, dtype=str, encoding="utf-8", on_bad_lines="skip")
        out = normalize_frame(df, args.column)
    except (ValueError, pd.errors.ParserError) as e:
        log(f"Could not normalize {src.name}: {e}", "error")
        return 1

    output = Path(args.output) if args.output else Path(RESULTS_FOLDER) / f"{src.stem}_normalized.csv"
    output.parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(output, index=False)
    log(f"{len(out)} titles normalized → {output}", "save")
    with_name = int(out["player_name"].notna().sum()) if not out.empty else 0
    print(f"👤 Player names found: {with_name}/{len(out)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
