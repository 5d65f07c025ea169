"""
clean_summary_titles.py

Recompute `summary_title` for cards.

    --mode clean    strip grading/hype/team words from the full title
    --mode rebuild  build "year set [parallel] player [auto] #num /run"
                    from the stored component columns

Dry run by default; --apply writes.
"""

from pathlib import Path
import argparse
import sys
from typing import Dict, List

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cards.title_normalizer import clean_summary_title
from cards.title_signature import build_summary_title
from storage.card_db import ensure_columns, fetch_cards, open_db, update_card_fields
from util.config import load_config
from util.logger import DIM, GREEN, RESET, log
from util.paths import get_db_path

REBUILD_COLUMNS = (
    "id", "title", "summary_title", "year", "card_set", "card_type",
    "player_name", "is_autograph", "card_number", "print_run",
)


def new_summary(card: Dict, mode: str) -> str:
    if mode == "rebuild":
        return build_summary_title(card)
    return clean_summary_title(card.get("title") or "")


def plan_changes(cards: List[Dict], mode: str = "clean") -> List[Dict]:
    changes = []
    for card in cards:
        new = new_summary(card, mode)
        # an empty rebuild means the components are missing, keep what is there
        if not new:
            continue
        if new != (card.get("summary_title") or ""):
            changes.append({"id": card["id"], "old": card.get("summary_title"), "new": new})
    return changes


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Clean or rebuild summary titles")
    ap.add_argument("--db", default=None)
    ap.add_argument("--mode", choices=("clean", "rebuild"), default="clean")
    ap.add_argument("--apply", action="store_true")
    ap.add_argument("--show", type=int, default=25)
    args = ap.parse_args(argv)

    batch_size = int(load_config().get("patch_batch_size", 500))
    try:
        conn = open_db(args.db or get_db_path())
    except ValueError as e:
        log(str(e), "error")
        return 1

    try:
        ensure_columns(conn)
        columns = REBUILD_COLUMNS if args.mode == "rebuild" else ("id", "title", "summary_title")
        cards = fetch_cards(conn, columns)
        print(f"🧽 {args.mode} mode: checking {len(cards)} cards...")
        changes = plan_changes(cards, args.mode)

        for change in changes[: args.show]:
            print(f"  #{change['id']}: {DIM}{change['old']}{RESET}")
            print(f"        → {GREEN}{change['new']}{RESET}")

        if not args.apply:
            log(f"Dry run: {len(changes)} summary titles would change (use --apply)")
            return 0

        updated = errors = 0
        for i, change in enumerate(changes, 1):
            try:
                if update_card_fields(conn, change["id"], {"summary_title": change["new"]}, commit=False):
                    updated += 1
            except Exception as e:
                errors += 1
                log(f"Card {change['id']}: {e}", "error")
            if i % batch_size == 0:
                conn.commit()
        conn.commit()
        log(f"Updated {updated} summary titles ({errors} errors)", "ok")
        return 1 if errors else 0
    except Exception as e:
        log(f"Error cleaning summary titles: {e}", "error")
        return 1
    finally:
        conn.close()


if __name__ == "__main__":
    raise SystemExit(main())
