"""
fix_player_names.py

Re-run player-name extraction over the `cards` table.

BEHAVIOR:
    • Dry run by default: prints old → new for every card that would change
    • --apply writes the new names (committed every patch_batch_size rows)
    • --ids 12,40,97 limits the run to those cards
    • --targeted-only keeps stored names and only strips leftover
      city/description words from them
    • --missing-only touches cards with no player_name yet
"""

from pathlib import Path
import argparse
import sys
from typing import Dict, List, Optional

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cards.title_normalizer import apply_targeted_fixes, extract_player_name
from storage.card_db import ensure_columns, fetch_cards, open_db, update_card_fields
from util.config import load_config
from util.logger import DIM, GREEN, RESET, log
from util.paths import get_db_path


def parse_ids(text: Optional[str]) -> List[int]:
    if not text:
        return []
    ids = []
    for part in text.split(","):
        part = part.strip()
        if part:
            ids.append(int(part))
    return ids


def plan_changes(cards: List[Dict], targeted_only: bool = False) -> List[Dict]:
    """One {id, title, old, new} per card whose name would change."""
    changes = []
    for card in cards:
        old = card.get("player_name") or None
        if targeted_only:
            if not old:
                continue
            new = apply_targeted_fixes(old) or None
        else:
            new = extract_player_name(card.get("title") or "") or None
        if new != old:
            changes.append({"id": card["id"], "title": card.get("title"), "old": old, "new": new})
    return changes


def apply_changes(conn, changes: List[Dict], batch_size: int = 500) -> Dict[str, int]:
    updated = errors = 0
    for i, change in enumerate(changes, 1):
        try:
            if update_card_fields(conn, change["id"], {"player_name": change["new"]}, commit=False):
                updated += 1
        except Exception as e:
            errors += 1
            log(f"Card {change['id']}: {e}", "error")
        if i % batch_size == 0:
            conn.commit()
            log(f"Committed {i}/{len(changes)}", "save")
    conn.commit()
    return {"updated": updated, "errors": errors}


def _select(conn, ids: List[int], missing_only: bool) -> List[Dict]:
    clauses, params = [], []
    if ids:
        clauses.append(f"id IN ({', '.join('?' for _ in ids)})")
        params.extend(ids)
    if missing_only:
        clauses.append("(player_name IS NULL OR player_name = '')")
    where = " AND ".join(clauses) or None
    return fetch_cards(conn, ("id", "title", "player_name"), where, params)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Re-extract player names for cards")
    ap.add_argument("--db", default=None)
    ap.add_argument("--apply", action="store_true", help="Write changes (default is a dry run)")
    ap.add_argument("--ids", default=None, help="Comma-separated card ids")
    ap.add_argument("--targeted-only", action="store_true")
    ap.add_argument("--missing-only", action="store_true")
    ap.add_argument("--show", type=int, default=25, help="How many changes to print")
    args = ap.parse_args(argv)

    cfg = load_config()
    try:
        ids = parse_ids(args.ids)
    except ValueError:
        log(f"Bad --ids value: {args.ids}", "error")
        return 1

    try:
        conn = open_db(args.db or get_db_path())
    except ValueError as e:
        log(str(e), "error")
        return 1

    try:
        ensure_columns(conn)
        cards = _select(conn, ids, args.missing_only)
        print(f"🔍 Checking {len(cards)} cards...")
        changes = plan_changes(cards, args.targeted_only)

        for change in changes[: args.show]:
            print(f"  #{change['id']}: {DIM}{change['old']}{RESET} → {GREEN}{change['new']}{RESET}")
        if len(changes) > args.show:
            print(f"  ... and {len(changes) - args.show} more")

        if not args.apply:
            log(f"Dry run: {len(changes)} of {len(cards)} cards would change (use --apply)")
            return 0

        result = apply_changes(conn, changes, int(cfg.get("patch_batch_size", 500)))
        log(f"Updated {result['updated']} player names ({result['errors']} errors)", "ok")
        return 1 if result["errors"] else 0
    except Exception as e:
        log(f"Error fixing player names: {e}", "error")
        return 1
    finally:
        conn.close()


if __name__ == "__main__":
    raise SystemExit(main())
