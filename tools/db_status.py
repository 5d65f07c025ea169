"""
db_status.py

Price-coverage report for the `cards` table: totals, how many cards have
any price, the newest update and the most recently priced cards.
"""

from pathlib import Path
import argparse
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.card_db import count_by, get_stats, list_tables, open_db, recent_cards_with_prices
from util.logger import BOLD, CYAN, GREEN, RESET, YELLOW, banner, log
from util.paths import get_db_path


def _price_text(card) -> str:
    parts = []
    for label, key in (("raw", "raw_average_price"), ("psa9", "psa9_average_price"), ("psa10", "psa10_price")):
        value = card.get(key)
        if value is not None:
            parts.append(f"{label} ${float(value):.2f}")
    return ", ".join(parts) or "-"


def print_report(conn, recent: int = 5, by: str = None):
    stats = get_stats(conn)
    banner("📊 DATABASE STATUS")
    print(f"Total cards:        {BOLD}{stats['total']}{RESET}")
    print(f"With prices:        {GREEN}{stats['with_prices']}{RESET}")
    print(f"Missing prices:     {YELLOW}{stats['missing_prices']}{RESET}")
    print(f"With player name:   {stats['with_player_name']}")
    print(f"Price coverage:     {CYAN}{stats['coverage_pct']}%{RESET}")
    print(f"Last update:        {stats['last_update'] or 'never'}")

    if recent > 0:
        cards = recent_cards_with_prices(conn, recent)
        banner(f"🕒 {len(cards)} most recently priced")
        for card in cards:
            name = card.get("summary_title") or card.get("title")
            print(f"  #{card['id']} {name[:60]}  ({_price_text(card)})")

    if by:
        banner(f"📈 Cards by {by}")
        for row in count_by(conn, by):
            print(f"  {str(row['value']):<28} {row['n']}")
    return stats


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Show pricing database status")
    ap.add_argument("--db", default=None)
    ap.add_argument("--recent", type=int, default=5, help="How many recently priced cards to list")
    ap.add_argument("--by", default=None, help="Also group counts by this column (sport, brand, year...)")
    args = ap.parse_args(argv)

    db_path = args.db or get_db_path()
    try:
        conn = open_db(db_path, readonly=True)
    except (ValueError, FileNotFoundError) as e:
        log(str(e), "error")
        return 1

    try:
        if "cards" not in list_tables(conn):
            log(f"No cards table in {db_path}", "error")
            return 1
        print_report(conn, args.recent, args.by)
    except Exception as e:
        log(f"Error reading database: {e}", "error")
        return 1
    finally:
        conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
