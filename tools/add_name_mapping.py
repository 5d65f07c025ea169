"""
add_name_mapping.py

Edit known_players.json, the lookup table that maps lowercase name variants
to the canonical player name.

USAGE:
    python tools/add_name_mapping.py list
    python tools/add_name_mapping.py add "jamarr chase" "Ja'Marr Chase"
    python tools/add_name_mapping.py remove "jamarr chase"
    python tools/add_name_mapping.py check "2024 Prizm Jamarr Chase Silver PSA 10"
"""

from pathlib import Path
import argparse
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cards.name_lookup import KNOWN_PLAYERS, add_mapping, load_known_players, remove_mapping
from cards.title_normalizer import extract_player_name
from util.helpers import load_json
from util.logger import log
from util.paths import KNOWN_PLAYERS_PATH


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Manage player-name mappings")
    ap.add_argument("--file", default=KNOWN_PLAYERS_PATH)
    sub = ap.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list")
    p_list.add_argument("--all", action="store_true", help="Include built-in names")

    p_add = sub.add_parser("add")
    p_add.add_argument("variant")
    p_add.add_argument("canonical")

    p_rm = sub.add_parser("remove")
    p_rm.add_argument("variant")

    p_check = sub.add_parser("check")
    p_check.add_argument("title")

    args = ap.parse_args(argv)

    if args.command == "list":
        table = load_known_players(args.file) if args.all else load_json(args.file, default={})
        if not table:
            print("(no custom mappings)")
        for variant in sorted(table):
            origin = "" if variant not in KNOWN_PLAYERS or not args.all else "  (built-in)"
            print(f"  {variant:<32} → {table[variant]}{origin}")
        return 0

    if args.command == "add":
        try:
            add_mapping(args.variant, args.canonical, args.file)
        except (ValueError, OSError) as e:
            log(f"Could not add mapping: {e}", "error")
            return 1
        log(f"{args.variant.lower()} → {args.canonical}", "ok")
        return 0

    if args.command == "remove":
        if remove_mapping(args.variant, args.file):
            log(f"Removed {args.variant.lower()}", "ok")
            return 0
        log(f"No custom mapping for {args.variant.lower()}", "warn")
        return 1

    table = load_known_players(args.file)
    print(f"🔍 {extract_player_name(args.title, table=table) or '(no name found)'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
