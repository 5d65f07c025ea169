"""Dump the `cards` table to CSV."""

from pathlib import Path
import argparse
import os
import sys
from datetime import datetime

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.card_db import export_cards, open_db
from util.logger import log
from util.paths import RESULTS_FOLDER, get_db_path


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Export cards to CSV")
    ap.add_argument("--db", default=None)
    ap.add_argument("--output", default=None)
    args = ap.parse_args(argv)

    output = args.output or os.path.join(RESULTS_FOLDER, f"cards_{datetime.now():%Y%m%d_%H%M%S}.csv")
    try:
        conn = open_db(args.db or get_db_path(), readonly=True)
    except (ValueError, FileNotFoundError) as e:
        log(str(e), "error")
        return 1
    try:
        n = export_cards(conn, output)
    except Exception as e:
        log(f"Export failed: {e}", "error")
        return 1
    finally:
        conn.close()
    log(f"Exported {n} cards → {output}", "save")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
