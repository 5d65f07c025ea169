"""
inspect_schema.py

Read-only look at a SQLite pricing database: every table, its columns and
a few sample rows. Nothing is written.

USAGE:
    python tools/inspect_schema.py
    python tools/inspect_schema.py --db path/to/new-scorecard.db --table cards --limit 5
"""

from pathlib import Path
import argparse
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pandas as pd

from storage.card_db import count_rows, describe_table, list_tables, open_db, sample_rows
from util.logger import banner, log
from util.paths import get_db_path


def print_table(conn, table: str, limit: int):
    banner(f"📋 {table} ({count_rows(conn, table)} rows)")
    for col in describe_table(conn, table):
        flags = []
        if col["pk"]:
            flags.append("PK")
        if col["notnull"]:
            flags.append("NOT NULL")
        if col["default"] is not None:
            flags.append(f"DEFAULT {col['default']}")
        extra = f"  [{', '.join(flags)}]" if flags else ""
        print(f"  {col['name']:<24} {col['type'] or '?':<16}{extra}")

    if limit > 0:
        df = sample_rows(conn, table, limit)
        print(f"\n  Sample rows ({len(df)}):")
        if df.empty:
            print("  (empty)")
        else:
            with pd.option_context("display.max_columns", 12, "display.width", 160):
                print(df.to_string(index=False, max_colwidth=40))


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Inspect a SQLite database schema")
    ap.add_argument("--db", default=None, help="SQLite DB path (default: resolved pricing DB)")
    ap.add_argument("--table", action="append", help="Only these tables (repeatable)")
    ap.add_argument("--limit", type=int, default=3, help="Sample rows per table (0 to skip)")
    args = ap.parse_args(argv)

    db_path = args.db or get_db_path()
    print(f"🔍 Inspecting {db_path}")
    try:
        conn = open_db(db_path, readonly=True)
    except (ValueError, FileNotFoundError) as e:
        log(str(e), "error")
        return 1

    try:
        tables = list_tables(conn)
        if not tables:
            log("No tables found", "warn")
            return 0
        print(f"📊 Tables: {', '.join(tables)}")
        for table in args.table or tables:
            try:
                print_table(conn, table, args.limit)
            except ValueError as e:
                log(str(e), "error")
                return 1
    except Exception as e:
        log(f"Error inspecting database: {e}", "error")
        return 1
    finally:
        conn.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
