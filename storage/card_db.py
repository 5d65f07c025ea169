import os
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from util.logger import log

# ============================================================
# SCHEMA
# ============================================================

CARDS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS cards (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    summary_title TEXT,
    sport TEXT,
    year INTEGER,
    brand TEXT,
    set_name TEXT,
    card_set TEXT,
    card_type TEXT,
    condition TEXT DEFAULT 'Raw',
    grade TEXT,
    player_name TEXT,
    card_number TEXT,
    print_run TEXT,
    is_rookie BOOLEAN DEFAULT 0,
    is_autograph BOOLEAN DEFAULT 0,
    raw_average_price DECIMAL(10,2),
    psa9_average_price DECIMAL(10,2),
    psa10_price DECIMAL(10,2),
    psa10_average_price DECIMAL(10,2),
    ebay_item_id TEXT,
    image_url TEXT,
    search_term TEXT,
    source TEXT DEFAULT '130point_auto',
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    last_updated DATETIME DEFAULT CURRENT_TIMESTAMP,
    notes TEXT
)
"""

INDEXED_COLUMNS = ("title", "summary_title", "sport", "year", "brand", "created_at", "last_updated")

# Columns added after the first databases shipped; ensure_columns() backfills them.
COMPONENT_COLUMNS = [
    ("card_set", "TEXT"),
    ("card_type", "TEXT"),
    ("player_name", "TEXT"),
    ("card_number", "TEXT"),
    ("print_run", "TEXT"),
    ("is_rookie", "BOOLEAN DEFAULT 0"),
    ("is_autograph", "BOOLEAN DEFAULT 0"),
    ("last_updated", "DATETIME"),
]

PRICE_COLUMNS = ("raw_average_price", "psa9_average_price", "psa10_price", "psa10_average_price")


# ============================================================
# CONNECTION
# ============================================================

def open_db(path: str, readonly: bool = False) -> sqlite3.Connection:
    if not path or not path.strip():
        raise ValueError("DB path is empty")
    if readonly:
        if not os.path.exists(path):
            raise FileNotFoundError(f"Database not found: {path}")
        conn = sqlite3.connect(Path(path).resolve().as_uri() + "?mode=ro", uri=True)
    else:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn


def ensure_schema(conn: sqlite3.Connection):
    conn.execute(CARDS_TABLE_SQL)
    ensure_columns(conn)
    for col in INDEXED_COLUMNS:
        conn.execute(f"CREATE INDEX IF NOT EXISTS idx_cards_{col} ON cards({col})")
    conn.commit()


def ensure_columns(conn: sqlite3.Connection) -> List[str]:
    """Add any missing component columns to `cards`. Returns the names added."""
    existing = set(table_columns(conn, "cards"))
    added = []
    for name, decl in COMPONENT_COLUMNS:
        if name in existing:
            continue
        conn.execute(f"ALTER TABLE cards ADD COLUMN {name} {decl}")
        added.append(name)
        log(f"Added column cards.{name}", "ok")
    if added:
        conn.commit()
    return added


# ============================================================
# SCHEMA INSPECTION
# ============================================================

def list_tables(conn: sqlite3.Connection) -> List[str]:
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
    ).fetchall()
    return [r[0] for r in rows]


def _check_table(conn: sqlite3.Connection, table: str):
    # table names cannot be bound as parameters
    if table not in list_tables(conn):
        raise ValueError(f"Unknown table: {table}")


def table_columns(conn: sqlite3.Connection, table: str) -> List[str]:
    return [c["name"] for c in describe_table(conn, table)]


def describe_table(conn: sqlite3.Connection, table: str) -> List[Dict[str, Any]]:
    _check_table(conn, table)
    rows = conn.execute(f"PRAGMA table_info({table})").fetchall()
    return [
        {
            "name": r[1],
            "type": r[2],
            "notnull": bool(r[3]),
            "default": r[4],
            "pk": bool(r[5]),
        }
        for r in rows
    ]


def count_rows(conn: sqlite3.Connection, table: str) -> int:
    _check_table(conn, table)
    return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


def sample_rows(conn: sqlite3.Connection, table: str, limit: int = 3) -> pd.DataFrame:
    _check_table(conn, table)
    return pd.read_sql_query(f"SELECT * FROM {table} LIMIT ?", conn, params=(int(limit),))


# ============================================================
# STATS
# ============================================================

def get_stats(conn: sqlite3.Connection) -> Dict[str, Any]:
    any_price = " OR ".join(f"{c} IS NOT NULL" for c in PRICE_COLUMNS)
    row = conn.execute(
        f"""
        SELECT
            COUNT(*) AS total,
            SUM(CASE WHEN {any_price} THEN 1 ELSE 0 END) AS with_prices,
            SUM(CASE WHEN player_name IS NOT NULL AND player_name != '' THEN 1 ELSE 0 END) AS with_player,
            MAX(last_updated) AS last_update
        FROM cards
        """
    ).fetchone()
    total = row["total"] or 0
    with_prices = row["with_prices"] or 0
    return {
        "total": total,
        "with_prices": with_prices,
        "missing_prices": total - with_prices,
        "with_player_name": row["with_player"] or 0,
        "last_update": row["last_update"],
        "coverage_pct": round(100.0 * with_prices / total, 1) if total else 0.0,
    }


def count_by(conn: sqlite3.Connection, column: str, limit: int = 10) -> List[Dict[str, Any]]:
    if column not in table_columns(conn, "cards"):
        raise ValueError(f"Unknown column: {column}")
    rows = conn.execute(
        f"SELECT {column} AS value, COUNT(*) AS n FROM cards GROUP BY {column} ORDER BY n DESC LIMIT ?",
        (int(limit),),
    ).fetchall()
    return [dict(r) for r in rows]


def recent_cards_with_prices(conn: sqlite3.Connection, limit: int = 5) -> List[Dict[str, Any]]:
    any_price = " OR ".join(f"{c} IS NOT NULL" for c in PRICE_COLUMNS)
    rows = conn.execute(
        f"""
        SELECT id, title, summary_title, {", ".join(PRICE_COLUMNS)}, last_updated
        FROM cards
        WHERE {any_price}
        ORDER BY last_updated DESC, id DESC
        LIMIT ?
        """,
        (int(limit),),
    ).fetchall()
    return [dict(r) for r in rows]


# ============================================================
# READ / WRITE
# ============================================================

def fetch_cards(
    conn: sqlite3.Connection,
    columns: Sequence[str] = ("id", "title", "player_name"),
    where: Optional[str] = None,
    params: Iterable[Any] = (),
) -> List[Dict[str, Any]]:
    known = set(table_columns(conn, "cards"))
    bad = [c for c in columns if c not in known]
    if bad:
        raise ValueError(f"Unknown column(s): {', '.join(bad)}")
    sql = f"SELECT {', '.join(columns)} FROM cards"
    if where:
        sql += f" WHERE {where}"
    sql += " ORDER BY id"
    return [dict(r) for r in conn.execute(sql, tuple(params)).fetchall()]


def update_card_fields(conn: sqlite3.Connection, card_id: int, fields: Dict[str, Any], commit: bool = True) -> bool:
    if not fields:
        return False
    known = set(table_columns(conn, "cards"))
    bad = [c for c in fields if c not in known]
    if bad:
        raise ValueError(f"Unknown column(s): {', '.join(bad)}")
    assignments = ", ".join(f"{c} = ?" for c in fields)
    cur = conn.execute(
        f"UPDATE cards SET {assignments}, last_updated = CURRENT_TIMESTAMP WHERE id = ?",
        (*fields.values(), card_id),
    )
    if commit:
        conn.commit()
    return cur.rowcount > 0


def insert_card(conn: sqlite3.Connection, record: Dict[str, Any]) -> int:
    """Insert the columns of `record` that exist on `cards`; other keys are ignored."""
    known = set(table_columns(conn, "cards"))
    data = {k: v for k, v in record.items() if k in known and k != "id"}
    if not data.get("title"):
        raise ValueError("Card record needs a title")
    cols = ", ".join(data)
    marks = ", ".join("?" for _ in data)
    cur = conn.execute(f"INSERT INTO cards ({cols}) VALUES ({marks})", tuple(data.values()))
    conn.commit()
    return cur.lastrowid


def export_cards(conn: sqlite3.Connection, path: str) -> int:
    df = pd.read_sql_query("SELECT * FROM cards ORDER BY id", conn)
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    df.to_csv(path, index=False)
    return len(df)
