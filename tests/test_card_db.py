import sqlite3

import pandas as pd
import pytest

from cards.title_signature import build_card_record
from storage.card_db import (
    COMPONENT_COLUMNS,
    count_by,
    count_rows,
    describe_table,
    ensure_columns,
    ensure_schema,
    export_cards,
    fetch_cards,
    get_stats,
    insert_card,
    list_tables,
    open_db,
    recent_cards_with_prices,
    sample_rows,
    table_columns,
    update_card_fields,
)


def test_open_db_rejects_empty_path():
    with pytest.raises(ValueError):
        open_db("  ")


def test_open_db_readonly_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        open_db(str(tmp_path / "missing.db"), readonly=True)


def test_readonly_connection_cannot_write(seeded_db, db_path):
    ro = open_db(db_path, readonly=True)
    try:
        with pytest.raises(sqlite3.OperationalError):
            ro.execute("DELETE FROM cards")
    finally:
        ro.close()


def test_readonly_path_with_uri_characters(tmp_path):
    path = str(tmp_path / "cards #1 %20?.db")
    conn = open_db(path)
    ensure_schema(conn)
    insert_card(conn, build_card_record("2020 Topps Mike Trout #1"))
    conn.close()

    ro = open_db(path, readonly=True)
    try:
        assert count_rows(ro, "cards") == 1
    finally:
        ro.close()


def test_schema_and_inspection(db):
    assert "cards" in list_tables(db)
    cols = {c["name"]: c for c in describe_table(db, "cards")}
    assert cols["id"]["pk"] is True
    assert cols["title"]["notnull"] is True
    assert cols["condition"]["default"] == "'Raw'"
    assert count_rows(db, "cards") == 0
    with pytest.raises(ValueError):
        table_columns(db, "cards; DROP TABLE cards")


def test_ensure_columns_backfills_legacy_table(tmp_path):
    conn = open_db(str(tmp_path / "legacy.db"))
    conn.execute("CREATE TABLE cards (id INTEGER PRIMARY KEY, title TEXT NOT NULL)")
    added = ensure_columns(conn)
    assert added == [name for name, _ in COMPONENT_COLUMNS]
    assert ensure_columns(conn) == []
    assert "player_name" in table_columns(conn, "cards")
    conn.close()


def test_sample_rows_returns_dataframe(seeded_db):
    df = sample_rows(seeded_db, "cards", limit=2)
    assert isinstance(df, pd.DataFrame)
    assert len(df) == 2
    assert "title" in df.columns


def test_stats(seeded_db):
    stats = get_stats(seeded_db)
    assert stats["total"] == 3
    assert stats["with_prices"] == 2
    assert stats["missing_prices"] == 1
    assert stats["with_player_name"] == 2
    assert stats["coverage_pct"] == 66.7
    assert stats["last_update"] is not None


def test_stats_on_empty_table(db):
    stats = get_stats(db)
    assert stats["total"] == 0
    assert stats["coverage_pct"] == 0.0


def test_count_by_and_recent(seeded_db):
    assert count_by(seeded_db, "sport") == [{"value": None, "n": 3}]
    with pytest.raises(ValueError):
        count_by(seeded_db, "nope")
    recent = recent_cards_with_prices(seeded_db, limit=5)
    assert len(recent) == 2
    assert {r["id"] for r in recent} == {1, 2}


def test_fetch_and_update(seeded_db):
    rows = fetch_cards(seeded_db, ("id", "player_name"), "player_name IS NULL")
    assert rows == [{"id": 2, "player_name": None}]
    with pytest.raises(ValueError):
        fetch_cards(seeded_db, ("id", "bogus"))

    assert update_card_fields(seeded_db, 2, {"player_name": "Elly De La Cruz"}) is True
    assert fetch_cards(seeded_db, ("player_name",), "id = ?", (2,))[0]["player_name"] == "Elly De La Cruz"
    assert update_card_fields(seeded_db, 999, {"player_name": "x"}) is False
    assert update_card_fields(seeded_db, 2, {}) is False
    with pytest.raises(ValueError):
        update_card_fields(seeded_db, 2, {"bogus": 1})


def test_insert_normalized_record(db):
    record = build_card_record("2023 Topps Chrome Elly De La Cruz #21 Refractor /99", price=40)
    card_id = insert_card(db, record)
    row = fetch_cards(db, ("player_name", "card_set", "card_number", "print_run", "raw_average_price"),
                      "id = ?", (card_id,))[0]
    assert row == {
        "player_name": "Elly De La Cruz",
        "card_set": "Topps Chrome",
        "card_number": "21",
        "print_run": "/99",
        "raw_average_price": 40.0,
    }


def test_insert_requires_title(db):
    with pytest.raises(ValueError):
        insert_card(db, {"player_name": "Nobody"})


def test_export_cards(seeded_db, tmp_path):
    out = tmp_path / "exports" / "cards.csv"
    assert export_cards(seeded_db, str(out)) == 3
    df = pd.read_csv(out)
    assert list(df["id"]) == [1, 2, 3]
