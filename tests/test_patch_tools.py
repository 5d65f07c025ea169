from storage.card_db import fetch_cards, insert_card
from tools import clean_summary_titles, fix_player_names
from tools.fix_player_names import parse_ids, plan_changes


def _names(conn):
    return {r["id"]: r["player_name"] for r in fetch_cards(conn, ("id", "player_name"))}


def test_parse_ids():
    assert parse_ids("1, 2,,3") == [1, 2, 3]
    assert parse_ids(None) == []


def test_plan_changes():
    cards = [
        {"id": 1, "title": "1986 Fleer Michael Jordan #57", "player_name": "Michael Jordan"},
        {"id": 2, "title": "2023 Topps Chrome Elly De La Cruz", "player_name": "Elly De"},
    ]
    assert plan_changes(cards) == [
        {"id": 2, "title": "2023 Topps Chrome Elly De La Cruz", "old": "Elly De", "new": "Elly De La Cruz"},
    ]


def test_fix_player_names_dry_run_changes_nothing(seeded_db, db_path, capsys):
    before = _names(seeded_db)
    assert fix_player_names.main(["--db", db_path]) == 0
    assert _names(seeded_db) == before
    assert "Dry run: 2 of 3 cards would change" in capsys.readouterr().out


def test_fix_player_names_apply(seeded_db, db_path):
    assert fix_player_names.main(["--db", db_path, "--apply"]) == 0
    assert _names(seeded_db) == {1: "Malik Nabers", 2: "Elly De La Cruz", 3: "Michael Jordan"}


def test_fix_player_names_limited_to_ids(seeded_db, db_path):
    assert fix_player_names.main(["--db", db_path, "--apply", "--ids", "2"]) == 0
    names = _names(seeded_db)
    assert names[1] == "Malik Nabers New York"
    assert names[2] == "Elly De La Cruz"


def test_fix_player_names_targeted_only(seeded_db, db_path):
    assert fix_player_names.main(["--db", db_path, "--apply", "--targeted-only"]) == 0
    assert _names(seeded_db) == {1: "Malik Nabers", 2: None, 3: "Michael Jordan"}


def test_fix_player_names_missing_only(seeded_db, db_path):
    assert fix_player_names.main(["--db", db_path, "--apply", "--missing-only"]) == 0
    names = _names(seeded_db)
    assert names[1] == "Malik Nabers New York"
    assert names[2] == "Elly De La Cruz"


def test_fix_player_names_bad_ids(db_path):
    assert fix_player_names.main(["--db", db_path, "--ids", "one,two"]) == 1


def test_clean_summary_titles_clean_mode(seeded_db, db_path):
    assert clean_summary_titles.main(["--db", db_path, "--apply"]) == 0
    row = fetch_cards(seeded_db, ("summary_title",), "id = 1")[0]
    assert row["summary_title"] == "2024 Panini Prizm Malik Nabers Silver Prizm"


def test_clean_summary_titles_rebuild_mode(db, db_path):
    insert_card(db, {
        "title": "2023 Topps Chrome Elly De La Cruz Auto Refractor #21 /99",
        "summary_title": "messy",
        "year": 2023,
        "card_set": "Topps Chrome",
        "card_type": "Refractor",
        "player_name": "Elly De La Cruz",
        "is_autograph": 1,
        "card_number": "21",
        "print_run": "/99",
    })
    insert_card(db, {"title": "no components here", "summary_title": "keep me"})

    assert clean_summary_titles.main(["--db", db_path, "--mode", "rebuild"]) == 0
    assert fetch_cards(db, ("summary_title",), "id = 1")[0]["summary_title"] == "messy"

    assert clean_summary_titles.main(["--db", db_path, "--mode", "rebuild", "--apply"]) == 0
    rows = fetch_cards(db, ("id", "summary_title"))
    assert rows[0]["summary_title"] == "2023 Topps Chrome Refractor Elly De La Cruz auto #21 /99"
    assert rows[1]["summary_title"] == "keep me"
