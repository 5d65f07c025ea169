import json

import pandas as pd

from conftest import FakeResponse
from fetch import admin_api, ebay_oauth
from storage.cache_store import CacheStore
from tools import (
    add_name_mapping,
    call_admin,
    clear_cache,
    db_status,
    export_cards,
    get_refresh_token,
    inspect_schema,
    normalize_titles,
)


# ---------------- cache ----------------
def _store_with_keys(fake_redis):
    store = CacheStore(client=fake_redis)
    for key in ("search:a", "search:b", "live:a", "analysis:a", "search_history:u1", "other:x"):
        store.set(key, 1)
    return store


def test_clear_cache_dry_run(fake_redis):
    store = _store_with_keys(fake_redis)
    assert clear_cache.main(["--dry-run"], store=store) == 0
    assert len(fake_redis.data) == 6


def test_clear_cache_all_patterns(fake_redis):
    store = _store_with_keys(fake_redis)
    assert clear_cache.main([], store=store) == 0
    assert list(fake_redis.data) == ["other:x"]


def test_clear_cache_one_pattern(fake_redis):
    store = _store_with_keys(fake_redis)
    assert clear_cache.main(["--pattern", "live:*"], store=store) == 0
    assert "live:a" not in fake_redis.data
    assert "search:a" in fake_redis.data


def test_clear_cache_needs_redis():
    assert clear_cache.main([], store=CacheStore(url="")) == 1


def test_clear_cache_bad_redis_url():
    assert clear_cache.main(["--redis-url", "localhost:6379"]) == 1


# ---------------- database reports ----------------
def test_db_status(seeded_db, db_path, capsys):
    assert db_status.main(["--db", db_path, "--by", "sport"]) == 0
    out = capsys.readouterr().out
    assert "66.7%" in out
    assert "psa10 $250.00" in out


def test_db_status_missing_db(tmp_path):
    assert db_status.main(["--db", str(tmp_path / "nope.db")]) == 1


def test_inspect_schema(seeded_db, db_path, capsys):
    assert inspect_schema.main(["--db", db_path, "--table", "cards", "--limit", "1"]) == 0
    out = capsys.readouterr().out
    assert "player_name" in out
    assert "PK" in out
    assert inspect_schema.main(["--db", db_path, "--table", "ghost"]) == 1


def test_export_cards(seeded_db, db_path, tmp_path):
    out = tmp_path / "cards.csv"
    assert export_cards.main(["--db", db_path, "--output", str(out)]) == 0
    assert len(pd.read_csv(out)) == 3


# ---------------- names ----------------
def test_add_name_mapping_cycle(tmp_path, capsys):
    path = str(tmp_path / "known.json")
    assert add_name_mapping.main(["--file", path, "add", "Jackson Chourio", "Jackson Chourio Jr"]) == 0
    with open(path, encoding="utf-8") as f:
        assert json.load(f) == {"jackson chourio": "Jackson Chourio Jr"}

    assert add_name_mapping.main(["--file", path, "check", "2022 Bowman Jackson Chourio"]) == 0
    assert "Jackson Chourio Jr" in capsys.readouterr().out

    assert add_name_mapping.main(["--file", path, "remove", "jackson chourio"]) == 0
    assert add_name_mapping.main(["--file", path, "remove", "jackson chourio"]) == 1


def test_normalize_single_title(capsys):
    assert normalize_titles.main(["--title", "2023 Topps Chrome Elly De La Cruz #21 /99"]) == 0
    out = capsys.readouterr().out
    assert "knownPlayersHit" in out
    assert "Elly De La Cruz" in out


def test_normalize_csv(tmp_path):
    src = tmp_path / "ActiveListings.csv"
    pd.DataFrame({
        "Item number": ["1", "2", "3"],
        "Title": ["1986 Fleer Michael Jordan #57 PSA 8", "", "2023 Topps Chrome Elly De La Cruz"],
    }).to_csv(src, index=False)
    out = tmp_path / "out.csv"
    assert normalize_titles.main(["--csv", str(src), "--output", str(out)]) == 0
    df = pd.read_csv(out)
    assert list(df["player_name"]) == ["Michael Jordan", "Elly De La Cruz"]
    assert list(df["grade"].fillna("")) == ["PSA 8", ""]


def test_normalize_csv_without_title_column(tmp_path):
    src = tmp_path / "bad.csv"
    pd.DataFrame({"Name": ["x"]}).to_csv(src, index=False)
    assert normalize_titles.main(["--csv", str(src)]) == 1


# ---------------- remote ----------------
def test_call_admin_list(capsys):
    assert call_admin.main(["--list"]) == 0
    assert "/api/clean-summary-titles" in capsys.readouterr().out


def test_call_admin_unknown_task():
    assert call_admin.main(["not-a-task"]) == 1


def test_call_admin_runs_tasks(monkeypatch):
    seen = []

    def fake_request(method, url, json=None, headers=None, timeout=None):
        seen.append((method, url))
        return FakeResponse(200, {"updated": 3})

    monkeypatch.setattr(admin_api.requests, "request", fake_request)
    monkeypatch.setattr(admin_api.time, "sleep", lambda s: None)
    rc = call_admin.main(["health-check", "clean-summary-titles", "--base-url", "https://site.test", "--quiet"])
    assert rc == 0
    assert seen == [
        ("GET", "https://site.test/api/admin/health-check"),
        ("POST", "https://site.test/api/clean-summary-titles"),
    ]


def test_get_refresh_token_prints_env_lines(monkeypatch, capsys):
    monkeypatch.setenv("EBAY_CLIENT_ID", "id")
    monkeypatch.setenv("EBAY_CLIENT_SECRET", "secret")
    monkeypatch.setattr(
        ebay_oauth.requests, "post",
        lambda *a, **kw: FakeResponse(200, {"access_token": "AT", "refresh_token": "RT", "expires_in": 7200}),
    )
    assert get_refresh_token.main(["--code", "abc"]) == 0
    out = capsys.readouterr().out
    assert "EBAY_REFRESH_TOKEN=RT" in out
    assert "EBAY_AUTH_TOKEN=AT" in out
    assert "7200 seconds" in out


def test_get_refresh_token_shows_hints(monkeypatch, capsys):
    monkeypatch.setenv("EBAY_CLIENT_ID", "id")
    monkeypatch.setenv("EBAY_CLIENT_SECRET", "secret")
    monkeypatch.setattr(
        ebay_oauth.requests, "post",
        lambda *a, **kw: FakeResponse(400, {"error": "invalid_grant", "error_description": "bad code"}),
    )
    assert get_refresh_token.main(["--code", "abc"]) == 1
    assert "10 minutes" in capsys.readouterr().out
