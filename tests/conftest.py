import fnmatch
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storage.card_db import ensure_schema, insert_card, open_db
from util import logger


@pytest.fixture(autouse=True)
def no_log_file(monkeypatch):
    monkeypatch.setattr(logger, "WRITE_LOG_FILE", False)
    monkeypatch.delenv("VERBOSE_EXTRACTION", raising=False)


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "cards.db")


@pytest.fixture
def db(db_path):
    conn = open_db(db_path)
    ensure_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def seeded_db(db):
    rows = [
        {"title": "2024 Panini Prizm Malik Nabers Silver Prizm RC PSA 10", "player_name": "Malik Nabers New York",
         "summary_title": "old", "psa10_price": 250.0},
        {"title": "2023 Topps Chrome Elly De La Cruz #21 Refractor", "player_name": None,
         "raw_average_price": 12.5},
        {"title": "1986 Fleer Michael Jordan #57 PSA 8", "player_name": "Michael Jordan"},
    ]
    for row in rows:
        insert_card(db, row)
    return db


class FakeRedis:
    """Just enough of redis.Redis for CacheStore."""

    def __init__(self):
        self.data = {}
        self.ttls = {}
        self.closed = False

    def ping(self):
        return True

    def get(self, key):
        return self.data.get(key)

    def setex(self, key, ttl, value):
        self.data[key] = value
        self.ttls[key] = ttl
        return True

    def delete(self, *keys):
        n = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                n += 1
        return n

    def exists(self, key):
        return int(key in self.data)

    def scan_iter(self, match="*", count=None):
        for key in list(self.data):
            if fnmatch.fnmatchcase(key, match):
                yield key

    def dbsize(self):
        return len(self.data)

    def info(self, section=None):
        return {"used_memory_human": "1.00M"}

    def close(self):
        self.closed = True


@pytest.fixture
def fake_redis():
    return FakeRedis()


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=""):
        self.status_code = status_code
        self._json = json_data
        self.text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json is None:
            raise ValueError("No JSON")
        return self._json

    def raise_for_status(self):
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)
