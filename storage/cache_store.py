"""Redis cache access for the maintenance tools.

Mirrors the site's cache service: JSON values, fixed TTLs per key family,
base64 key suffixes. Without REDIS_URL (or when Redis is unreachable) the
store falls back to an in-process dict so the tools still run locally.
"""

import base64
import fnmatch
import json
import time
from typing import Any, Dict, Iterator, List, Optional, Tuple

import redis

from util.config import DEFAULT_CONFIG, env_str
from util.logger import log

CACHE_PATTERNS: List[str] = [
    "search:*",
    "live:*",
    "analysis:*",
    "search_history:*",
    "history:*",
]

DELETE_CHUNK = 500


def _b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


# ------------------------------------------------------------
# KEY BUILDERS
# ------------------------------------------------------------
def search_key(query: str, filters: Optional[Dict[str, Any]] = None) -> str:
    filter_string = json.dumps(filters, separators=(",", ":")) if filters else ""
    return f"search:{_b64(query + filter_string)}"


def live_listings_key(query: str, category: str, sale_type: Optional[str] = None) -> str:
    raw = f"{query}:{category}:{sale_type or 'all'}"
    return f"live:{_b64(raw)}"


def analysis_key(query: str) -> str:
    return f"analysis:{_b64(query)}"


def history_key(user_id: str) -> str:
    return f"history:{user_id}"


def search_history_key(user_id: str) -> str:
    return f"search_history:{user_id}"


class CacheStore:
    def __init__(self, url: Optional[str] = None, client: Any = None, config: Optional[Dict[str, Any]] = None):
        cfg = DEFAULT_CONFIG.copy()
        cfg.update(config or {})
        self.default_ttl = int(cfg["cache_default_ttl"])
        self.search_ttl = int(cfg["cache_search_ttl"])
        self.live_ttl = int(cfg["cache_live_ttl"])
        self.analysis_ttl = int(cfg["cache_analysis_ttl"])

        self.url = env_str("REDIS_URL") if url is None else url
        self.client = client
        self.backend = "redis" if client is not None else None
        self._memory: Dict[str, Tuple[str, float]] = {}

    # ---------------- connection ----------------
    def connect(self) -> str:
        if self.backend:
            return self.backend
        if not self.url:
            log("No REDIS_URL, using in-memory cache fallback", "warn")
            self.backend = "memory"
            return self.backend
        try:
            client = redis.Redis.from_url(self.url, decode_responses=True, socket_timeout=10)
            client.ping()
            self.client = client
            self.backend = "redis"
            log("Connected to Redis", "ok")
        except (redis.RedisError, ValueError) as e:
            log(f"Cache connection failed, using in-memory fallback: {e}", "error")
            self.backend = "memory"
        return self.backend

    def close(self):
        if self.backend == "redis" and self.client is not None:
            try:
                self.client.close()
            except redis.RedisError as e:
                log(f"Redis close error: {e}", "warn")
        self.backend = None
        self.client = None

    @property
    def is_memory(self) -> bool:
        return self.connect() == "memory"

    def ttl_for(self, key: str) -> int:
        family = key.split(":", 1)[0]
        return {
            "search": self.search_ttl,
            "live": self.live_ttl,
            "analysis": self.analysis_ttl,
        }.get(family, self.default_ttl)

    # ---------------- single keys ----------------
    def get(self, key: str) -> Any:
        try:
            if self.is_memory:
                item = self._memory.get(key)
                if not item:
                    return None
                value, expiry = item
                if expiry <= time.time():
                    del self._memory[key]
                    return None
                return json.loads(value)
            value = self.client.get(key)
            return json.loads(value) if value is not None else None
        except (redis.RedisError, ValueError) as e:
            log(f"Cache get error for {key}: {e}", "error")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        ttl = self.ttl_for(key) if ttl is None else int(ttl)
        try:
            payload = json.dumps(value)
            if self.is_memory:
                self._memory[key] = (payload, time.time() + ttl)
            else:
                self.client.setex(key, ttl, payload)
            return True
        except (redis.RedisError, TypeError) as e:
            log(f"Cache set error for {key}: {e}", "error")
            return False

    def delete(self, key: str) -> bool:
        try:
            if self.is_memory:
                return self._memory.pop(key, None) is not None
            return bool(self.client.delete(key))
        except redis.RedisError as e:
            log(f"Cache delete error for {key}: {e}", "error")
            return False

    def exists(self, key: str) -> bool:
        try:
            if self.is_memory:
                item = self._memory.get(key)
                return bool(item) and item[1] > time.time()
            return bool(self.client.exists(key))
        except redis.RedisError as e:
            log(f"Cache exists error for {key}: {e}", "error")
            return False

    # ---------------- patterns ----------------
    def iter_keys(self, pattern: str) -> Iterator[str]:
        """Keys matching a glob pattern. Redis errors propagate."""
        if self.is_memory:
            for key in list(self._memory):
                if fnmatch.fnmatchcase(key, pattern):
                    yield key
            return
        yield from self.client.scan_iter(match=pattern, count=DELETE_CHUNK)

    def count_pattern(self, pattern: str) -> int:
        return sum(1 for _ in self.iter_keys(pattern))

    def delete_pattern(self, pattern: str) -> int:
        """Delete every key matching `pattern`; returns how many were removed."""
        keys = list(self.iter_keys(pattern))
        if not keys:
            return 0
        if self.is_memory:
            for key in keys:
                self._memory.pop(key, None)
            return len(keys)
        deleted = 0
        for i in range(0, len(keys), DELETE_CHUNK):
            deleted += self.client.delete(*keys[i:i + DELETE_CHUNK])
        return deleted

    # ---------------- housekeeping ----------------
    def cleanup(self) -> int:
        if not self.is_memory:
            log("Redis handles expiration automatically")
            return 0
        now = time.time()
        expired = [k for k, (_, expiry) in self._memory.items() if expiry <= now]
        for key in expired:
            del self._memory[key]
        log(f"🧹 Cleaned {len(expired)} expired cache entries")
        return len(expired)

    def stats(self) -> Dict[str, Any]:
        try:
            if self.is_memory:
                expired = self.cleanup()
                valid = len(self._memory)
                return {
                    "type": "memory",
                    "total_entries": valid + expired,
                    "valid_entries": valid,
                    "expired_entries": expired,
                }
            memory = self.client.info("memory")
            return {
                "type": "redis",
                "keys": self.client.dbsize(),
                "used_memory": memory.get("used_memory_human"),
                "patterns": {p: self.count_pattern(p) for p in CACHE_PATTERNS},
            }
        except redis.RedisError as e:
            log(f"Cache stats error: {e}", "error")
            return {"type": "error", "message": str(e)}
