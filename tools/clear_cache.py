"""
clear_cache.py

Delete cached search/live/analysis/history keys from Redis.

USAGE:
    python tools/clear_cache.py                      # every known pattern
    python tools/clear_cache.py --pattern "live:*"   # one family
    python tools/clear_cache.py --dry-run            # count only
"""

from pathlib import Path
import argparse
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import redis

from storage.cache_store import CACHE_PATTERNS, CacheStore
from util.config import load_config
from util.logger import log


def clear_patterns(store: CacheStore, patterns, dry_run: bool = False) -> dict:
    """Returns {pattern: count}; counts are keys found (dry run) or deleted."""
    results = {}
    for pattern in patterns:
        if dry_run:
            n = store.count_pattern(pattern)
            print(f"🔍 {pattern}: {n} keys")
        else:
            n = store.delete_pattern(pattern)
            if n:
                print(f"🗑️  Deleted {n} keys matching {pattern}")
            else:
                print(f"ℹ️  No keys found for {pattern}")
        results[pattern] = n
    return results


def main(argv=None, store: CacheStore = None) -> int:
    ap = argparse.ArgumentParser(description="Clear Redis cache keys")
    ap.add_argument("--pattern", action="append", help="Key pattern (repeatable). Default: all cache families")
    ap.add_argument("--dry-run", action="store_true")
    ap.add_argument("--redis-url", default=None)
    args = ap.parse_args(argv)

    store = store or CacheStore(url=args.redis_url, config=load_config())
    print("🧹 Clearing Redis cache...")
    try:
        if store.connect() == "memory":
            log("Nothing to clear without a Redis connection (set REDIS_URL)", "warn")
            return 1
        results = clear_patterns(store, args.pattern or CACHE_PATTERNS, args.dry_run)
    except redis.RedisError as e:
        log(f"Error clearing cache: {e}", "error")
        return 1
    finally:
        store.close()

    total = sum(results.values())
    if args.dry_run:
        log(f"Dry run: {total} keys would be deleted")
    else:
        log(f"Cache cleared: {total} keys deleted", "ok")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
