"""
call_admin.py

Call admin endpoints on the deployed site.

USAGE:
    python tools/call_admin.py --list
    python tools/call_admin.py health-check
    python tools/call_admin.py update-summary-titles clean-summary-titles
    python tools/call_admin.py /api/admin/some-new-task --method GET
"""

from pathlib import Path
import argparse
import json
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fetch.admin_api import ADMIN_ENDPOINTS, run_admin_tasks
from util.config import env_str, load_config
from util.logger import log


def print_endpoints():
    print("Available admin tasks:")
    for name, (method, path) in ADMIN_ENDPOINTS.items():
        print(f"  {name:<36} {method:<5} {path}")


def _summarize(data, limit: int = 600) -> str:
    text = json.dumps(data, indent=2) if isinstance(data, (dict, list)) else str(data)
    if len(text) > limit:
        text = text[:limit] + "\n  ..."
    return text


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Call remote admin endpoints")
    ap.add_argument("tasks", nargs="*", help="Task names or raw /api/... paths")
    ap.add_argument("--list", action="store_true")
    ap.add_argument("--base-url", default=None)
    ap.add_argument("--method", default=None, help="Override the HTTP method")
    ap.add_argument("--quiet", action="store_true", help="Do not print response bodies")
    args = ap.parse_args(argv)

    if args.list or not args.tasks:
        print_endpoints()
        return 0

    cfg = load_config()
    try:
        results = run_admin_tasks(
            args.tasks,
            base_url=args.base_url or env_str("ADMIN_BASE_URL") or cfg["admin_base_url"],
            delay=float(cfg["admin_delay_sec"]),
            timeout=int(cfg["admin_timeout_sec"]),
            method=args.method,
        )
    except ValueError as e:
        log(str(e), "error")
        print_endpoints()
        return 1

    if not args.quiet:
        for res in results:
            if res["data"] is not None:
                print(f"\n📄 {res['task']}:")
                print(_summarize(res["data"]))

    failed = [r for r in results if r["status"] != "success"]
    print(f"\n📊 {len(results) - len(failed)}/{len(results)} tasks succeeded")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
