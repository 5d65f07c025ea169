"""Callers for the deployed site's HTTP admin endpoints.

The endpoints take an empty (or small JSON) POST and answer with ad-hoc
JSON. call_admin_endpoint() never raises: every outcome comes back as a
result dict so a batch of tasks can keep going after one fails.
"""

import time
from typing import Any, Dict, List, Optional

import requests

from util.config import DEFAULT_CONFIG, env_str
from util.logger import log

# short task name -> (method, path)
ADMIN_ENDPOINTS: Dict[str, tuple] = {
    "health-check": ("GET", "/api/admin/health-check"),
    "cards": ("GET", "/api/admin/cards?limit=5"),
    "diagnose-database": ("POST", "/api/admin/diagnose-database"),
    "update-prices": ("POST", "/api/admin/update-prices"),
    "add-player-names": ("POST", "/api/admin/add-player-names"),
    "update-player-names-centralized": ("POST", "/api/admin/update-player-names-centralized"),
    "fix-specific-player-names": ("POST", "/api/admin/fix-specific-player-names"),
    "apply-targeted-player-name-fixes": ("POST", "/api/admin/apply-targeted-player-name-fixes"),
    "clear-player-names": ("POST", "/api/admin/clear-player-names"),
    "update-summary-titles": ("POST", "/api/admin/update-summary-titles"),
    "clean-summary-titles": ("POST", "/api/clean-summary-titles"),
    "fix-missing-card-numbers": ("POST", "/api/admin/fix-missing-card-numbers"),
    "update-unknown-sports": ("POST", "/api/admin/update-unknown-sports"),
    "add-rookie-autograph-columns": ("POST", "/api/admin/add-rookie-autograph-columns"),
    "check-component-fields": ("POST", "/api/admin/check-component-fields"),
    "generate-good-buys": ("POST", "/api/admin/generate-good-buys"),
}


def resolve_endpoint(name_or_path: str, method: Optional[str] = None) -> tuple:
    """Map a task name to (method, path); raw '/api/...' paths pass through."""
    if name_or_path in ADMIN_ENDPOINTS:
        default_method, path = ADMIN_ENDPOINTS[name_or_path]
        return (method or default_method).upper(), path
    if name_or_path.startswith("/"):
        return (method or "POST").upper(), name_or_path
    raise ValueError(f"Unknown admin task: {name_or_path}")


def _base_url(base_url: Optional[str]) -> str:
    url = base_url or env_str("ADMIN_BASE_URL") or DEFAULT_CONFIG["admin_base_url"]
    return url.rstrip("/")


def call_admin_endpoint(
    endpoint: str,
    method: str = "POST",
    payload: Optional[Dict[str, Any]] = None,
    base_url: Optional[str] = None,
    timeout: int = 30,
) -> Dict[str, Any]:
    url = f"{_base_url(base_url)}{endpoint}"
    result: Dict[str, Any] = {"status": "error", "status_code": None, "data": None, "error": ""}
    try:
        r = requests.request(
            method=method.upper(),
            url=url,
            json=payload,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.Timeout:
        result.update(status_code=408, error="Request timeout")
        return result
    except requests.RequestException as e:
        result["error"] = f"{e.__class__.__name__}: {e}"
        return result

    result["status_code"] = r.status_code
    try:
        result["data"] = r.json()
    except ValueError:
        result["data"] = r.text
        result["error"] = "Invalid JSON response"
        return result

    if r.ok:
        result["status"] = "success"
    else:
        data = result["data"]
        msg = data.get("error") or data.get("message") if isinstance(data, dict) else None
        result["error"] = msg or f"HTTP {r.status_code}"
    return result


def run_admin_tasks(
    names: List[str],
    base_url: Optional[str] = None,
    delay: float = 2.0,
    timeout: int = 30,
    method: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Call several admin tasks in order, pausing `delay` seconds between calls."""
    results = []
    for i, name in enumerate(names):
        http_method, path = resolve_endpoint(name, method)
        log(f"🌐 {http_method} {path}")
        res = call_admin_endpoint(path, http_method, base_url=base_url, timeout=timeout)
        res["task"] = name
        if res["status"] == "success":
            log(f"{name} → {res['status_code']}", "ok")
        else:
            log(f"{name} failed ({res['status_code']}): {res['error']}", "error")
        results.append(res)
        if delay and i < len(names) - 1:
            time.sleep(delay)
    return results
