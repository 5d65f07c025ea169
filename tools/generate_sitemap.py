"""
generate_sitemap.py

PURPOSE:
    Write frontend/public/sitemap.xml for the public site.

    • Static pages with their change frequency and priority
    • API endpoints (optional, --no-api to skip)
    • Extra /api/... routes picked up from the Express entry file (index.js)

USAGE:
    python tools/generate_sitemap.py
    python tools/generate_sitemap.py --base-url https://staging.example.com --output sitemap.xml
"""

from pathlib import Path
import argparse
import re
import sys
from datetime import date
from typing import Dict, List, Optional
from xml.sax.saxutils import escape

# ---------------------------------------------
# Project root = parent of /tools/
# ---------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from util.config import env_str, load_config
from util.logger import log
from util.paths import ROUTES_INDEX_PATH, SITEMAP_PATH

# ---------------------------------------------
# CONFIG
# ---------------------------------------------
PAGES: List[Dict[str, str]] = [
    {"url": "/", "changefreq": "daily", "priority": "1.0"},
    {"url": "/search", "changefreq": "daily", "priority": "0.9"},
    {"url": "/history", "changefreq": "weekly", "priority": "0.7"},
    {"url": "/auth-success", "changefreq": "monthly", "priority": "0.3"},
]

API_ENDPOINTS: List[Dict[str, str]] = [
    {"url": "/api/search-cards", "changefreq": "daily", "priority": "0.6"},
    {"url": "/api/live-listings", "changefreq": "daily", "priority": "0.6"},
    {"url": "/api/search-history", "changefreq": "weekly", "priority": "0.5"},
]

ROUTE_PATTERN = re.compile(r"app\.use\(\s*['\"`](/api/[^'\"`]+)")

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def detect_routes(index_path: str = ROUTES_INDEX_PATH) -> List[Dict[str, str]]:
    """/api/... mounts found in `app.use('/api/...')` calls, weekly at 0.4."""
    path = Path(index_path)
    if not path.exists():
        return []
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        log(f"Could not read {path.name}: {e}", "warn")
        return []
    routes = []
    for route in dict.fromkeys(ROUTE_PATTERN.findall(source)):
        routes.append({"url": route, "changefreq": "weekly", "priority": "0.4"})
    return routes


def collect_entries(include_api: bool = True, index_path: Optional[str] = ROUTES_INDEX_PATH) -> List[Dict[str, str]]:
    entries = list(PAGES)
    if include_api:
        entries.extend(API_ENDPOINTS)
        if index_path:
            known = {e["url"] for e in entries}
            entries.extend(r for r in detect_routes(index_path) if r["url"] not in known)
    return entries


def build_sitemap(entries: List[Dict[str, str]], base_url: str, lastmod: Optional[str] = None) -> str:
    base_url = base_url.rstrip("/")
    lastmod = lastmod or date.today().isoformat()
    lines = [XML_HEADER, f'<urlset xmlns="{SITEMAP_NS}">']
    for entry in entries:
        lines.extend([
            "  <url>",
            f"    <loc>{escape(base_url + entry['url'])}</loc>",
            f"    <lastmod>{lastmod}</lastmod>",
            f"    <changefreq>{entry['changefreq']}</changefreq>",
            f"    <priority>{entry['priority']}</priority>",
            "  </url>",
        ])
    lines.append("</urlset>")
    return "\n".join(lines) + "\n"


def write_sitemap(xml: str, output_path: str = SITEMAP_PATH) -> str:
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(xml, encoding="utf-8")
    return str(out)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Generate sitemap.xml")
    cfg = load_config()
    ap.add_argument("--base-url", default=env_str("SITE_BASE_URL") or cfg["site_base_url"])
    ap.add_argument("--output", default=SITEMAP_PATH)
    ap.add_argument("--routes-file", default=ROUTES_INDEX_PATH, help="Express entry file to scan for /api routes")
    ap.add_argument("--no-api", action="store_true", help="Only list the public pages")
    args = ap.parse_args(argv)

    print("🗺️  Generating sitemap...")
    try:
        entries = collect_entries(include_api=not args.no_api, index_path=args.routes_file)
        path = write_sitemap(build_sitemap(entries, args.base_url), args.output)
    except Exception as e:
        log(f"Error generating sitemap: {e}", "error")
        return 1

    log(f"Sitemap generated: {path}", "ok")
    print(f"📊 Total URLs: {len(entries)}")
    print(f"🌐 Base URL: {args.base_url}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
