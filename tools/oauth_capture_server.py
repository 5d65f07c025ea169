"""
oauth_capture_server.py

Local redirect target for the eBay consent screen. eBay sends the browser to
http://localhost:3001/auth/callback?code=...; this server shows the code so
it can be pasted into get_refresh_token.py (codes expire after 10 minutes).

USAGE:
    python tools/oauth_capture_server.py            # serve until Ctrl+C
    python tools/oauth_capture_server.py --once     # stop after the first code
"""

from pathlib import Path
import argparse
import html
import sys
from functools import partial
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import List, Optional
from urllib.parse import parse_qs, urlparse

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fetch.ebay_oauth import build_authorize_url
from util.config import env_str, load_config
from util.logger import log


class CaptureState:
    """Codes seen so far; `done` flips after the first one when `once` is set."""

    def __init__(self, once: bool = False):
        self.once = once
        self.codes: List[str] = []
        self.done = False

    def record(self, code: str):
        self.codes.append(code)
        if self.once:
            self.done = True


PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body style="font-family: sans-serif; max-width: 720px; margin: 40px auto;">
{body}
</body>
</html>
"""


def render_page(title: str, body: str) -> str:
    return PAGE.format(title=html.escape(title), body=body)


class OAuthCaptureHandler(BaseHTTPRequestHandler):
    def __init__(self, state: CaptureState, callback_path: str, authorize_url: str, *args, **kwargs):
        self.state = state
        self.callback_path = callback_path
        self.authorize_url = authorize_url
        super().__init__(*args, **kwargs)

    def do_GET(self):
        parsed = urlparse(self.path)
        params = parse_qs(parsed.query)

        if parsed.path == self.callback_path:
            self._handle_callback(params)
        elif parsed.path == "/":
            link = html.escape(self.authorize_url, quote=True)
            self._send_html(render_page(
                "eBay OAuth",
                f'<h1>eBay OAuth capture</h1><p><a href="{link}">Authorize the app on eBay</a></p>',
            ))
        else:
            self._send_html(render_page("Not found", "<h1>404</h1>"), 404)

    def _handle_callback(self, params):
        error = (params.get("error") or [""])[0]
        if error:
            desc = (params.get("error_description") or [""])[0]
            log(f"OAuth error: {error} {desc}".strip(), "error")
            self._send_html(render_page(
                "Authorization failed",
                f"<h1>❌ Authorization failed</h1><p>{html.escape(error)}</p><p>{html.escape(desc)}</p>",
            ), 400)
            return

        code = (params.get("code") or [""])[0]
        if not code:
            self._send_html(render_page("Missing code", "<h1>❌ No authorization code in the URL</h1>"), 400)
            return

        self.state.record(code)
        log("Authorization code received", "ok")
        print(f"\n{code}\n")
        print("👉 Run: python tools/get_refresh_token.py --code \"<code>\"  (within 10 minutes)")
        self._send_html(render_page(
            "Authorization code",
            "<h1>✅ Authorization code received</h1>"
            "<p>Copy this code and exchange it within 10 minutes:</p>"
            f'<textarea rows="4" cols="80" readonly>{html.escape(code)}</textarea>'
            "<p><code>python tools/get_refresh_token.py --code &quot;&lt;code&gt;&quot;</code></p>",
        ))

    def _send_html(self, page: str, status: int = 200):
        body = page.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        sys.stderr.write(f"{args[0]}\n")


def make_server(
    port: int,
    state: CaptureState,
    callback_path: str = "/auth/callback",
    authorize_url: Optional[str] = None,
    host: str = "localhost",
) -> HTTPServer:
    handler = partial(OAuthCaptureHandler, state, callback_path, authorize_url or build_authorize_url())
    return HTTPServer((host, port), handler)


def main(argv=None) -> int:
    cfg = load_config()
    ap = argparse.ArgumentParser(description="Capture an eBay OAuth authorization code")
    ap.add_argument("--port", type=int, default=int(cfg["oauth_port"]))
    ap.add_argument("--path", default=cfg["oauth_callback_path"])
    ap.add_argument("--once", action="store_true", help="Exit after the first code")
    args = ap.parse_args(argv)

    if not env_str("EBAY_CLIENT_ID"):
        log("EBAY_CLIENT_ID is not set; the authorize link will not work", "warn")

    state = CaptureState(once=args.once)
    try:
        server = make_server(args.port, state, args.path)
    except OSError as e:
        log(f"Could not start server on port {args.port}: {e}", "error")
        return 1

    print(f"🚀 OAuth capture server on http://localhost:{args.port}")
    print(f"🔗 Callback: http://localhost:{args.port}{args.path}")
    print(f"🌐 Authorize: {build_authorize_url()}")
    try:
        if args.once:
            while not state.done:
                server.handle_request()
        else:
            server.serve_forever()
    except KeyboardInterrupt:
        print("\n🛑 Stopped.")
    finally:
        server.server_close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
