"""
get_refresh_token.py

Exchange an eBay authorization code for an access token + refresh token and
print the lines to paste into .env. With --refresh, use EBAY_REFRESH_TOKEN
to mint a new access token instead.
"""

from pathlib import Path
import argparse
import sys

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import requests

from fetch.ebay_oauth import (
    error_payload,
    exchange_authorization_code,
    explain_oauth_error,
    mask_token,
    refresh_access_token,
)
from util.config import env_str
from util.logger import log


def print_env_lines(tokens: dict):
    print("\n📝 Add these to your .env file:\n")
    if tokens.get("refresh_token"):
        print(f"EBAY_REFRESH_TOKEN={tokens['refresh_token']}")
    if tokens.get("access_token"):
        print(f"EBAY_AUTH_TOKEN={tokens['access_token']}")
    print()
    if tokens.get("expires_in"):
        print(f"⏰ Access token expires in {tokens['expires_in']} seconds")
    if tokens.get("refresh_token_expires_in"):
        print(f"⏰ Refresh token expires in {tokens['refresh_token_expires_in']} seconds")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Get eBay OAuth tokens")
    ap.add_argument("--code", default=None, help="Authorization code from the capture server")
    ap.add_argument("--refresh", action="store_true", help="Use EBAY_REFRESH_TOKEN instead of a code")
    ap.add_argument("--redirect-uri", default=None)
    args = ap.parse_args(argv)

    print("🔐 eBay OAuth token exchange")
    print(f"   Client ID: {mask_token(env_str('EBAY_CLIENT_ID'), 10)}")
    print(f"   Client Secret: {mask_token(env_str('EBAY_CLIENT_SECRET'), 4)}")

    code = args.code
    if not args.refresh and not code:
        code = input("Paste the authorization code: ").strip()

    try:
        if args.refresh:
            tokens = refresh_access_token()
        else:
            tokens = exchange_authorization_code(code, redirect_uri=args.redirect_uri)
    except ValueError as e:
        log(str(e), "error")
        return 1
    except requests.HTTPError as e:
        payload = error_payload(e)
        status = e.response.status_code if e.response is not None else "?"
        log(f"Token request failed ({status}): {payload.get('error', '')} {payload.get('error_description', '')}", "error")
        hints = explain_oauth_error(payload)
        if hints:
            print("\n💡 Possible causes:")
            for hint in hints:
                print(f"   • {hint}")
        return 1
    except requests.RequestException as e:
        log(f"Token request failed: {e}", "error")
        return 1

    log("Tokens received", "ok")
    print(f"   Access token: {mask_token(tokens.get('access_token', ''))}")
    print_env_lines(tokens)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
