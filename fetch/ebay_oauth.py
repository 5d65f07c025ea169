"""eBay OAuth helpers (authorization-code grant).

Flow used by the tools:
  1. build_authorize_url() -> open in a browser, approve the app
  2. oauth_capture_server shows the ?code= eBay redirects back with
  3. exchange_authorization_code() -> access + refresh token
  4. refresh_access_token() whenever the access token expires
"""

import base64
from typing import Dict, List, Optional
from urllib.parse import urlencode

import requests

from util.config import env_str
from util.helpers import mask_secret

EBAY_AUTHORIZE_URL = "https://auth.ebay.com/oauth2/authorize"
EBAY_TOKEN_URL = "https://api.ebay.com/identity/v1/oauth2/token"
DEFAULT_REDIRECT_URI = "http://localhost:3001/auth/callback"

DEFAULT_SCOPES = [
    "https://api.ebay.com/oauth/api_scope",
    "https://api.ebay.com/oauth/api_scope/sell.inventory",
]


def _credentials(client_id: Optional[str], client_secret: Optional[str]):
    client_id = client_id or env_str("EBAY_CLIENT_ID")
    client_secret = client_secret or env_str("EBAY_CLIENT_SECRET")
    if not client_id or not client_secret:
        raise ValueError("EBAY_CLIENT_ID and EBAY_CLIENT_SECRET must be set")
    return client_id, client_secret


def _basic_auth_header(client_id: str, client_secret: str) -> str:
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def build_authorize_url(
    client_id: Optional[str] = None,
    redirect_uri: Optional[str] = None,
    scopes: Optional[List[str]] = None,
) -> str:
    params = {
        "client_id": client_id or env_str("EBAY_CLIENT_ID"),
        "response_type": "code",
        "redirect_uri": redirect_uri or env_str("EBAY_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
        "scope": " ".join(scopes or DEFAULT_SCOPES),
    }
    return f"{EBAY_AUTHORIZE_URL}?{urlencode(params)}"


def _post_token(body: Dict[str, str], client_id: str, client_secret: str, timeout: int) -> Dict:
    r = requests.post(
        EBAY_TOKEN_URL,
        data=body,
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": _basic_auth_header(client_id, client_secret),
        },
        timeout=timeout,
    )
    r.raise_for_status()
    return r.json()


def exchange_authorization_code(
    code: str,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    redirect_uri: Optional[str] = None,
    timeout: int = 30,
) -> Dict:
    """Trade a one-time authorization code for tokens. Raises requests.HTTPError on 4xx/5xx."""
    if not code:
        raise ValueError("Authorization code is empty")
    client_id, client_secret = _credentials(client_id, client_secret)
    body = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": redirect_uri or env_str("EBAY_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
    }
    return _post_token(body, client_id, client_secret, timeout)


def refresh_access_token(
    refresh_token: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    scopes: Optional[List[str]] = None,
    timeout: int = 30,
) -> Dict:
    refresh_token = refresh_token or env_str("EBAY_REFRESH_TOKEN")
    if not refresh_token:
        raise ValueError("EBAY_REFRESH_TOKEN is not set")
    client_id, client_secret = _credentials(client_id, client_secret)
    body = {
        "grant_type": "refresh_token",
        "refresh_token": refresh_token,
        "scope": " ".join(scopes or DEFAULT_SCOPES),
    }
    return _post_token(body, client_id, client_secret, timeout)


def error_payload(exc: requests.HTTPError) -> Dict:
    resp = exc.response
    if resp is None:
        return {}
    try:
        data = resp.json()
    except ValueError:
        return {"error": "", "error_description": resp.text}
    return data if isinstance(data, dict) else {}


def explain_oauth_error(payload: Dict) -> List[str]:
    """Troubleshooting hints for an OAuth error body."""
    error = (payload or {}).get("error", "")
    redirect = env_str("EBAY_REDIRECT_URI") or DEFAULT_REDIRECT_URI
    if error == "invalid_grant":
        return [
            "Authorization code expired (they expire in 10 minutes)",
            "Authorization code was already used",
            "Client ID/Secret or redirect URI does not match the app",
            "Get a fresh code and exchange it immediately",
        ]
    if error == "invalid_client":
        return [
            "Check EBAY_CLIENT_ID and EBAY_CLIENT_SECRET",
            "They must belong to the same eBay application",
        ]
    if error == "redirect_uri_mismatch":
        return [f"Set the redirect URI to exactly: {redirect}"]
    return []


def mask_token(token: str, keep: int = 20) -> str:
    return mask_secret(token, keep=keep)
