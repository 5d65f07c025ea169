import base64
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from conftest import FakeResponse
from fetch import ebay_oauth
from fetch.ebay_oauth import (
    DEFAULT_REDIRECT_URI,
    EBAY_TOKEN_URL,
    build_authorize_url,
    error_payload,
    exchange_authorization_code,
    explain_oauth_error,
    mask_token,
    refresh_access_token,
)


@pytest.fixture
def creds(monkeypatch):
    monkeypatch.setenv("EBAY_CLIENT_ID", "client-id")
    monkeypatch.setenv("EBAY_CLIENT_SECRET", "client-secret")
    monkeypatch.delenv("EBAY_REDIRECT_URI", raising=False)
    monkeypatch.delenv("EBAY_REFRESH_TOKEN", raising=False)


@pytest.fixture
def token_post(monkeypatch):
    sent = []
    reply = {"response": FakeResponse(200, {"access_token": "v^1.1#access", "refresh_token": "v^1.1#refresh",
                                            "expires_in": 7200})}

    def fake_post(url, data=None, headers=None, timeout=None):
        sent.append({"url": url, "data": data, "headers": headers})
        return reply["response"]

    monkeypatch.setattr(ebay_oauth.requests, "post", fake_post)
    return sent, reply


def test_authorize_url(creds):
    url = build_authorize_url()
    parsed = urlparse(url)
    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://auth.ebay.com/oauth2/authorize"
    qs = parse_qs(parsed.query)
    assert qs["client_id"] == ["client-id"]
    assert qs["response_type"] == ["code"]
    assert qs["redirect_uri"] == [DEFAULT_REDIRECT_URI]
    assert qs["scope"] == [
        "https://api.ebay.com/oauth/api_scope https://api.ebay.com/oauth/api_scope/sell.inventory"
    ]


def test_exchange_code(creds, token_post):
    sent, _ = token_post
    tokens = exchange_authorization_code("the-code")
    assert tokens["refresh_token"] == "v^1.1#refresh"
    call = sent[0]
    assert call["url"] == EBAY_TOKEN_URL
    assert call["data"] == {
        "grant_type": "authorization_code",
        "code": "the-code",
        "redirect_uri": DEFAULT_REDIRECT_URI,
    }
    expected = base64.b64encode(b"client-id:client-secret").decode("ascii")
    assert call["headers"]["Authorization"] == f"Basic {expected}"
    assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


def test_exchange_error_raises_http_error(creds, token_post):
    _, reply = token_post
    reply["response"] = FakeResponse(400, {"error": "invalid_grant", "error_description": "expired"})
    with pytest.raises(requests.HTTPError) as exc:
        exchange_authorization_code("old-code")
    payload = error_payload(exc.value)
    assert payload["error"] == "invalid_grant"
    assert any("10 minutes" in hint for hint in explain_oauth_error(payload))


def test_missing_credentials(monkeypatch):
    monkeypatch.delenv("EBAY_CLIENT_ID", raising=False)
    monkeypatch.delenv("EBAY_CLIENT_SECRET", raising=False)
    with pytest.raises(ValueError):
        exchange_authorization_code("code")
    with pytest.raises(ValueError):
        exchange_authorization_code("", client_id="a", client_secret="b")


def test_refresh(creds, token_post, monkeypatch):
    sent, _ = token_post
    with pytest.raises(ValueError):
        refresh_access_token()
    monkeypatch.setenv("EBAY_REFRESH_TOKEN", "stored-refresh")
    refresh_access_token()
    assert sent[0]["data"]["grant_type"] == "refresh_token"
    assert sent[0]["data"]["refresh_token"] == "stored-refresh"


def test_error_hints(creds):
    assert explain_oauth_error({"error": "invalid_client"})[0].startswith("Check EBAY_CLIENT_ID")
    assert DEFAULT_REDIRECT_URI in explain_oauth_error({"error": "redirect_uri_mismatch"})[0]
    assert explain_oauth_error({"error": "something_else"}) == []
    assert explain_oauth_error(None) == []


def test_mask_token():
    assert mask_token("") == "(missing)"
    assert mask_token("abcdefghijklmnopqrstuvwxyz") == "abcdefghijklmnopqrst..."
    assert mask_token("short", keep=10) == "sh..."
