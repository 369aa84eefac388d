"""Tests for the request state stores"""

import base64

import pytest
from aiohttp import web
from aiohttp.test_utils import make_mocked_request

from oidc_implicit import CookieStateStore, MemoryStateStore

KEY = "OidcClient.request_state"


def test_memory_store():
    """Test get/set/remove on the memory store."""
    store = MemoryStateStore()
    assert store.get(KEY) is None

    store.set(KEY, "value")
    assert store.get(KEY) == "value"

    store.set(KEY, "other")
    assert store.get(KEY) == "other"

    store.remove(KEY)
    assert store.get(KEY) is None

    # Removing twice is fine
    store.remove(KEY)


@pytest.mark.asyncio
async def test_cookie_store_set_writes_cookie():
    """Test that setting a value writes an encoded HttpOnly cookie."""
    request = make_mocked_request("GET", "/login")
    response = web.Response()
    store = CookieStateStore(request, response)

    value = '{"state": "abc", "oidc": true}'
    store.set(KEY, value)

    cookie = response.cookies[KEY]
    padded = cookie.value + "=" * (-len(cookie.value) % 4)
    assert "=" not in cookie.value
    assert base64.urlsafe_b64decode(padded).decode("utf-8") == value
    assert cookie["httponly"] is True
    assert cookie["samesite"] == "Lax"

    # Pending writes are visible to reads on the same store
    assert store.get(KEY) == value


@pytest.mark.asyncio
async def test_cookie_store_reads_request_cookie():
    """Test that values are read from the incoming request cookies."""
    value = '{"state": "abc"}'
    encoded = base64.urlsafe_b64encode(value.encode("utf-8")).rstrip(b"=").decode("ascii")
    request = make_mocked_request("GET", "/callback", headers={"Cookie": f"{KEY}={encoded}"})
    response = web.Response()
    store = CookieStateStore(request, response)

    assert store.get(KEY) == value

    store.remove(KEY)
    assert store.get(KEY) is None
    assert response.cookies[KEY].value == ""
    assert response.cookies[KEY]["max-age"] == "0"


@pytest.mark.asyncio
async def test_cookie_store_missing_or_garbage_cookie():
    """Test that absent or undecodable cookies read as None."""
    request = make_mocked_request("GET", "/callback", headers={"Cookie": f"{KEY}=!!!!"})
    store = CookieStateStore(request, web.Response())
    assert store.get(KEY) is None
    assert store.get("other") is None
