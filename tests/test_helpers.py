"""Tests for the helpers"""

import pytest

from oidc_implicit import ProtocolError
from oidc_implicit.tools.helpers import (
    append_query,
    compute_allowed_signing_algs,
    encode_uri_component,
    filter_protocol_claims,
    generate_random_url_string,
    parse_oidc_result,
)


def test_random_url_string():
    """Test that random strings are URL safe and long enough."""
    values = {generate_random_url_string() for _ in range(100)}
    assert len(values) == 100

    for value in values:
        # 32 random bytes, base64url without padding
        assert len(value) == 43
        assert encode_uri_component(value) == value


def test_encode_uri_component():
    """Test percent-encoding of URI components."""
    assert encode_uri_component("openid profile") == "openid%20profile"
    assert (
        encode_uri_component("https://app.example.com/cb?x=1")
        == "https%3A%2F%2Fapp.example.com%2Fcb%3Fx%3D1"
    )
    assert encode_uri_component(60) == "60"


def test_append_query():
    """Test that parameters keep their order and the right separator is used."""
    assert (
        append_query("https://example.com/authorize", [("b", "2"), ("a", "1 2")])
        == "https://example.com/authorize?b=2&a=1%202"
    )
    assert (
        append_query("https://example.com/authorize?tenant=x", [("a", "1")])
        == "https://example.com/authorize?tenant=x&a=1"
    )
    assert append_query("https://example.com", []) == "https://example.com"


def test_parse_fragment():
    """Test parsing of a fragment response."""
    result = parse_oidc_result(
        "https://app.example.com/cb#state=abc&scope=openid%20profile&token_type=Bearer"
    )
    assert result == {
        "state": "abc",
        "scope": "openid profile",
        "token_type": "Bearer",
    }


def test_parse_uses_last_fragment():
    """Test that only the part after the last '#' is used."""
    assert parse_oidc_result("#state=first#state=second") == {"state": "second"}


def test_parse_query_string():
    """Test parsing of a query string response."""
    assert parse_oidc_result("?state=abc&error=access_denied") == {
        "state": "abc",
        "error": "access_denied",
    }


def test_parse_full_callback_url_with_query():
    """Test that a full callback URL is parsed from its query string."""
    assert parse_oidc_result(
        "https://app.example.com/cb?state=abc&error=access_denied"
    ) == {
        "state": "abc",
        "error": "access_denied",
    }


@pytest.mark.parametrize("response", ["", None, "#", "no-parameters-here"])
def test_parse_empty(response):
    """Test that a response without parameters is rejected."""
    with pytest.raises(ProtocolError, match="No OIDC response"):
        parse_oidc_result(response)


def test_parse_parameter_limit():
    """Test that 50 parameters are accepted and 51 are rejected."""
    fifty = "&".join(f"p{i}=v{i}" for i in range(50))
    assert len(parse_oidc_result(fifty)) == 50

    fifty_one = fifty + "&p50=v50"
    with pytest.raises(ProtocolError, match="exceeded expected number"):
        parse_oidc_result(fifty_one)


def test_parse_parameter_limit_counts_repeated_keys():
    """Test that repeated keys count against the limit."""
    repeated = "&".join(f"p{i % 10}=v{i}" for i in range(50))
    result = parse_oidc_result(repeated)
    assert len(result) == 10
    assert result["p9"] == "v49"

    with pytest.raises(ProtocolError, match="exceeded expected number"):
        parse_oidc_result(repeated + "&p0=v50")

    flood = "&".join("state=x" for _ in range(10000))
    with pytest.raises(ProtocolError, match="exceeded expected number"):
        parse_oidc_result(flood)


def test_filter_protocol_claims():
    """Test that protocol claims are stripped without mutating the input."""
    claims = {
        "sub": "1",
        "name": "Test",
        "nonce": "n",
        "at_hash": "h",
        "iat": 1,
        "nbf": 1,
        "exp": 2,
        "aud": "client",
        "iss": "issuer",
        "idp": "local",
    }

    filtered = filter_protocol_claims(claims)
    assert filtered == {"sub": "1", "name": "Test"}
    assert "nonce" in claims


def test_compute_allowed_signing_algs():
    """Test the algorithm selection from configuration and discovery."""
    assert compute_allowed_signing_algs({}, None) == ["RS256"]
    assert compute_allowed_signing_algs(
        {"id_token_signing_alg_values_supported": ["ES256", "RS256", "PS384"]}, None
    ) == ["RS256", "PS384"]
    assert compute_allowed_signing_algs(
        {"id_token_signing_alg_values_supported": ["HS256"]}, None
    ) == ["RS256"]
    assert compute_allowed_signing_algs(
        {"id_token_signing_alg_values_supported": ["RS256"]}, "RS512"
    ) == ["RS512"]
