"""Tests for the client settings"""

import pytest

from oidc_implicit import ConfigurationError, MemoryStateStore, Settings
from oidc_implicit.config.const import DEFAULT_REQUEST_STATE_KEY
from oidc_implicit.config.settings import has_response_type, normalize_authority


def test_defaults():
    """Test that defaults are applied to an empty configuration."""
    settings = Settings()

    assert settings.request_state_key == DEFAULT_REQUEST_STATE_KEY
    assert settings.response_type == "id_token token"
    assert settings.load_user_profile is True
    assert settings.filter_protocol_claims is True
    assert settings.tls_verify is True
    assert isinstance(settings.request_state_store, MemoryStateStore)
    assert settings.authority is None


def test_injected_store_is_used():
    """Test that a given request state store replaces the default."""
    store = MemoryStateStore()
    settings = Settings({}, request_state_store=store)
    assert settings.request_state_store is store


@pytest.mark.parametrize(
    "authority,expected",
    [
        (
            "https://oidc.example.com",
            "https://oidc.example.com/.well-known/openid-configuration",
        ),
        (
            "https://oidc.example.com/realm/",
            "https://oidc.example.com/realm/.well-known/openid-configuration",
        ),
        (
            "https://oidc.example.com/.well-known/openid-configuration",
            "https://oidc.example.com/.well-known/openid-configuration",
        ),
        (None, None),
    ],
)
def test_authority_normalization(authority, expected):
    """Test that the authority always points at the discovery document."""
    assert normalize_authority(authority) == expected

    config = {"authority": authority} if authority else {}
    assert Settings(config).authority == expected


@pytest.mark.parametrize(
    "response_type,is_oidc,is_oauth",
    [
        ("id_token", True, False),
        ("token", False, True),
        ("id_token token", True, True),
        ("token   id_token", True, True),
        ("code", False, False),
        ("id_tokens tokens", False, False),
    ],
)
def test_flow_flags(response_type, is_oidc, is_oauth):
    """Test the OIDC/OAuth classification of response types."""
    settings = Settings({"response_type": response_type})
    assert settings.is_oidc is is_oidc
    assert settings.is_oauth is is_oauth


def test_flow_flags_follow_response_type_changes():
    """Test that the flags are derived on every access."""
    settings = Settings({"response_type": "id_token"})
    assert settings.is_oidc and not settings.is_oauth

    settings.response_type = "token"
    assert not settings.is_oidc and settings.is_oauth

    settings.response_type = ""
    assert not settings.is_oidc and not settings.is_oauth


def test_has_response_type_empty():
    """Test the response type helper with empty values."""
    assert not has_response_type(None, "token")
    assert not has_response_type("   ", "token")


def test_optional_parameters():
    """Test that request parameters are exposed for URL building."""
    settings = Settings(
        {
            "client_id": "client",
            "scope": "openid",
            "max_age": "60",
            "prompt": "login",
            "unknown": "dropped",
        }
    )

    assert settings.get_request_parameter("client_id") == "client"
    assert settings.get_request_parameter("scope") == "openid"
    assert settings.get_request_parameter("max_age") == 60
    assert settings.get_request_parameter("prompt") == "login"
    assert settings.get_request_parameter("display") is None
    assert not hasattr(settings, "unknown")


def test_invalid_configuration():
    """Test that malformed values raise a ConfigurationError."""
    with pytest.raises(ConfigurationError):
        Settings({"max_age": "not a number"})

    with pytest.raises(ConfigurationError):
        Settings({"metadata": "not a dict"})
