"""Lazily fetched and memoized provider metadata and signing key."""

import asyncio
import logging
from typing import Optional

import aiohttp

from ..config.settings import Settings
from .errors import ConfigurationError, MetadataError, SigningKeyError, UserinfoError
from .transport import JsonFetcher

_LOGGER = logging.getLogger(__name__)

TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def extract_signing_key(jwks: dict) -> str:
    """Returns the leading x5c certificate of the first key, which must be RSA."""
    keys = jwks.get("keys") if isinstance(jwks, dict) else None
    if not isinstance(keys, list) or not keys:
        _LOGGER.warning("Key set does not contain a list of keys")
        raise SigningKeyError("Signing keys empty")

    # Only the first key is considered, there is no kid matching
    key = keys[0]
    kty = key.get("kty") if isinstance(key, dict) else None
    if kty != "RSA":
        _LOGGER.warning("First key in key set has kty %s, expected RSA", kty)
        raise SigningKeyError("Signing key not RSA")

    x5c = key.get("x5c")
    certificate = x5c[0] if isinstance(x5c, list) and x5c else None
    if not isinstance(certificate, str) or not certificate:
        _LOGGER.warning("First RSA key in key set has no certificate chain")
        raise SigningKeyError("RSA keys empty")

    return certificate


class MetadataCache:
    """Fetches the discovery document and signing key once per client."""

    def __init__(self, settings: Settings, fetcher: JsonFetcher):
        self.settings = settings
        self.fetcher = fetcher
        self._signing_key: Optional[str] = None

    async def async_load_metadata(self) -> dict:
        """Returns the discovery document, fetching it on first use."""
        _LOGGER.debug("Loading metadata")
        settings = self.settings

        if settings.metadata:
            return settings.metadata

        if not settings.authority:
            _LOGGER.warning("Cannot load metadata, no authority configured")
            raise ConfigurationError("No authority configured")

        try:
            metadata = await self.fetcher.async_get_json(settings.authority)
        except TRANSPORT_ERRORS as e:
            _LOGGER.warning(
                "Error fetching discovery document from %s: %s", settings.authority, e
            )
            raise MetadataError(f"Failed to load metadata ({e})") from e

        settings.metadata = metadata
        return metadata

    async def async_load_signing_key(self) -> str:
        """Returns the first RSA signing certificate (x5c[0]) of the provider."""
        _LOGGER.debug("Loading X.509 signing key")
        settings = self.settings

        if self._signing_key is not None:
            return self._signing_key

        if not settings.jwks:
            metadata = await self.async_load_metadata()
            jwks_uri = metadata.get("jwks_uri")
            if not jwks_uri:
                _LOGGER.warning("Discovery document is missing jwks_uri")
                raise MetadataError("Metadata does not contain jwks_uri")

            try:
                jwks = await self.fetcher.async_get_json(jwks_uri)
            except TRANSPORT_ERRORS as e:
                _LOGGER.warning("Error fetching JWKS from %s: %s", jwks_uri, e)
                raise MetadataError(f"Failed to load signing keys ({e})") from e

            settings.jwks = jwks

        self._signing_key = extract_signing_key(settings.jwks)
        return self._signing_key

    async def async_load_authorization_endpoint(self) -> str:
        """Returns the configured authorization endpoint or the one from discovery."""
        _LOGGER.debug("Loading authorization endpoint")
        settings = self.settings

        if settings.authorization_endpoint:
            return settings.authorization_endpoint

        if not settings.authority:
            _LOGGER.warning(
                "Neither authorization_endpoint nor authority is configured"
            )
            raise ConfigurationError("No authorization_endpoint configured")

        metadata = await self.async_load_metadata()
        authorization_endpoint = metadata.get("authorization_endpoint")
        if not authorization_endpoint:
            _LOGGER.warning("Discovery document is missing authorization_endpoint")
            raise MetadataError("Metadata does not contain authorization_endpoint")

        return authorization_endpoint

    async def async_load_user_profile(self, access_token: str) -> dict:
        """Fetches the userinfo claims for the access token."""
        _LOGGER.debug("Loading user profile")
        metadata = await self.async_load_metadata()

        userinfo_endpoint = metadata.get("userinfo_endpoint")
        if not userinfo_endpoint:
            _LOGGER.warning("Discovery document is missing userinfo_endpoint")
            raise UserinfoError("Metadata does not contain userinfo_endpoint")

        try:
            return await self.fetcher.async_get_json(
                userinfo_endpoint, access_token=access_token
            )
        except TRANSPORT_ERRORS as e:
            _LOGGER.warning("Error fetching userinfo: %s", e)
            raise UserinfoError(f"Failed to load user profile ({e})") from e
