"""ID token claim validation and access token binding."""

import hashlib
import logging
import time
from typing import Optional

from ..config.const import ID_TOKEN_MAX_AGE_SECONDS
from ..config.settings import Settings
from .crypto import JwsVerifier
from .errors import BindingError, ValidationError
from .helpers import base64url_encode, compute_allowed_signing_algs
from .metadata import MetadataCache

_LOGGER = logging.getLogger(__name__)


def compute_at_hash(access_token: str) -> str:
    """at_hash = base64url(left half of SHA256(access_token))"""
    digest = hashlib.sha256(access_token.encode("ascii")).digest()
    return base64url_encode(digest[: len(digest) // 2])


def validate_access_token(claims: dict, access_token: str) -> None:
    """Checks that the access token is bound to the ID token through at_hash."""
    _LOGGER.debug("Validating access token")

    at_hash = claims.get("at_hash")
    if not at_hash:
        _LOGGER.warning("ID token does not contain at_hash")
        raise BindingError("No at_hash in id_token")

    try:
        expected_at_hash = compute_at_hash(access_token)
    except UnicodeEncodeError as e:
        _LOGGER.warning("Access token is not ASCII, cannot compute at_hash")
        raise BindingError("at_hash failed to validate") from e

    if at_hash != expected_at_hash:
        _LOGGER.warning("ID token at_hash mismatch (access token tampering?)")
        raise BindingError("at_hash failed to validate")


def _numeric_claim(claims: dict, name: str) -> Optional[float]:
    value = claims.get(name)
    # bool is an int subclass but never a valid timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class IdTokenValidator:
    """Verifies the id_token signature and its standard claims."""

    def __init__(
        self, settings: Settings, metadata_cache: MetadataCache, verifier: JwsVerifier
    ):
        self.settings = settings
        self.metadata_cache = metadata_cache
        self.verifier = verifier

    def _validate_claims(self, claims: dict, nonce: str, metadata: dict) -> None:
        """Fails on the first claim that does not match."""
        if claims.get("nonce") != nonce:
            _LOGGER.warning("Nonce mismatch!")
            raise ValidationError("Invalid nonce")

        issuer = metadata.get("issuer")
        if not issuer or claims.get("iss") != issuer:
            _LOGGER.warning(
                "Issuer mismatch. Expected: %s, got: %s",
                issuer,
                claims.get("iss"),
            )
            raise ValidationError("Invalid issuer")

        client_id = self.settings.client_id
        if not client_id or claims.get("aud") != client_id:
            _LOGGER.warning(
                "Audience mismatch. Expected: %s, got: %s",
                client_id,
                claims.get("aud"),
            )
            raise ValidationError("Invalid audience")

        now = int(time.time())

        # Tokens issued in the future are accepted, only stale ones are rejected
        iat = _numeric_claim(claims, "iat")
        if iat is None or now - iat > ID_TOKEN_MAX_AGE_SECONDS:
            _LOGGER.warning("ID token issued at %s, now is %s", claims.get("iat"), now)
            raise ValidationError("Token issued too long ago")

        exp = _numeric_claim(claims, "exp")
        if exp is None or exp < now:
            _LOGGER.warning("ID token expired at %s, now is %s", claims.get("exp"), now)
            raise ValidationError("Token expired")

    async def async_validate_id_token(
        self, id_token: str, nonce: str, access_token: Optional[str] = None
    ) -> dict:
        """Validates the id_token and returns its claims, merged with userinfo if loaded."""
        _LOGGER.debug("Validating ID token")

        certificate = await self.metadata_cache.async_load_signing_key()
        metadata = await self.metadata_cache.async_load_metadata()

        algorithms = compute_allowed_signing_algs(
            metadata, self.settings.id_token_signing_alg
        )
        claims = self.verifier.verify(id_token, certificate, algorithms)

        self._validate_claims(claims, nonce, metadata)

        if access_token and self.settings.load_user_profile:
            profile = await self.metadata_cache.async_load_user_profile(access_token)
            # Userinfo wins on key collisions
            return {**claims, **profile}

        return claims
