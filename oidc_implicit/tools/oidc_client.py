"""OIDC Client class"""

import json
import logging
from typing import Any, Optional

from ..config.const import (
    REQUIRED_REQUEST_PARAMETERS,
    OPTIONAL_REQUEST_PARAMETERS,
)
from ..config.settings import Settings
from .crypto import JoseJwsVerifier, JwsVerifier
from .errors import MetadataError, ProtocolError, StateError
from .helpers import (
    append_query,
    filter_protocol_claims,
    generate_random_url_string,
    parse_oidc_result,
)
from .metadata import MetadataCache
from .transport import AiohttpJsonFetcher, JsonFetcher
from .types import ProcessedResult, RequestState, TokenRequest
from .validators import IdTokenValidator, validate_access_token

_LOGGER = logging.getLogger(__name__)


def _is_present(value: Any) -> bool:
    return value is not None and value != ""


class OIDCClient:
    """OIDC implicit and hybrid flow client."""

    def __init__(
        self,
        settings: Settings,
        fetcher: Optional[JsonFetcher] = None,
        verifier: Optional[JwsVerifier] = None,
    ):
        self.settings = settings
        if fetcher is None:
            fetcher = AiohttpJsonFetcher(
                tls_verify=settings.tls_verify, tls_ca_path=settings.tls_ca_path
            )
        self.fetcher = fetcher
        self.metadata_cache = MetadataCache(settings, self.fetcher)
        self.id_token_validator = IdTokenValidator(
            settings, self.metadata_cache, verifier or JoseJwsVerifier()
        )

    async def async_close(self) -> None:
        """Closes the HTTP session of the default fetcher."""
        if isinstance(self.fetcher, AiohttpJsonFetcher):
            await self.fetcher.async_close()

    async def async_load_metadata(self) -> dict:
        """Returns the provider's discovery document."""
        return await self.metadata_cache.async_load_metadata()

    async def async_load_signing_key(self) -> str:
        """Returns the provider's signing certificate."""
        return await self.metadata_cache.async_load_signing_key()

    async def async_create_token_request(self) -> TokenRequest:
        """Generates the authorization URL and stores the request state."""
        _LOGGER.debug("Creating token request")
        settings = self.settings

        authorization_endpoint = (
            await self.metadata_cache.async_load_authorization_endpoint()
        )

        # Classify once, so the URL and the stored state always agree
        is_oidc = settings.is_oidc
        is_oauth = settings.is_oauth

        state = generate_random_url_string()
        nonce = generate_random_url_string() if is_oidc else None

        parameters: list[tuple[str, Any]] = [("state", state)]
        if nonce:
            parameters.append(("nonce", nonce))

        for key in REQUIRED_REQUEST_PARAMETERS + OPTIONAL_REQUEST_PARAMETERS:
            value = settings.get_request_parameter(key)
            if _is_present(value):
                parameters.append((key, value))

        url = append_query(authorization_endpoint, parameters)

        request_state: RequestState = {
            "oidc": is_oidc,
            "oauth": is_oauth,
            "state": state,
        }
        if nonce:
            request_state["nonce"] = nonce

        settings.request_state_store.set(
            settings.request_state_key, json.dumps(request_state)
        )

        return {"request_state": request_state, "url": url}

    async def async_create_logout_request(
        self, id_token_hint: Optional[str] = None
    ) -> str:
        """Generates the end session URL."""
        _LOGGER.debug("Creating logout request")
        settings = self.settings

        metadata = await self.metadata_cache.async_load_metadata()
        end_session_endpoint = metadata.get("end_session_endpoint")
        if not end_session_endpoint:
            _LOGGER.warning("Discovery document is missing end_session_endpoint")
            raise MetadataError("No end_session_endpoint in metadata")

        if id_token_hint and settings.post_logout_redirect_uri:
            return append_query(
                end_session_endpoint,
                [
                    ("post_logout_redirect_uri", settings.post_logout_redirect_uri),
                    ("id_token_hint", id_token_hint),
                ],
            )

        return end_session_endpoint

    async def async_validate_id_token(
        self, id_token: str, nonce: str, access_token: Optional[str] = None
    ) -> dict:
        """Validates an id_token against the given nonce."""
        return await self.id_token_validator.async_validate_id_token(
            id_token, nonce, access_token
        )

    async def async_validate_id_token_and_access_token(
        self, id_token: str, nonce: str, access_token: str
    ) -> dict:
        """Validates the id_token and then its at_hash binding to the access token."""
        _LOGGER.debug("Validating ID token and access token")
        claims = await self.async_validate_id_token(id_token, nonce, access_token)
        validate_access_token(claims, access_token)
        return claims

    def _consume_request_state(self) -> RequestState:
        """Reads and removes the stored request state, it can only be used once."""
        settings = self.settings
        store = settings.request_state_store

        raw_state = store.get(settings.request_state_key)
        store.remove(settings.request_state_key)

        if not raw_state:
            _LOGGER.warning("No request state found under %s", settings.request_state_key)
            raise StateError("No request state loaded")

        try:
            request_state = json.loads(raw_state)
        except (TypeError, ValueError) as e:
            _LOGGER.warning("Stored request state is not valid JSON")
            raise StateError("No request state loaded") from e

        if not isinstance(request_state, dict) or not request_state:
            raise StateError("No request state loaded")

        if not request_state.get("state"):
            _LOGGER.warning("Stored request state has no state value")
            raise StateError("No state loaded")

        return request_state

    async def async_process_response(self, response: str) -> ProcessedResult:
        """Validates the redirect response against the stored request state."""
        _LOGGER.debug("Processing response")

        request_state = self._consume_request_state()
        result = parse_oidc_result(response)

        if result.get("error"):
            _LOGGER.warning("Provider returned error: %s", result["error"])
            raise ProtocolError(result["error"])

        if result.get("state") != request_state["state"]:
            _LOGGER.warning("State mismatch!")
            raise StateError("Invalid state")

        is_oidc = bool(request_state.get("oidc"))
        is_oauth = bool(request_state.get("oauth"))

        if is_oidc:
            if not result.get("id_token"):
                _LOGGER.warning("Response is missing the id_token")
                raise ProtocolError("No identity token")
            if not request_state.get("nonce"):
                _LOGGER.warning("Stored request state has no nonce")
                raise ProtocolError("No nonce loaded")

        if is_oauth:
            if not result.get("access_token"):
                _LOGGER.warning("Response is missing the access_token")
                raise ProtocolError("No access token")
            if (result.get("token_type") or "").lower() != "bearer":
                _LOGGER.warning(
                    "Response has token_type %s, expected Bearer",
                    result.get("token_type"),
                )
                raise ProtocolError("Invalid token type")
            if not result.get("expires_in"):
                _LOGGER.warning("Response is missing expires_in")
                raise ProtocolError("No token expiration")

        profile: Optional[dict] = None
        if is_oidc and is_oauth:
            profile = await self.async_validate_id_token_and_access_token(
                result["id_token"], request_state["nonce"], result["access_token"]
            )
        elif is_oidc:
            profile = await self.async_validate_id_token(
                result["id_token"], request_state["nonce"]
            )

        if profile is not None and self.settings.filter_protocol_claims:
            profile = filter_protocol_claims(profile)

        return {
            "profile": profile,
            "id_token": result.get("id_token"),
            "access_token": result.get("access_token"),
            "expires_in": result.get("expires_in"),
            "scope": result.get("scope"),
            "session_state": result.get("session_state"),
        }
