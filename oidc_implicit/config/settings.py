"""Client settings, normalized from a raw configuration mapping."""

import logging
import re
from typing import Any, Optional

import voluptuous as vol

from ..stores.state_store import MemoryStateStore, RequestStateStore
from ..tools.errors import ConfigurationError
from .const import (
    AUTHORITY,
    METADATA,
    JWKS,
    CLIENT_ID,
    REDIRECT_URI,
    RESPONSE_TYPE,
    SCOPE,
    LOAD_USER_PROFILE,
    FILTER_PROTOCOL_CLAIMS,
    POST_LOGOUT_REDIRECT_URI,
    REQUEST_STATE_KEY,
    AUTHORIZATION_ENDPOINT,
    ID_TOKEN_SIGNING_ALGORITHM,
    NETWORK,
    NETWORK_TLS_VERIFY,
    NETWORK_TLS_CA_PATH,
    OPTIONAL_REQUEST_PARAMETERS,
    DISCOVERY_DOCUMENT_SUFFIX,
    RESPONSE_TYPE_ID_TOKEN,
    RESPONSE_TYPE_TOKEN,
)
from .schema import SETTINGS_SCHEMA

_LOGGER = logging.getLogger(__name__)


def normalize_authority(authority: Optional[str]) -> Optional[str]:
    """Rewrites the authority to the full discovery document URL."""
    if not authority or DISCOVERY_DOCUMENT_SUFFIX in authority:
        return authority

    if not authority.endswith("/"):
        authority += "/"
    return authority + DISCOVERY_DOCUMENT_SUFFIX


def has_response_type(response_type: Optional[str], wanted: str) -> bool:
    """Checks if the whitespace separated response_type contains the wanted token."""
    if not response_type:
        return False
    return wanted in re.split(r"\s+", response_type.strip())


# pylint: disable=too-many-instance-attributes
class Settings:
    """Configuration owned by a single OIDCClient."""

    def __init__(
        self,
        config: Optional[dict[str, Any]] = None,
        request_state_store: Optional[RequestStateStore] = None,
    ):
        try:
            validated = SETTINGS_SCHEMA(dict(config or {}))
        except vol.Invalid as e:
            _LOGGER.warning("Invalid client configuration: %s", e)
            raise ConfigurationError(f"Invalid configuration ({e})") from e

        self.authority: Optional[str] = normalize_authority(validated.get(AUTHORITY))
        self.metadata: Optional[dict] = validated.get(METADATA)
        self.jwks: Optional[dict] = validated.get(JWKS)
        self.client_id: Optional[str] = validated.get(CLIENT_ID)
        self.redirect_uri: Optional[str] = validated.get(REDIRECT_URI)
        self.response_type: str = validated[RESPONSE_TYPE]
        self.scope: Optional[str] = validated.get(SCOPE)
        self.load_user_profile: bool = validated[LOAD_USER_PROFILE]
        self.filter_protocol_claims: bool = validated[FILTER_PROTOCOL_CLAIMS]
        self.post_logout_redirect_uri: Optional[str] = validated.get(
            POST_LOGOUT_REDIRECT_URI
        )
        self.request_state_key: str = validated[REQUEST_STATE_KEY]
        self.authorization_endpoint: Optional[str] = validated.get(
            AUTHORIZATION_ENDPOINT
        )
        self.id_token_signing_alg: Optional[str] = validated.get(
            ID_TOKEN_SIGNING_ALGORITHM
        )

        network = validated[NETWORK]
        self.tls_verify: bool = network.get(NETWORK_TLS_VERIFY, True)
        self.tls_ca_path: Optional[str] = network.get(NETWORK_TLS_CA_PATH)

        # prompt, display, max_age etc. are only ever passed through to the request URL
        self.optional_parameters: dict[str, Any] = {
            key: validated[key]
            for key in OPTIONAL_REQUEST_PARAMETERS
            if key in validated
        }

        self.request_state_store: RequestStateStore = (
            request_state_store
            if request_state_store is not None
            else MemoryStateStore()
        )

    @property
    def is_oidc(self) -> bool:
        """True when the response_type asks for an id_token."""
        return has_response_type(self.response_type, RESPONSE_TYPE_ID_TOKEN)

    @property
    def is_oauth(self) -> bool:
        """True when the response_type asks for an access token."""
        return has_response_type(self.response_type, RESPONSE_TYPE_TOKEN)

    def get_request_parameter(self, key: str) -> Any:
        """Returns the configured value for an authorization request parameter."""
        if key in (CLIENT_ID, REDIRECT_URI, RESPONSE_TYPE, SCOPE):
            return getattr(self, key)
        return self.optional_parameters.get(key)
