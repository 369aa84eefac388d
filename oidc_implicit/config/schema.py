"""Config schema"""

import voluptuous as vol
from .const import (
    AUTHORITY,
    METADATA,
    JWKS,
    CLIENT_ID,
    REDIRECT_URI,
    RESPONSE_TYPE,
    SCOPE,
    PROMPT,
    DISPLAY,
    MAX_AGE,
    UI_LOCALES,
    ID_TOKEN_HINT,
    LOGIN_HINT,
    ACR_VALUES,
    LOAD_USER_PROFILE,
    FILTER_PROTOCOL_CLAIMS,
    POST_LOGOUT_REDIRECT_URI,
    REQUEST_STATE_KEY,
    AUTHORIZATION_ENDPOINT,
    ID_TOKEN_SIGNING_ALGORITHM,
    NETWORK,
    NETWORK_TLS_VERIFY,
    NETWORK_TLS_CA_PATH,
    DEFAULT_REQUEST_STATE_KEY,
    DEFAULT_RESPONSE_TYPE,
)

SETTINGS_SCHEMA = vol.Schema(
    {
        # Provider base URL or full discovery document URL
        vol.Optional(AUTHORITY): vol.Coerce(str),
        # Pre-fetched discovery document, skips the discovery request
        vol.Optional(METADATA): dict,
        # Pre-fetched key set, skips the jwks_uri request
        vol.Optional(JWKS): dict,
        # Client ID as registered with the OIDC provider
        vol.Optional(CLIENT_ID): vol.Coerce(str),
        vol.Optional(REDIRECT_URI): vol.Coerce(str),
        # Whitespace separated list, decides between OIDC and/or OAuth handling
        vol.Optional(RESPONSE_TYPE, default=DEFAULT_RESPONSE_TYPE): vol.Coerce(str),
        vol.Optional(SCOPE): vol.Coerce(str),
        # Optional authorization request parameters, passed through as-is
        vol.Optional(PROMPT): vol.Coerce(str),
        vol.Optional(DISPLAY): vol.Coerce(str),
        vol.Optional(MAX_AGE): vol.Coerce(int),
        vol.Optional(UI_LOCALES): vol.Coerce(str),
        vol.Optional(ID_TOKEN_HINT): vol.Coerce(str),
        vol.Optional(LOGIN_HINT): vol.Coerce(str),
        vol.Optional(ACR_VALUES): vol.Coerce(str),
        # Merge the userinfo endpoint response into the profile when we have an access token
        vol.Optional(LOAD_USER_PROFILE, default=True): vol.Coerce(bool),
        # Strip nonce, at_hash, iat etc. from the returned profile
        vol.Optional(FILTER_PROTOCOL_CLAIMS, default=True): vol.Coerce(bool),
        vol.Optional(POST_LOGOUT_REDIRECT_URI): vol.Coerce(str),
        # Key under which the request state is kept between request and response
        vol.Optional(
            REQUEST_STATE_KEY, default=DEFAULT_REQUEST_STATE_KEY
        ): vol.Coerce(str),
        # Explicit authorization endpoint, bypasses discovery for the request URL
        vol.Optional(AUTHORIZATION_ENDPOINT): vol.Coerce(str),
        # Should we enforce a specific signing algorithm on the id tokens?
        # Defaults to the RSA algorithms the provider advertises (or RS256)
        vol.Optional(ID_TOKEN_SIGNING_ALGORITHM): vol.Coerce(str),
        # Network options
        vol.Optional(NETWORK, default={}): vol.Schema(
            {
                # Verify x509 certificates provided when starting TLS connections
                vol.Optional(NETWORK_TLS_VERIFY, default=True): vol.Coerce(bool),
                # Load custom certificate chain for private CAs
                vol.Optional(NETWORK_TLS_CA_PATH): vol.Coerce(str),
            }
        ),
    },
    # Unknown keys are dropped rather than rejected
    extra=vol.REMOVE_EXTRA,
)
