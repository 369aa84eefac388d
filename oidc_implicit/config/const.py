"""Config constants."""

## ===
## Config keys
## ===

AUTHORITY = "authority"
METADATA = "metadata"
JWKS = "jwks"
CLIENT_ID = "client_id"
REDIRECT_URI = "redirect_uri"
RESPONSE_TYPE = "response_type"
SCOPE = "scope"
PROMPT = "prompt"
DISPLAY = "display"
MAX_AGE = "max_age"
UI_LOCALES = "ui_locales"
ID_TOKEN_HINT = "id_token_hint"
LOGIN_HINT = "login_hint"
ACR_VALUES = "acr_values"
LOAD_USER_PROFILE = "load_user_profile"
FILTER_PROTOCOL_CLAIMS = "filter_protocol_claims"
POST_LOGOUT_REDIRECT_URI = "post_logout_redirect_uri"
REQUEST_STATE_KEY = "request_state_key"
AUTHORIZATION_ENDPOINT = "authorization_endpoint"
ID_TOKEN_SIGNING_ALGORITHM = "id_token_signing_alg"
NETWORK = "network"
NETWORK_TLS_VERIFY = "tls_verify"
NETWORK_TLS_CA_PATH = "tls_ca_path"

## ===
## Defaults
## ===

DEFAULT_REQUEST_STATE_KEY = "OidcClient.request_state"
DEFAULT_RESPONSE_TYPE = "id_token token"
DISCOVERY_DOCUMENT_SUFFIX = ".well-known/openid-configuration"

## ===
## Protocol constants
## ===

RESPONSE_TYPE_ID_TOKEN = "id_token"
RESPONSE_TYPE_TOKEN = "token"

# Order matters, parameters are appended to the authorization URL in this order
REQUIRED_REQUEST_PARAMETERS = (CLIENT_ID, REDIRECT_URI, RESPONSE_TYPE, SCOPE)
OPTIONAL_REQUEST_PARAMETERS = (
    PROMPT,
    DISPLAY,
    MAX_AGE,
    UI_LOCALES,
    ID_TOKEN_HINT,
    LOGIN_HINT,
    ACR_VALUES,
)

PROTOCOL_CLAIMS = ("nonce", "at_hash", "iat", "nbf", "exp", "aud", "iss", "idp")

MAX_RESPONSE_PARAMETERS = 50
ID_TOKEN_MAX_AGE_SECONDS = 5 * 60

DEFAULT_ID_TOKEN_SIGNING_ALGORITHM = "RS256"
RSA_SIGNING_ALGORITHMS = ("RS256", "RS384", "RS512", "PS256", "PS384", "PS512")
