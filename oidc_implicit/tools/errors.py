"""Exceptions raised by the OIDC client"""


class OIDCClientException(Exception):
    "Raised when the OIDC Client encounters an error"

    def __init__(self, message: str | None = None):
        self.message = message or self.__doc__
        super().__init__(self.message)


class ConfigurationError(OIDCClientException):
    "Raised when the authority or an endpoint is not configured."


class MetadataError(OIDCClientException):
    "Raised when the discovery document or key set cannot be obtained or is malformed."


class UserinfoError(MetadataError):
    "Raised when the user info is invalid or cannot be obtained."


class SigningKeyError(OIDCClientException):
    "Raised when the key set does not contain a usable RSA signing certificate."


class SignatureError(OIDCClientException):
    "Raised when the id_token signature cannot be verified."


class StateError(OIDCClientException):
    "Raised when the state for your request cannot be matched against a stored state."


class ProtocolError(OIDCClientException):
    "Raised when the response is malformed or the provider returned an error."


class ValidationError(OIDCClientException):
    """Raised when a claim in the ID token fails validation (nonce, issuer, audience, iat, exp)."""


class BindingError(OIDCClientException):
    "Raised when the access token is not bound to the ID token through at_hash."
