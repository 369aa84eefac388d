"""OpenID Connect implicit and hybrid flow client."""

from .config import Settings
from .stores import CookieStateStore, MemoryStateStore, RequestStateStore
from .tools.errors import (
    OIDCClientException,
    ConfigurationError,
    MetadataError,
    UserinfoError,
    SigningKeyError,
    SignatureError,
    StateError,
    ProtocolError,
    ValidationError,
    BindingError,
)
from .tools.oidc_client import OIDCClient
from .tools.types import ProcessedResult, RequestState, TokenRequest

__all__ = [
    "OIDCClient",
    "Settings",
    "RequestStateStore",
    "MemoryStateStore",
    "CookieStateStore",
    "OIDCClientException",
    "ConfigurationError",
    "MetadataError",
    "UserinfoError",
    "SigningKeyError",
    "SignatureError",
    "StateError",
    "ProtocolError",
    "ValidationError",
    "BindingError",
    "ProcessedResult",
    "RequestState",
    "TokenRequest",
]
