"""Generic data types"""

from typing import Optional, TypedDict


class RequestState(TypedDict, total=False):
    """State stored between the authorization request and its response"""

    # Whether an id_token was requested
    oidc: bool
    # Whether an access token was requested
    oauth: bool
    # Single use anti-forgery value, echoed back by the provider
    state: str
    # Single use anti-replay value, only present for OIDC requests
    nonce: str


class TokenRequest(TypedDict):
    """Result of building an authorization request"""

    request_state: RequestState
    url: str


class ProcessedResult(TypedDict):
    """Result of a validated authorization response"""

    profile: Optional[dict]
    id_token: Optional[str]
    access_token: Optional[str]
    expires_in: Optional[str]
    scope: Optional[str]
    session_state: Optional[str]
