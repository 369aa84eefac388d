"""Helper functions for the client."""

import base64
import logging
import os
import re
import urllib.parse
from typing import Any, Iterable, Optional

from ..config.const import (
    MAX_RESPONSE_PARAMETERS,
    PROTOCOL_CLAIMS,
    RSA_SIGNING_ALGORITHMS,
    DEFAULT_ID_TOKEN_SIGNING_ALGORITHM,
)
from .errors import ProtocolError

_LOGGER = logging.getLogger(__name__)

_PARAMETER_PATTERN = re.compile(r"([^&=]+)=([^&]*)")


def base64url_encode(value: bytes) -> str:
    """Uses base64url encoding on a given byte string"""
    return base64.urlsafe_b64encode(value).rstrip(b"=").decode("utf-8")


def generate_random_url_string(length: int = 32) -> str:
    """Generates a random URL safe string (base64_url encoded)"""
    return base64url_encode(os.urandom(length))


def encode_uri_component(value: Any) -> str:
    """Percent-encodes a value the way browsers encode a URI component."""
    return urllib.parse.quote(str(value), safe="-_.!~*'()")


def append_query(url: str, parameters: Iterable[tuple[str, Any]]) -> str:
    """Appends the parameters to the URL in the given order."""
    query = "&".join(
        f"{key}={encode_uri_component(value)}" for key, value in parameters
    )
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def parse_oidc_result(response: Optional[str]) -> dict[str, str]:
    """Parses a redirect query string or fragment into its parameters.

    Accepts a bare parameter string, a query string or a full callback URL.
    Only the part after the last '#' is considered when one is present,
    otherwise only the part after the first '?'.
    """
    response = response or ""
    idx = response.rfind("#")
    if idx < 0:
        idx = response.find("?")
    if idx >= 0:
        response = response[idx + 1 :]

    params: dict[str, str] = {}
    # Repeated keys count too, the last value wins
    for count, match in enumerate(_PARAMETER_PATTERN.finditer(response), 1):
        key = urllib.parse.unquote(match.group(1))
        params[key] = urllib.parse.unquote(match.group(2))
        if count > MAX_RESPONSE_PARAMETERS:
            _LOGGER.warning(
                "Response has more than %d parameters, rejecting it",
                MAX_RESPONSE_PARAMETERS,
            )
            raise ProtocolError("Response exceeded expected number of parameters")

    if not params:
        raise ProtocolError("No OIDC response")

    return params


def filter_protocol_claims(claims: dict) -> dict:
    """Returns a copy of the claims without the protocol claims."""
    return {key: value for key, value in claims.items() if key not in PROTOCOL_CLAIMS}


def compute_allowed_signing_algs(
    discovery: dict,
    id_token_signing_alg: Optional[str],
) -> list[str]:
    """Compute allowed ID token signing algorithms from config and OP discovery document.

    - If `id_token_signing_alg` set: Use only it (warn if not in OP-supported).
    - Else: Use the RSA algorithms from the OP's `id_token_signing_alg_values_supported`
      (fallback ['RS256']), the signing key is always an RSA certificate.
    """
    supported_algs = discovery.get("id_token_signing_alg_values_supported") or []

    if id_token_signing_alg:
        if supported_algs and id_token_signing_alg not in supported_algs:
            _LOGGER.warning(
                "Configured id_token_signing_alg '%s' not in OP supported algorithms %s. "
                "Proceeding anyway.",
                id_token_signing_alg,
                supported_algs,
            )
        return [id_token_signing_alg]

    allowed_algs = [alg for alg in supported_algs if alg in RSA_SIGNING_ALGORITHMS]
    if not allowed_algs:
        _LOGGER.debug(
            "No RSA algorithm advertised in discovery document, defaulting to %s",
            DEFAULT_ID_TOKEN_SIGNING_ALGORITHM,
        )
        allowed_algs = [DEFAULT_ID_TOKEN_SIGNING_ALGORITHM]

    _LOGGER.debug("Allowed ID token signing algorithms: %s", allowed_algs)
    return allowed_algs
