"""JWS verification against the provider's X.509 signing certificate."""

import base64
import binascii
import logging
from typing import Protocol, Sequence

from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat
from joserfc import jwt, errors as joserfc_errors
from joserfc.jwk import RSAKey

from .errors import SignatureError

_LOGGER = logging.getLogger(__name__)


class JwsVerifier(Protocol):
    """Verifies a compact JWS and returns its decoded claims."""

    def verify(
        self, token: str, certificate: str, algorithms: Sequence[str]
    ) -> dict:
        """Raises SignatureError when the signature does not verify."""


def load_certificate_key(certificate: str) -> RSAKey:
    """Imports the public key of a base64 (DER) encoded x5c certificate."""
    der = base64.b64decode(certificate, validate=True)
    cert = x509.load_der_x509_certificate(der)
    public_pem = cert.public_key().public_bytes(
        Encoding.PEM, PublicFormat.SubjectPublicKeyInfo
    )
    return RSAKey.import_key(public_pem)


class JoseJwsVerifier:
    """JwsVerifier implemented with joserfc."""

    def verify(
        self, token: str, certificate: str, algorithms: Sequence[str]
    ) -> dict:
        try:
            key = load_certificate_key(certificate)
        except (binascii.Error, ValueError, TypeError, joserfc_errors.JoseError) as e:
            _LOGGER.warning("Signing certificate could not be loaded: %s", e)
            raise SignatureError("JWT failed to validate") from e

        try:
            decoded = jwt.decode(token, key, algorithms=list(algorithms))
        except (joserfc_errors.JoseError, ValueError) as e:
            _LOGGER.warning("JWT verification failed: %s", e)
            raise SignatureError("JWT failed to validate") from e

        return dict(decoded.claims)
