"""Request state stores, hold the state of one authorization request until its response arrives."""

import base64
import binascii
import logging
from typing import Optional, Protocol

from aiohttp import web

_LOGGER = logging.getLogger(__name__)


class RequestStateStore(Protocol):
    """Key/value contract used to keep the request state between request and response."""

    def get(self, key: str) -> Optional[str]:
        """Returns the stored value or None."""

    def set(self, key: str, value: str) -> None:
        """Stores the value under the key, replacing any previous value."""

    def remove(self, key: str) -> None:
        """Removes the key if present."""


class MemoryStateStore:
    """Holds the request state in memory, for a single process."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class CookieStateStore:
    """Keeps the request state in a cookie on an aiohttp request/response pair.

    Reads come from the incoming request cookies unless this store already
    wrote or removed the key, in which case the pending value is returned.
    Values are base64url encoded (unpadded) so the JSON survives cookie quoting.
    """

    def __init__(
        self,
        request: web.Request,
        response: web.StreamResponse,
        secure: bool = True,
        max_age: Optional[int] = None,
    ) -> None:
        self.request = request
        self.response = response
        self.secure = secure
        self.max_age = max_age
        self._pending: dict[str, Optional[str]] = {}

    def get(self, key: str) -> Optional[str]:
        if key in self._pending:
            return self._pending[key]

        raw = self.request.cookies.get(key)
        if not raw:
            return None

        padded = raw + "=" * (-len(raw) % 4)
        try:
            return base64.b64decode(
                padded.encode("ascii"), altchars=b"-_", validate=True
            ).decode("utf-8")
        except (binascii.Error, UnicodeError, ValueError):
            _LOGGER.warning("Ignoring undecodable request state cookie %s", key)
            return None

    def set(self, key: str, value: str) -> None:
        encoded = (
            base64.urlsafe_b64encode(value.encode("utf-8")).rstrip(b"=").decode("ascii")
        )
        self.response.set_cookie(
            key,
            encoded,
            max_age=self.max_age,
            httponly=True,
            secure=self.secure,
            samesite="Lax",
        )
        self._pending[key] = value

    def remove(self, key: str) -> None:
        self.response.del_cookie(key)
        self._pending[key] = None
