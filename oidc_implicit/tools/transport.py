"""JSON over HTTP transport used for discovery, key set and userinfo requests."""

import asyncio
import logging
import ssl
from functools import partial
from typing import Optional, Protocol

import aiohttp

_LOGGER = logging.getLogger(__name__)


class HTTPClientError(aiohttp.ClientResponseError):
    "Raised when the HTTP client encounters not OK (200) status code."

    body: str

    def __init__(self, *args, **kwargs):
        self.body = kwargs.pop("body")
        super().__init__(*args, **kwargs)

    def __str__(self):
        return f"{self.status} ({self.message}) with response body: {self.body}"


async def http_raise_for_status(response: aiohttp.ClientResponse) -> None:
    """Raises an exception if the response is not OK."""
    if not response.ok:
        body = await response.text()

        raise HTTPClientError(
            response.request_info,
            response.history,
            status=response.status,
            message=response.reason or "",
            headers=response.headers,
            body=body,
        )


class JsonFetcher(Protocol):
    """Performs a GET request and returns the decoded JSON object."""

    async def async_get_json(
        self, url: str, access_token: Optional[str] = None
    ) -> dict:
        """Fetches the URL, sending the access token as bearer if given."""


class AiohttpJsonFetcher:
    """JsonFetcher backed by an aiohttp ClientSession."""

    def __init__(
        self,
        http_session: Optional[aiohttp.ClientSession] = None,
        tls_verify: bool = True,
        tls_ca_path: Optional[str] = None,
    ):
        self.http_session = http_session
        self.tls_verify = tls_verify
        self.tls_ca_path = tls_ca_path
        # Sessions we create are ours to close, injected ones belong to the caller
        self._owns_session = http_session is None
        self._session_lock = asyncio.Lock()

    async def _get_http_session(self) -> aiohttp.ClientSession:
        """Create or get the existing client session with custom networking/TLS options"""
        if self.http_session is not None:
            return self.http_session

        # Concurrent first requests must share one session
        async with self._session_lock:
            if self.http_session is not None:
                return self.http_session

            _LOGGER.debug(
                "Creating HTTP session with options: "
                "verify certificates: %r, custom CA file: %s",
                self.tls_verify,
                self.tls_ca_path,
            )

            tcp_connector_args: dict = {}
            if self.tls_ca_path:
                # Reading the CA file blocks, keep it off the event loop
                tcp_connector_args["ssl"] = await asyncio.get_running_loop().run_in_executor(
                    None, partial(ssl.create_default_context, cafile=self.tls_ca_path)
                )
            elif not self.tls_verify:
                tcp_connector_args["ssl"] = False

            self.http_session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**tcp_connector_args)
            )
            return self.http_session

    async def async_get_json(
        self, url: str, access_token: Optional[str] = None
    ) -> dict:
        """Fetches JSON from the given URL."""
        session = await self._get_http_session()

        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = "Bearer " + access_token

        _LOGGER.debug("Fetching JSON from %s", url)
        async with session.get(url, headers=headers) as response:
            await http_raise_for_status(response)
            try:
                document = await response.json(content_type=None)
            except ValueError as e:
                # JSONDecodeError and UnicodeDecodeError both derive from ValueError
                raise aiohttp.ClientPayloadError(
                    f"Response from {url} is not JSON"
                ) from e

        if not isinstance(document, dict):
            raise aiohttp.ClientPayloadError(
                f"Response from {url} is not a JSON object"
            )
        return document

    async def async_close(self) -> None:
        """Closes the HTTP session if it was created by this fetcher."""
        if self._owns_session and self.http_session is not None:
            _LOGGER.debug("Closing HTTP session")
            await self.http_session.close()
            self.http_session = None
