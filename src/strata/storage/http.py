"""
HTTP Store - read-only network source.

The reference is the request URL; compose with RelativeStore to make
references relative to a base address. Each hit is returned as an Entry
whose metadata is a HeadersStore over the response headers, so transport
metadata stays out of the data channel.

Status mapping:
- 2xx   → Entry(data=body, metadata=HeadersStore)
- 404   → None (absent)
- other → BackendFailure(status_code=...)
"""

from typing import ClassVar

import httpx

from strata.core.config import settings, get_logger
from strata.core.errors import BackendFailure
from strata.core.types import Entry, MergePolicy
from strata.storage.protocol import BaseStore

logger = get_logger("storage.http")


class HeadersStore(BaseStore[str]):
    """Read-only store over one response's headers (case-insensitive)."""

    def __init__(self, headers: httpx.Headers | dict[str, str]):
        self._headers = httpx.Headers(headers)

    async def get(self, ref: str) -> str | None:
        return self._headers.get(ref)

    def __repr__(self) -> str:
        return f"HeadersStore({len(self._headers)} headers)"


class HttpStore(BaseStore[Entry]):
    """
    Store for fetching resources over HTTP - the usual source layer.

    An ``httpx.AsyncClient`` may be injected (connection reuse, mock
    transports in tests); otherwise a short-lived client is opened per
    request with ``settings.http_timeout``.
    """

    merge_policy: ClassVar[MergePolicy] = MergePolicy.UNSUPPORTED

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float | None = None):
        self._client = client
        self.timeout = timeout if timeout is not None else settings.http_timeout

    async def _fetch(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url)
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await client.get(url)

    async def get(self, ref: str) -> Entry | None:
        try:
            response = await self._fetch(ref)
        except httpx.HTTPError as e:
            raise BackendFailure(f"GET {ref} failed: {e}", ref=ref) from e

        if response.status_code == 404:
            logger.debug(f"GET {ref} → 404, treating as absent")
            return None
        if not response.is_success:
            raise BackendFailure(
                f"GET {ref} returned HTTP {response.status_code}",
                ref=ref,
                status_code=response.status_code,
            )

        return Entry(data=response.text, metadata=HeadersStore(response.headers))
