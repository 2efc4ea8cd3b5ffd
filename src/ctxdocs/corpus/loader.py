"""Fetch a corpus index from a local file or a remote URL.

The locator is a URI: ``file:///path/to/index.json`` is read from disk and
``http(s)://...`` is fetched with a single GET. No retries or caching are
performed; callers share the loaded index across requests.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

from ctxdocs.corpus.index import CorpusIndex
from ctxdocs.exceptions import RetrievalError

logger = logging.getLogger(__name__)

_HTTP_SCHEMES = ("http", "https")


async def fetch_index(
    locator: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = 30.0,
    log: Optional[logging.Logger] = None,
) -> CorpusIndex:
    """Load the corpus index referenced by `locator`.

    Parameters
    ----------
    locator: str
        ``file:`` or ``http(s):`` URI of the serialized index.
    client: httpx.AsyncClient | None
        Client to use for remote locators. A short-lived client is created
        when omitted.
    timeout: float
        Request timeout in seconds for remote locators.
    log: logging.Logger | None
        Logger to report progress on; defaults to this module's logger.

    Raises `RetrievalError` when the index cannot be read and `FormatError`
    when its payload does not match the index schema.
    """
    log = log or logger
    parsed = urlparse((locator or "").strip())
    scheme = parsed.scheme.lower()

    if scheme == "file":
        path = Path(unquote(parsed.path))
        try:
            data = path.read_bytes()
        except OSError as e:
            raise RetrievalError(
                f"Failed to read corpus index: {e.strerror or e}", locator=locator
            ) from e
        index = CorpusIndex.from_text(data)
    elif scheme in _HTTP_SCHEMES:
        body = await _fetch_remote(locator, client=client, timeout=timeout)
        index = CorpusIndex.from_text(body)
    else:
        raise RetrievalError(
            f"Unsupported corpus index locator scheme {scheme or '(none)'!r}",
            locator=locator,
        )

    log.debug("Loaded corpus index with %d docs from %s", len(index), locator)
    return index


async def _fetch_remote(
    url: str, *, client: Optional[httpx.AsyncClient], timeout: float
) -> bytes:
    if client is None:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own:
            return await _get(own, url)
    return await _get(client, url)


async def _get(client: httpx.AsyncClient, url: str) -> bytes:
    try:
        resp = await client.get(url)
    except httpx.HTTPError as e:
        raise RetrievalError(f"Failed to fetch corpus index: {e}", locator=url) from e
    if not resp.is_success:
        raise RetrievalError(
            "Failed to fetch corpus index", status=resp.status_code, locator=url
        )
    return resp.content
