"""
GPX source loading.

A source is either an http(s) URL or a path relative to the content
directory. Loading is one-shot: no retries, the first failure is final for
that call.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import urlsplit

import httpx

from app.config import settings

from .models import GpxTrack
from .parser import TrackFetchError, parse_gpx

logger = logging.getLogger(__name__)


def is_remote_source(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def resolve_local_path(source: str, content_dir: Path) -> Path:
    """
    Resolve a GPX path inside the content directory.

    Raises:
        TrackFetchError: If the path escapes the content directory
    """
    root = content_dir.resolve()
    path = (root / source.lstrip("/")).resolve()
    if not path.is_relative_to(root):
        raise TrackFetchError(f"GPX path outside content directory: {source}")
    return path


def is_allowed_host(url: str, allowed_hosts: Sequence[str]) -> bool:
    """
    Whether a remote GPX URL points at a configured host.

    An entry matches the host itself and its subdomains. No entries means
    no remote sources at all.
    """
    host = (urlsplit(url).hostname or "").lower()
    if not host:
        return False
    for allowed in allowed_hosts:
        allowed = allowed.lower().strip(".")
        if allowed and (host == allowed or host.endswith(f".{allowed}")):
            return True
    return False


class GpxLoader:
    """Fetches GPX documents and parses them into tracks."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        content_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
        max_bytes: Optional[int] = None,
        allowed_hosts: Optional[Sequence[str]] = None,
    ):
        self._client = client
        self.content_dir = content_dir or settings.content_dir
        self.timeout = timeout if timeout is not None else settings.gpx_fetch_timeout
        self.max_bytes = max_bytes if max_bytes is not None else settings.max_gpx_bytes
        self.allowed_hosts = list(
            allowed_hosts if allowed_hosts is not None else settings.gpx_allowed_hosts
        )

    async def fetch(self, source: str) -> bytes:
        """
        Retrieve the raw GPX document.

        Raises:
            TrackFetchError: On network errors, non-2xx responses,
                missing files, hosts outside the allow-list or oversized
                documents
        """
        if is_remote_source(source):
            content = await self._fetch_remote(source)
        else:
            content = await self._read_local(source)

        if len(content) > self.max_bytes:
            raise TrackFetchError(f"GPX file too large ({len(content)} bytes)")

        return content

    async def load(self, source: str) -> GpxTrack:
        """
        Fetch and parse a GPX source.

        Raises:
            TrackFetchError: If the document cannot be retrieved
            TrackParseError: If the document is malformed
        """
        # Bytes, so the XML encoding declaration decides the decoding
        return parse_gpx(await self.fetch(source))

    async def _fetch_remote(self, url: str) -> bytes:
        if not is_allowed_host(url, self.allowed_hosts):
            logger.warning(f"Refusing GPX from host outside the allow-list: {url}")
            raise TrackFetchError(f"GPX host not allowed: {url}")

        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(follow_redirects=False) as client:
                    response = await client.get(url, timeout=self.timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch GPX {url}: {e}")
            raise TrackFetchError("Unable to load GPX track") from e

        return response.content

    async def _read_local(self, source: str) -> bytes:
        path = resolve_local_path(source, self.content_dir)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error(f"Failed to read GPX {path}: {e}")
            raise TrackFetchError("Unable to load GPX track") from e
