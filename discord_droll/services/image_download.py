"""Fetch generated images so they can be re-uploaded to Discord."""
from __future__ import annotations

import asyncio
import logging
from typing import BinaryIO, Optional

import aiohttp

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class ImageDownloadError(RuntimeError):
    """Raised when a generated image cannot be fetched."""

    def __init__(self, status: Optional[int], body: str):
        self.status = status
        self.body = body
        super().__init__(f"Image download failed with status {status}")


class ImageDownloader:
    """Plain HTTP GET of an image URL into a caller-supplied buffer."""

    def __init__(self, *, session: aiohttp.ClientSession) -> None:
        self._session = session

    async def download_to(self, url: str, buffer: BinaryIO) -> int:
        """Stream ``url`` into ``buffer`` and return the number of bytes written."""

        logger.debug("Downloading generated image from %s", url)
        written = 0
        try:
            async with self._session.get(url) as response:
                if response.status != 200:
                    body = await response.text()
                    logger.error("Failed to download generated image (%s): %s", response.status, body)
                    raise ImageDownloadError(response.status, body)
                async for chunk in response.content.iter_chunked(_CHUNK_SIZE):
                    buffer.write(chunk)
                    written += len(chunk)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error("Image download request failed: %s", exc)
            raise ImageDownloadError(None, str(exc) or type(exc).__name__) from exc

        logger.debug("Downloaded %s bytes from %s", written, url)
        return written
