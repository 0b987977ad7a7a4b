"""Async OpenAI image generation service."""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)


class OpenAIImageError(RuntimeError):
    """Raised when the OpenAI image API call fails or returns an unusable payload."""

    def __init__(self, status: Optional[int], body: str | Dict[str, Any]):
        self.status = status
        self.body = body
        if status is None:
            super().__init__("OpenAI image generation request failed")
        else:
            super().__init__(f"OpenAI image generation failed with status {status}")


@dataclass
class ImageGenerationResult:
    """Container for an image generation response."""

    url: str
    prompt: str
    revised_prompt: Optional[str] = None
    created: Optional[int] = None


class OpenAIImageService:
    """Async helper for OpenAI image generation endpoints."""

    _IMAGE_URL = "https://api.openai.com/v1/images/generations"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        size: str,
        session: aiohttp.ClientSession,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._size = size
        self._session = session

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def generate(self, prompt: str) -> ImageGenerationResult:
        payload: Dict[str, Any] = {
            "model": self._model,
            "prompt": prompt,
            "n": 1,
            "size": self._size,
        }

        logger.debug("Submitting image generation payload: %s", payload)

        try:
            async with self._session.post(self._IMAGE_URL, headers=self.headers, json=payload) as response:
                status = response.status
                body_text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error("OpenAI image request failed: %s", exc)
            raise OpenAIImageError(None, str(exc) or type(exc).__name__) from exc

        if status != 200:
            logger.error("OpenAI image error (%s): %s", status, body_text)
            raise OpenAIImageError(status, body_text)

        try:
            data: Dict[str, Any] = json.loads(body_text)
        except json.JSONDecodeError as exc:
            raise OpenAIImageError(status, body_text) from exc
        logger.debug("Received image generation payload: %s", data)

        try:
            first = data["data"][0]
            image_url = first["url"]
        except (KeyError, IndexError, TypeError) as exc:
            raise OpenAIImageError(status, data) from exc

        if not isinstance(image_url, str) or not image_url:
            raise OpenAIImageError(status, data)

        logger.debug("Generated image URL: %s", image_url)
        return ImageGenerationResult(
            url=image_url,
            prompt=prompt,
            revised_prompt=first.get("revised_prompt"),
            created=data.get("created"),
        )
