"""Async OpenAI Chat Completions service."""
from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import aiohttp

logger = logging.getLogger(__name__)


class OpenAIChatError(RuntimeError):
    """Raised when the OpenAI chat API call fails or returns an unusable payload."""

    def __init__(self, status: Optional[int], body: str | Dict[str, Any]):
        self.status = status
        self.body = body
        if status is None:
            message = "OpenAI chat completion request failed"
        else:
            message = f"OpenAI chat completion failed with status {status}"
        super().__init__(message)


@dataclass
class ChatCompletionResult:
    """Container for chat completion content and raw payload."""

    content: str
    raw: Dict[str, Any]


class OpenAIChatService:
    """Thin async wrapper around the OpenAI chat completions endpoint."""

    _CHAT_URL = "https://api.openai.com/v1/chat/completions"

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        session: aiohttp.ClientSession,
        max_tokens: int = 60,
        temperature: float = 0.7,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._session = session
        self._max_tokens = max_tokens
        self._temperature = temperature

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(self, prompt: str, *, seed: Optional[int] = None) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [
            {
                "role": "user",
                "content": prompt,
            }
        ]
        payload: Dict[str, Any] = {
            "model": self._model,
            "messages": messages,
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }
        if seed is not None:
            payload["seed"] = seed
        return payload

    async def complete(self, prompt: str, *, seed: Optional[int] = None) -> ChatCompletionResult:
        payload = self.build_payload(prompt, seed=seed)

        logger.debug("Submitting chat completion payload: %s", payload)

        try:
            async with self._session.post(self._CHAT_URL, headers=self.headers, json=payload) as response:
                status = response.status
                body_text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error("OpenAI chat request failed: %s", exc)
            raise OpenAIChatError(None, str(exc) or type(exc).__name__) from exc

        if status != 200:
            logger.error("OpenAI chat error (%s): %s", status, body_text)
            raise OpenAIChatError(status, body_text)

        try:
            data: Dict[str, Any] = json.loads(body_text)
        except json.JSONDecodeError as exc:
            raise OpenAIChatError(status, body_text) from exc
        logger.debug("Received chat completion payload: %s", data)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise OpenAIChatError(status, data) from exc

        if not isinstance(content, str):
            raise OpenAIChatError(status, data)

        return ChatCompletionResult(content=content, raw=data)
