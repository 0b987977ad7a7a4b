"""Workflow that asks the chat model for D-words and joins them into an image prompt."""
from __future__ import annotations

import logging
import random
from typing import Optional

from ..services.openai_chat import ChatCompletionResult, OpenAIChatService

logger = logging.getLogger(__name__)

SEED_MIN = 4
SEED_MAX = 103
WORD_SEPARATOR = " and "

_WORDS_INSTRUCTION = (
    "Think of {seed} Dungeons and dragons related words that start with the letter D "
    "and give me the last 4. The words can be about the game or stereotypical things "
    "that go on with people while playing it. Put each on a newline."
)

_IMAGE_INSTRUCTION = (
    "Make a single image that combines the following dungeons and dragons related things: {prompt}"
)


def render_image_prompt(prompt: str) -> str:
    """Wrap a composed prompt in the instruction sent to the image model."""

    return _IMAGE_INSTRUCTION.format(prompt=prompt)


class PromptCompositionError(RuntimeError):
    """Raised when a completion does not contain any usable words."""


def join_words(text: str, count: int) -> str:
    """Join the first ``count`` lines of ``text`` with ``" and "``.

    Blank lines are skipped. Fewer lines than ``count`` simply means all of
    them are used.
    """

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    return WORD_SEPARATOR.join(lines[:count])


class PromptComposer:
    """Builds the composed prompt for a roll count."""

    def __init__(self, chat_service: OpenAIChatService, *, rng: Optional[random.Random] = None) -> None:
        self._chat_service = chat_service
        self._rng = rng or random.Random()

    def next_seed(self) -> int:
        return self._rng.randint(SEED_MIN, SEED_MAX)

    async def generate_words(self) -> str:
        seed = self.next_seed()
        instruction = _WORDS_INSTRUCTION.format(seed=seed)
        completion: ChatCompletionResult = await self._chat_service.complete(instruction, seed=seed)
        logger.debug("Completion text for seed %s: %r", seed, completion.content)
        return completion.content

    async def compose(self, count: int) -> str:
        words = await self.generate_words()
        prompt = join_words(words, count)
        if not prompt:
            raise PromptCompositionError(f"Completion produced no words: {words!r}")
        logger.debug("Composed prompt for count %s: %s", count, prompt)
        return prompt
