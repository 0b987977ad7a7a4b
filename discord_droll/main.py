"""Application entrypoint for the dice art bot."""
from __future__ import annotations

import asyncio
import logging

import aiohttp
from pydantic import ValidationError

from .agent import BotAgent
from .config import Settings, get_settings
from .logging import configure_logging
from .plugins import DiceRollPlugin
from .services.image_download import ImageDownloader
from .services.openai_chat import OpenAIChatService
from .services.openai_images import OpenAIImageService
from .triggers import TriggerFilter
from .workflows.dice_pipeline import DiceImagePipeline
from .workflows.prompt_composer import PromptComposer

logger = logging.getLogger(__name__)


def build_pipeline(settings: Settings, session: aiohttp.ClientSession) -> DiceImagePipeline:
    chat_service = OpenAIChatService(
        api_key=settings.openai_api_key,
        model=settings.openai_chat_model,
        session=session,
        max_tokens=settings.openai_chat_max_tokens,
        temperature=settings.openai_chat_temperature,
    )
    image_service = OpenAIImageService(
        api_key=settings.openai_api_key,
        model=settings.openai_image_model,
        size=settings.openai_image_size,
        session=session,
    )
    return DiceImagePipeline(
        settings,
        composer=PromptComposer(chat_service),
        image_service=image_service,
        downloader=ImageDownloader(session=session),
    )


_CREDENTIAL_FIELDS = ("discord_bot_token", "openai_api_key")


def describe_settings_error(exc: ValidationError) -> str:
    """Name the missing credentials when they caused ``exc``, else return the validation detail."""

    failed = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
    missing = [name.upper() for name in _CREDENTIAL_FIELDS if name in failed]
    if missing:
        return f"Please set the {' and '.join(missing)} environment variable(s).\n{exc}"
    return f"Invalid configuration:\n{exc}"


async def async_main(settings: Settings) -> None:
    timeout = aiohttp.ClientTimeout(total=settings.http_timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        agent = BotAgent(settings=settings)
        agent.add_plugin(DiceRollPlugin(TriggerFilter(settings), build_pipeline(settings, session)))

        try:
            await agent.start()
        finally:
            await agent.close()


def main() -> None:
    configure_logging()
    try:
        settings = get_settings()
    except ValidationError as exc:
        logger.error(describe_settings_error(exc))
        raise SystemExit(1) from exc
    asyncio.run(async_main(settings))


if __name__ == "__main__":  # pragma: no cover
    main()
