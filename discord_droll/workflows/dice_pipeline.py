"""Workflow turning a dice roll into a generated image posted back to the channel."""
from __future__ import annotations

import io
import logging
from typing import Optional

import discord

from ..config import Settings
from ..rolls import lookup_roll
from ..services.image_download import ImageDownloader, ImageDownloadError
from ..services.openai_chat import OpenAIChatError
from ..services.openai_images import OpenAIImageError, OpenAIImageService
from .prompt_composer import PromptComposer, PromptCompositionError, render_image_prompt

logger = logging.getLogger(__name__)

IMAGE_FILENAME = "image.png"

DOWNLOAD_FAILED_MESSAGE = "Failed to download the image."
UPLOAD_FAILED_MESSAGE = "Failed to upload the image."
COMPOSE_FAILED_MESSAGE = "Sorry, I couldn't come up with any words for that roll."
GENERATE_FAILED_MESSAGE = "Sorry, I encountered an error generating the image."


class DiceImagePipeline:
    """Coordinates word generation, image generation and the Discord relay for one roll."""

    def __init__(
        self,
        settings: Settings,
        *,
        composer: PromptComposer,
        image_service: OpenAIImageService,
        downloader: ImageDownloader,
    ) -> None:
        self._settings = settings
        self._composer = composer
        self._image_service = image_service
        self._downloader = downloader

    def resolve_count(self, roll_label: str) -> Optional[int]:
        lookup = lookup_roll(roll_label)
        if lookup.found:
            return lookup.count
        if self._settings.uses_default_roll:
            logger.warning(
                "Unknown roll label %r; using default count %s",
                roll_label,
                self._settings.default_roll_count,
            )
            return self._settings.default_roll_count
        logger.warning("Unknown roll label %r; ignoring roll", roll_label)
        return None

    async def handle_roll(self, channel: discord.abc.Messageable, roll_label: str) -> bool:
        """Run the pipeline for a matched roll.

        Returns ``False`` when the roll was dropped without touching the channel
        and ``True`` once the roll has been processed, successfully or not.
        Upstream failures are reported to the channel and never propagate.
        """

        count = self.resolve_count(roll_label)
        if count is None:
            return False
        logger.info("Generating dice image for label %r (count %s)", roll_label, count)

        try:
            prompt = await self._composer.compose(count)
        except (OpenAIChatError, PromptCompositionError) as exc:
            logger.exception("Prompt composition failed: %s", exc)
            await self._notify_upstream_failure(channel, COMPOSE_FAILED_MESSAGE)
            return True

        try:
            result = await self._image_service.generate(render_image_prompt(prompt))
        except OpenAIImageError as exc:
            logger.exception("Image generation failed: %s", exc)
            await self._notify_upstream_failure(channel, GENERATE_FAILED_MESSAGE)
            return True
        if result.revised_prompt:
            logger.debug("Image model revised prompt to: %s", result.revised_prompt)

        with io.BytesIO() as buffer:
            try:
                await self._downloader.download_to(result.url, buffer)
            except ImageDownloadError as exc:
                logger.error("Could not fetch generated image: %s", exc)
                await channel.send(DOWNLOAD_FAILED_MESSAGE)
                return True
            buffer.seek(0)

            uploaded = await self._upload(channel, buffer)

        if uploaded:
            await channel.send(prompt)
            return True

        if self._settings.send_prompt_on_upload_failure:
            try:
                await channel.send(prompt)
            except discord.HTTPException:
                logger.exception("Sending composed prompt after failed upload also failed")
        await channel.send(UPLOAD_FAILED_MESSAGE)
        return True

    async def _upload(self, channel: discord.abc.Messageable, buffer: io.BytesIO) -> bool:
        discord_file = discord.File(buffer, filename=IMAGE_FILENAME)
        try:
            await channel.send(file=discord_file)
        except discord.HTTPException as exc:
            logger.exception("Uploading generated image failed: %s", exc)
            return False
        finally:
            discord_file.close()
        return True

    async def _notify_upstream_failure(self, channel: discord.abc.Messageable, text: str) -> None:
        if not self._settings.notify_on_upstream_error:
            return
        try:
            await channel.send(text)
        except discord.HTTPException:
            logger.exception("Failed to report pipeline error to channel")
