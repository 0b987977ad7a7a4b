"""Plugin that turns Beyond 20 "Ds" rolls into generated images."""
from __future__ import annotations

import logging
from typing import Optional

import discord

from ..agent import AgentPlugin, BotAgent
from ..triggers import TriggerFilter
from ..workflows.dice_pipeline import DiceImagePipeline

logger = logging.getLogger(__name__)


class DiceRollPlugin(AgentPlugin):
    """Routes matching roll messages to the ``DiceImagePipeline`` workflow."""

    name = "dice"
    priority = 100

    def __init__(self, trigger_filter: TriggerFilter, pipeline: DiceImagePipeline) -> None:
        self._filter = trigger_filter
        self._pipeline = pipeline

    async def handle_message(self, agent: BotAgent, message: discord.Message) -> bool:
        match = self._filter.match(message, bot_user_id=self._bot_user_id(agent))
        if match is None:
            return False

        logger.debug("DiceRollPlugin handling message %s", getattr(message, "id", None))
        return await self._pipeline.handle_roll(match.channel, match.roll_label)

    @staticmethod
    def _bot_user_id(agent: BotAgent) -> Optional[int]:
        bot_user = agent.client.user
        return bot_user.id if bot_user else None
