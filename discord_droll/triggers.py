"""Recognises Beyond 20 "Ds" roll messages."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import discord

from .config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TriggerMatch:
    """The parts of an accepted roll message the pipeline needs."""

    channel: discord.abc.Messageable
    roll_label: str


class TriggerFilter:
    """Structural filter for inbound messages.

    A message matches when it was posted by the configured dice bot in response
    to its roll command and carries an embed with the expected title and at
    least one field. The first field's name is the roll label.
    """

    def __init__(self, settings: Settings) -> None:
        self._author_name = settings.trigger_author_name
        self._interaction_name = settings.trigger_interaction_name
        self._embed_title = settings.trigger_embed_title

    def match(self, message: discord.Message, *, bot_user_id: Optional[int] = None) -> Optional[TriggerMatch]:
        author = message.author
        if bot_user_id is not None and getattr(author, "id", None) == bot_user_id:
            return None

        interaction = _interaction_of(message)
        if interaction is None:
            return None

        logger.debug(
            "Inspecting interaction message %s: author=%r interaction=%r embeds=%r",
            getattr(message, "id", None),
            getattr(author, "name", None),
            getattr(interaction, "name", None),
            message.embeds,
        )

        if getattr(author, "name", None) != self._author_name:
            return None
        if getattr(interaction, "name", None) != self._interaction_name:
            return None
        if not message.embeds:
            return None

        embed = message.embeds[0]
        if not embed.fields:
            return None
        if embed.title != self._embed_title:
            return None

        label = embed.fields[0].name or ""
        logger.debug("Matched roll message %s with label %r", getattr(message, "id", None), label)
        return TriggerMatch(channel=message.channel, roll_label=label)


def _interaction_of(message: discord.Message) -> Any:
    # ``interaction_metadata`` does not carry the command name.
    return getattr(message, "interaction", None)
