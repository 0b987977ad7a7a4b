"""Discord client wrapper that feeds inbound messages to the bot's plugins."""
from __future__ import annotations

import logging
from typing import List, Optional

import discord

from ..config import Settings

logger = logging.getLogger(__name__)


class AgentPlugin:
    """A message handler registered with :class:`BotAgent`.

    Plugins are consulted in ascending ``priority`` order until one reports the
    message as handled.
    """

    name: str = "plugin"
    priority: int = 100

    async def handle_message(self, agent: BotAgent, message: discord.Message) -> bool:
        """Return ``True`` when ``message`` was consumed by this plugin."""

        return False


class BotAgent:
    """Owns the Discord connection and dispatches ``on_message`` events."""

    def __init__(
        self,
        *,
        settings: Settings,
        intents: Optional[discord.Intents] = None,
    ) -> None:
        self._settings = settings
        resolved_intents = intents or discord.Intents.default()
        # Embeds posted by other bots are only delivered with the message content intent.
        resolved_intents.message_content = True
        self._client = discord.Client(intents=resolved_intents)
        self._plugins: List[AgentPlugin] = []

        self._client.event(self.on_message)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def client(self) -> discord.Client:
        return self._client

    def add_plugin(self, plugin: AgentPlugin) -> None:
        self._plugins.append(plugin)
        self._plugins.sort(key=lambda registered: registered.priority)
        logger.debug("Registered plugin %s (priority %s)", plugin.name, plugin.priority)

    async def start(self) -> None:
        logger.info("Connecting to Discord with %s plugins", len(self._plugins))
        await self._client.start(self._settings.discord_bot_token)

    async def close(self) -> None:
        logger.info("Disconnecting from Discord")
        await self._client.close()

    async def on_message(self, message: discord.Message) -> None:
        bot_user = self._client.user
        if bot_user is not None and message.author.id == bot_user.id:
            return

        for plugin in self._plugins:
            try:
                handled = await plugin.handle_message(self, message)
            except Exception:
                # Plugin errors end handling of this message only.
                logger.exception("Plugin %s failed while handling message %s", plugin.name, message.id)
                handled = True
            if handled:
                break
