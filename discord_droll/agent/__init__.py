"""Discord connection and plugin dispatch."""

from .core import AgentPlugin, BotAgent

__all__ = ["AgentPlugin", "BotAgent"]
