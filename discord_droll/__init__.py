"""Core package for the dice art Discord bot."""

from .agent import BotAgent, AgentPlugin  # noqa: F401
from .config import Settings  # noqa: F401
from .plugins import DiceRollPlugin  # noqa: F401
