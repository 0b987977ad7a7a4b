"""Built-in plugins that ship with the dice art agent."""

from .dice import DiceRollPlugin

__all__ = ["DiceRollPlugin"]
