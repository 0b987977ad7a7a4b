"""Mapping from Beyond 20 roll labels to the number of words to combine."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

ROLL_LABELS: Mapping[str, int] = MappingProxyType(
    {
        ":one: :red_circle:": 1,
        ":two:": 2,
        ":three:": 3,
        ":four: :green_circle:": 4,
    }
)


@dataclass(frozen=True, slots=True)
class RollLookup:
    """Result of resolving a roll label; ``count`` is None when the label is unknown."""

    label: str
    count: Optional[int]

    @property
    def found(self) -> bool:
        return self.count is not None


def lookup_roll(label: str) -> RollLookup:
    return RollLookup(label=label, count=ROLL_LABELS.get(label))
