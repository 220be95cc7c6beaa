"""Positions paired with an evaluation score, for sorting candidate moves."""

from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter
from typing import Iterable

from game.position import Position

_by_score = attrgetter("score")


@dataclass
class ScoredPosition:
    """A candidate move and its evaluation. Lives for one evaluation pass."""

    position: Position
    score: float

    @staticmethod
    def sort_ascending(items: Iterable[ScoredPosition]) -> list[ScoredPosition]:
        """Lowest score first; equal scores keep their order."""
        return sorted(items, key=_by_score)

    @staticmethod
    def sort_descending(items: Iterable[ScoredPosition]) -> list[ScoredPosition]:
        """Highest score first; equal scores keep their order."""
        return sorted(items, key=_by_score, reverse=True)
