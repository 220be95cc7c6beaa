"""Shared protocol definitions."""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:  # pragma: no cover - used for type hints only
    from controller.overflow_game_controller import OverflowGameController
    from game.game_situation import GameSituation
    from game.position import GameColor, Position


@runtime_checkable
class ISituationObserver(Protocol):
    """Protocol for components that follow a game step by step.

    Observers are only notified for moves made with display enabled; the
    game logic never depends on whether an observer is attached.
    """

    def on_token_placed(self, situation: GameSituation, pos: Position) -> None: ...

    def on_overflow_step(self, situation: GameSituation) -> None: ...

    def on_move_completed(
        self, color: GameColor, pos: Position, situation: GameSituation
    ) -> None: ...


@runtime_checkable
class IRenderer(ISituationObserver, Protocol):
    """Protocol describing renderer capabilities required by the controller."""

    def reset_board(self) -> None: ...

    def report_status(self, message: str) -> None: ...


@runtime_checkable
class IRendererFactory(Protocol):
    """Protocol for factories that produce renderers for a controller."""

    def __call__(self, controller: OverflowGameController) -> IRenderer: ...
