"""Factory helpers for constructing Overflow game components."""

from __future__ import annotations

from typing import TextIO

from controller.overflow_game_controller import OverflowGameController
from game.player_config import PlayerConfig
from renderer.text_renderer import TextRenderer
from shared.interfaces import IRenderer


class OverflowFactory:
    """Centralised factory for assembling OverflowGameController instances."""

    def __init__(self, text_stream: TextIO | None = None):
        self._text_stream = text_stream

    def create_controller(
        self,
        *,
        width: int = 4,
        height: int = 4,
        seed: int | None = None,
        replay_moves=None,
        player1_config: PlayerConfig | None = None,
        player2_config: PlayerConfig | None = None,
        log_to_file: str | None = None,
        log_to_screen: bool = False,
        headless: bool = False,
        show_steps: bool = False,
        max_games: int | None = None,
        move_delay: float = 0.0,
        track_statistics: bool = False,
    ) -> OverflowGameController:
        """Create a fully-wired OverflowGameController.

        A TextRenderer is attached unless the game runs headless.
        """

        def renderer_factory(controller: OverflowGameController) -> IRenderer | None:
            if headless:
                return None
            return TextRenderer(stream=self._text_stream, show_steps=show_steps)

        return OverflowGameController(
            width=width,
            height=height,
            seed=seed,
            replay_moves=replay_moves,
            player1_config=player1_config,
            player2_config=player2_config,
            log_to_file=log_to_file,
            log_to_screen=log_to_screen,
            max_games=max_games,
            headless=headless,
            move_delay=move_delay,
            renderer_or_factory=renderer_factory,
            track_statistics=track_statistics,
        )
