"""Player configuration system for Overflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from game.constants import (
    HEADLESS_THINKING_TIME_MS,
    INTERACTIVE_THINKING_TIME_MS,
    MAX_TREE_DEPTH,
    W_GAIN,
    W_LOSS,
)

PlayerType = Literal["random", "heuristic", "search"]

PLAYER_TYPES = ("random", "heuristic", "search")


@dataclass
class PlayerConfig:
    """Configuration for a single player.

    Attributes:
        player_type: Type of player ('random', 'heuristic', or 'search')
        thinking_time_ms: Search time budget per move in milliseconds
            (None = default of the execution context)
        max_tree_depth: Deepest search iteration (only for search player)
        w_gain: Weight for opponent tokens threatened by the player
        w_loss: Weight for own tokens threatened by the opponent
        rng_seed: Random seed for this player (None = unseeded)
        name: Display name (None = derived from type and number)
    """

    player_type: PlayerType = "search"

    # Search settings
    thinking_time_ms: float | None = None
    max_tree_depth: int = MAX_TREE_DEPTH
    w_gain: float = W_GAIN
    w_loss: float = W_LOSS

    # General player settings
    rng_seed: int | None = None
    name: str | None = None

    @classmethod
    def random(cls, seed: int | None = None, name: str | None = None) -> PlayerConfig:
        """Create a random player configuration."""
        return cls(player_type="random", rng_seed=seed, name=name)

    @classmethod
    def heuristic(cls, seed: int | None = None, name: str | None = None) -> PlayerConfig:
        """Create a rule-based player configuration."""
        return cls(player_type="heuristic", rng_seed=seed, name=name)

    @classmethod
    def search(
        cls,
        thinking_time_ms: float | None = None,
        *,
        max_tree_depth: int = MAX_TREE_DEPTH,
        w_gain: float = W_GAIN,
        w_loss: float = W_LOSS,
        seed: int | None = None,
        name: str | None = None,
    ) -> PlayerConfig:
        """Create a game tree search player configuration.

        Args:
            thinking_time_ms: Time budget per move (None = context default)
            max_tree_depth: Deepest iteration of the iterative deepening loop
            w_gain: Weight for opponent tokens threatened by the player
            w_loss: Weight for own tokens threatened by the opponent
            seed: Random seed for tie breaks (None = unseeded)
            name: Display name
        """
        if max_tree_depth < 1:
            raise ValueError(f"max_tree_depth must be at least 1, got {max_tree_depth}")
        return cls(
            player_type="search",
            thinking_time_ms=thinking_time_ms,
            max_tree_depth=max_tree_depth,
            w_gain=w_gain,
            w_loss=w_loss,
            rng_seed=seed,
            name=name,
        )

    def resolve_thinking_time(self, headless: bool) -> float:
        """Return the explicit budget, or the default for the execution context."""
        if self.thinking_time_ms is not None:
            return self.thinking_time_ms
        return HEADLESS_THINKING_TIME_MS if headless else INTERACTIVE_THINKING_TIME_MS


def parse_player_spec(spec: str) -> PlayerConfig:
    """Parse a player specification string into a PlayerConfig.

    Format:
        TYPE[:PARAM=VALUE,PARAM=VALUE,...]

    Examples:
        "random" -> Random player
        "heuristic:seed=3" -> Rule-based player with seeded tie breaks
        "search" -> Search with context default thinking time
        "search:time=2000,depth=6" -> Search with 2 s budget and depth limit 6

    Supported parameters:
        - time (float): Thinking time in milliseconds (search only)
        - depth (int): Max tree depth (search only)
        - gain (float): W_GAIN weight (search only)
        - loss (float): W_LOSS weight (search only)
        - seed (int): Random seed
        - name (str): Display name
    """
    parts = spec.split(":", 1)
    player_type = parts[0].strip().lower()

    if player_type not in PLAYER_TYPES:
        raise ValueError(
            f"Invalid player type: {player_type}. Must be 'random', 'heuristic', or 'search'"
        )

    params = {}
    if len(parts) == 2:
        for param_pair in parts[1].split(","):
            param_pair = param_pair.strip()
            if not param_pair:
                continue
            if "=" not in param_pair:
                raise ValueError(f"Invalid parameter format: {param_pair}. Expected PARAM=VALUE")
            key, value = param_pair.split("=", 1)
            key = key.strip()
            value = value.strip()

            if key in ["depth", "seed"]:
                params[key] = int(value)
            elif key in ["time", "gain", "loss"]:
                params[key] = float(value)
            elif key == "name":
                params[key] = value
            else:
                raise ValueError(f"Unknown parameter: {key}")

    if player_type != "search":
        search_only = sorted(set(params) & {"time", "depth", "gain", "loss"})
        if search_only:
            raise ValueError(
                f"Parameters {', '.join(search_only)} only apply to search players"
            )

    if player_type == "random":
        return PlayerConfig.random(seed=params.get("seed"), name=params.get("name"))
    elif player_type == "heuristic":
        return PlayerConfig.heuristic(seed=params.get("seed"), name=params.get("name"))
    else:  # search
        return PlayerConfig.search(
            params.get("time"),
            max_tree_depth=params.get("depth", MAX_TREE_DEPTH),
            w_gain=params.get("gain", W_GAIN),
            w_loss=params.get("loss", W_LOSS),
            seed=params.get("seed"),
            name=params.get("name"),
        )
