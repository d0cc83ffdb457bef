"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the configuration parameters for the MCTS bot: the
playout budget per move decision, an optional wall-clock limit and an
optional seed for reproducible searches.
"""
from dataclasses import dataclass, fields
from typing import ClassVar, Optional

from prophecies_ai.core.constants import DEFAULT_PLAYOUTS, FAST_PLAYOUTS, DEEP_PLAYOUTS


@dataclass
class MCTSConfig:
    """
    Configuration parameters for Monte Carlo Tree Search.

    The exploration formula is fixed; the playout budget is the only
    quality/latency trade-off.
    """
    # Search parameters
    playouts: int = DEFAULT_PLAYOUTS
    """Number of playouts to run before recommending a move"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds (None = no limit)"""

    # Randomness
    seed: Optional[int] = None
    """Seed for the bot's random source (None = OS entropy)"""

    # Constants
    INFINITE_VALUE: ClassVar[float] = float('inf')
    """Score given to actions that have never been tried"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.playouts <= 0:
            raise ValueError("playouts must be positive")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer playouts).

        Returns:
            Fast MCTSConfig object
        """
        return cls(playouts=FAST_PLAYOUTS)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(playouts=DEEP_PLAYOUTS)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        names = {f.name for f in fields(cls)}
        valid_params = {k: v for k, v in config_dict.items() if k in names}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
