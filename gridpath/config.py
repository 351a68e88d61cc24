"""
Gridpath Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Application configuration loaded from environment variables."""

    # Grid defaults (the reference UI bounds grids to 5..25 per side; the core
    # accepts any size that can hold two distinct endpoints)
    DEFAULT_ROWS: int = int(os.getenv("GRIDPATH_DEFAULT_ROWS", "10"))
    DEFAULT_COLS: int = int(os.getenv("GRIDPATH_DEFAULT_COLS", "10"))

    # Animation pacing, in milliseconds
    ANIMATION_DELAY_MS: int = int(os.getenv("GRIDPATH_ANIMATION_DELAY_MS", "50"))
    MIN_DELAY_MS: int = int(os.getenv("GRIDPATH_MIN_DELAY_MS", "1"))
    MAX_DELAY_MS: int = int(os.getenv("GRIDPATH_MAX_DELAY_MS", "1000"))
    # Path reveal runs slower than exploration
    PATH_DELAY_MULTIPLIER: float = float(os.getenv("GRIDPATH_PATH_DELAY_MULTIPLIER", "2"))

    # Random obstacle generation
    OBSTACLE_DENSITY: float = float(os.getenv("GRIDPATH_OBSTACLE_DENSITY", "0.3"))

    # Logging
    VERBOSE: bool = _env_flag("GRIDPATH_VERBOSE")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are inconsistent."""
        if cls.DEFAULT_ROWS < 1 or cls.DEFAULT_COLS < 1:
            raise ValueError(
                "GRIDPATH_DEFAULT_ROWS and GRIDPATH_DEFAULT_COLS must be positive "
                f"(got {cls.DEFAULT_ROWS}x{cls.DEFAULT_COLS})"
            )

        if cls.MIN_DELAY_MS < 1 or cls.MAX_DELAY_MS < cls.MIN_DELAY_MS:
            raise ValueError(
                "GRIDPATH_MIN_DELAY_MS must be >= 1 and <= GRIDPATH_MAX_DELAY_MS "
                f"(got {cls.MIN_DELAY_MS}..{cls.MAX_DELAY_MS})"
            )

        if cls.PATH_DELAY_MULTIPLIER <= 0:
            raise ValueError("GRIDPATH_PATH_DELAY_MULTIPLIER must be positive")

        if not 0.0 <= cls.OBSTACLE_DENSITY <= 1.0:
            raise ValueError(
                "GRIDPATH_OBSTACLE_DENSITY must be in [0, 1] "
                f"(got {cls.OBSTACLE_DENSITY})"
            )

    @classmethod
    def clamp_delay(cls, delay_ms: float) -> float:
        """Clamp an animation delay into the configured range."""
        return max(float(cls.MIN_DELAY_MS), min(float(cls.MAX_DELAY_MS), float(delay_ms)))

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Gridpath Configuration:",
            f"  Default Grid: {cls.DEFAULT_ROWS}x{cls.DEFAULT_COLS}",
            f"  Step Delay: {cls.ANIMATION_DELAY_MS}ms ({cls.MIN_DELAY_MS}..{cls.MAX_DELAY_MS}ms)",
            f"  Path Delay Multiplier: {cls.PATH_DELAY_MULTIPLIER}x",
            f"  Obstacle Density: {cls.OBSTACLE_DENSITY}",
            f"  Verbose: {cls.VERBOSE}",
        ]
        return "\n".join(lines)
