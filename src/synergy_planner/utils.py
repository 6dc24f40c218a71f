"""Utility helpers for the Synergy Planner.

Includes:
    - ANSI colorized logging setup.
    - Cost-tier colors used by the reporters.
"""

from __future__ import annotations

import logging
import sys

# === Cost tiers ===
# click color names per cost tier
COST_TIER_COLORS: dict[int, str] = {
    1: "white",
    2: "green",
    3: "blue",
    4: "magenta",
    5: "yellow",
}


# === ANSI color codes for logger ===
class ColorFormatter(logging.Formatter):
    """Custom log formatter with ANSI color codes."""

    COLORS = {
        logging.DEBUG: "\033[92m",   # Green
        logging.INFO: "\033[94m",    # Blue
        logging.WARNING: "\033[93m", # Yellow
        logging.ERROR: "\033[91m",   # Red
        logging.CRITICAL: "\033[95m" # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, self.RESET)
        message = super().format(record)
        return f"{color}{message}{self.RESET}"


def setup_logger(verbose: bool = False) -> logging.Logger:
    """Configure the colorized package logger."""
    logger = logging.getLogger("synergy_planner")
    if logger.handlers:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        return logger
    handler = logging.StreamHandler(sys.stderr)
    formatter = ColorFormatter("%(asctime)s [%(levelname)s]\t| %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


def cost_color(cost: int) -> str:
    return COST_TIER_COLORS.get(cost, "white")
