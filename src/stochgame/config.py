"""Runtime configuration for stochgame.

Defaults live here as module constants and can be overridden through
environment variables. Getters read the environment on every call so tests
and long-running simulators can change settings without re-importing.
"""

import logging
import os

# Default configuration (can be overridden via environment variables)
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_MAX_JOINT_ACTIONS = 100_000

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _known_level(level: str) -> str:
    level = level.upper()
    if level not in logging.getLevelNamesMapping():
        return DEFAULT_LOG_LEVEL
    return level


def get_log_level() -> str:
    """Get configured log level name from environment.

    Unknown level names fall back to DEFAULT_LOG_LEVEL.
    """
    return _known_level(os.environ.get("STOCHGAME_LOG_LEVEL", DEFAULT_LOG_LEVEL))


def get_max_joint_actions() -> int:
    """Get the cap on joint actions produced by one enumeration.

    Returns:
        Positive integer limit. Non-positive or unparsable values in
        STOCHGAME_MAX_JOINT_ACTIONS fall back to DEFAULT_MAX_JOINT_ACTIONS.
    """
    raw = os.environ.get("STOCHGAME_MAX_JOINT_ACTIONS")
    if raw is None:
        return DEFAULT_MAX_JOINT_ACTIONS
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_JOINT_ACTIONS
    if value <= 0:
        return DEFAULT_MAX_JOINT_ACTIONS
    return value


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts and simulators using stochgame.

    Args:
        level: Log level name. If None, uses environment config. Unknown
            names fall back to DEFAULT_LOG_LEVEL.
    """
    if level is None:
        level = get_log_level()
    logging.basicConfig(level=_known_level(level), format=LOG_FORMAT)
