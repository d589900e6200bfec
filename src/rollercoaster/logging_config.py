"""
Logging Configuration
=====================
Sets up the 'rollercoaster' logger: console output, an optional log file, and
a filter for the per-tick trace of the animation.

The animation controller logs one DEBUG record per tick (30 per second). Such
records are tagged with ``extra={"tick": True}`` and are dropped unless
``log_ticks`` is set, so ``--log-level DEBUG`` stays readable.
"""
import logging
import sys
from typing import Optional

TICK_EXTRA = {"tick": True}


class TickFilter(logging.Filter):
    """Drops records tagged as per-tick animation trace."""
    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "tick", False)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_ticks: bool = False,
) -> logging.Logger:
    """
    Configures the logger of the 'rollercoaster' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        log_ticks: Keep the per-tick animation trace.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("rollercoaster")
    logger.setLevel(level)

    # Reconfiguring replaces the handlers instead of stacking them
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        if not log_ticks:
            handler.addFilter(TickFilter())
        logger.addHandler(handler)

    logger.info(f"Logging initialized (level {logging.getLevelName(level)}, "
                f"tick trace {'on' if log_ticks else 'off'}).")
    return logger
