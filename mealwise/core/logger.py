"""Logger configuration for Mealwise."""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[context]}</cyan> - <level>{message}</level>"
)


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Route validation records to stderr and, optionally, a JSON-lines file.

    The engine never logs on its own. Records come from the API app, the CLI and
    the regeneration loop, which bind ``context``, ``check`` or ``kind`` fields.
    The file sink is serialized so those fields survive as JSON keys.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a JSON-lines log file. Console only when None.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    logger.remove()
    logger.configure(extra={"context": "mealwise"})

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            serialize=True,
        )

    logger.debug(f"Logger initialized with level={level}")
