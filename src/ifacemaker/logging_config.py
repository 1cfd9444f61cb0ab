import sys
import os
from pathlib import Path
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False

LOG_DIR = Path(".ifacemaker") / "logs"


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None):
    """
    Configures the global logger.

    Console logging goes to stderr so it never mixes with generated code on
    stdout. File logging is opt-in via IFACEMAKER_FILE_LOGGING=1 or
    enable_file_logging=True.

    Args:
        level: Logging level (default: INFO)
        suppress_console: If True, suppress console logging. If None, check IFACEMAKER_MACHINE_MODE env var.
        enable_file_logging: If True, enable file logging. If None, check IFACEMAKER_FILE_LOGGING env var.
    """
    global _logging_configured

    # Explicit arguments always reconfigure; the import-time call only runs once
    explicit = suppress_console is not None or enable_file_logging is not None
    if _logging_configured and not explicit:
        return
    _logging_configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = os.getenv("IFACEMAKER_MACHINE_MODE", "").lower() in ("1", "true", "yes")

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if enable_file_logging is None:
        enable_file_logging = os.getenv("IFACEMAKER_FILE_LOGGING", "").lower() in ("1", "true", "yes")

    if enable_file_logging:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            LOG_DIR / "ifacemaker.log",
            level="INFO",
            rotation="10 MB",
            retention="1 day",
            compression="gz",
            catch=True,
            serialize=False
        )


# Configure the logger on import (will check env var for machine mode)
setup_logging(level=os.getenv("IFACEMAKER_LOG_LEVEL", "WARNING"))
