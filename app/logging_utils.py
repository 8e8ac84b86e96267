"""
Logging setup for Image Caption Studio
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union


def setup_logging(
    name: str = "app",
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Path] = None,
) -> logging.Logger:
    """
    Set up logging for the application.

    Creates a console handler and, when log_dir is given, a file handler.
    Safe to call on every Streamlit rerun: existing handlers are replaced.

    Args:
        name: Logger name (module loggers under "app." propagate to it)
        level: Logging level
        log_dir: Directory for log files (None disables file logging)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger
