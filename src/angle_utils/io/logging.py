"""Define utility functions to simplify logging to the CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler

logger = logging.getLogger("angle_utils")
console = Console()


def configure_logging(verbose: bool = False) -> None:
    """Route the package's log records through a rich handler on the shared console.

    :param verbose: Whether to show DEBUG records (default: False = INFO and above)
    """
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


def log_info(message: str) -> None:
    """Log the given string at the INFO level."""
    logger.info(message)


def log_debug(message: str) -> None:
    """Log the given string at the DEBUG level."""
    logger.debug(message)
