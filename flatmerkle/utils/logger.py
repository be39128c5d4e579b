"""
Logging for flatmerkle.

Everything logs under the ``flatmerkle`` namespace, one child logger per
component:

- ``flatmerkle.tree``: construction (leaf count, root prefix, rejected leaves)
- ``flatmerkle.proof`` / ``flatmerkle.multiproof``: proof sizes
- ``flatmerkle.validate``: why a tree was judged invalid
- ``flatmerkle.cli`` / ``flatmerkle.benchmark``: command-line front ends

Console output goes to stderr so CLI commands can print JSON on stdout.
Nothing touches the filesystem unless file logging is switched on.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

import colorlog

LOGGER_NAME = "flatmerkle"
LOG_FILE = "flatmerkle.log"

CONSOLE_FORMAT = "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s"
FILE_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _console_handler(level: int) -> logging.Handler:
    handler = colorlog.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        colorlog.ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS)
    )
    return handler


def _file_handler(log_dir: Path, level: int) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / LOG_FILE)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


class MerkleLogger:
    """Owns the handlers attached to the ``flatmerkle`` logger"""

    _initialized = False
    _log_dir: Optional[Path] = None

    @classmethod
    def setup(
        cls,
        level: Union[int, str] = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
    ):
        """
        Attach handlers once; later calls are ignored until reset().

        Args:
            level: Level number or name ("DEBUG", "INFO", ...)
            log_dir: Directory for flatmerkle.log. If None, uses ./logs
            log_to_file: Also write plain-text records to the log file
        """
        if cls._initialized:
            return

        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

        package_logger = logging.getLogger(LOGGER_NAME)
        package_logger.setLevel(level)
        package_logger.handlers.clear()
        package_logger.addHandler(_console_handler(level))

        if log_to_file:
            cls._log_dir = Path(log_dir) if log_dir else Path("logs")
            package_logger.addHandler(_file_handler(cls._log_dir, level))

        cls._initialized = True

    @classmethod
    def reset(cls):
        """Close and drop handlers so setup() can run again."""
        package_logger = logging.getLogger(LOGGER_NAME)
        for handler in package_logger.handlers:
            handler.close()
        package_logger.handlers.clear()
        cls._initialized = False
        cls._log_dir = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._initialized:
            cls.setup()

        return logging.getLogger(f"{LOGGER_NAME}.{name}")


def get_logger(name: str) -> logging.Logger:
    """Logger for one component, e.g. get_logger("proof")"""
    return MerkleLogger.get_logger(name)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    """Replace any earlier configuration"""
    MerkleLogger.reset()
    MerkleLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file)
