"""loguru sinks for the typeahead engine, its widgets and the CLI."""

import os
import sys
from loguru import logger
from typing import Optional

# Last sink path, reused when setup_logger() is called again without one
_log_file_path: Optional[str] = None


def setup_logger(
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "7 days",
    compression: str = "zip",
    console_output: bool = False,
) -> None:
    """
    Replace loguru's sinks with a rotating file sink and, optionally, stderr.

    Importing the package installs nothing; the ``typeahead`` CLI calls this
    once per command and embedding applications may do the same.

    Args:
        log_file: Sink path; relative paths are made absolute. Defaults to
            the last configured path, then ``typeahead.log`` in the working
            directory
        log_level: Minimum level written by both sinks
        rotation: Size at which the file sink rolls over
        retention: Age after which rolled files are deleted
        compression: Archive format of rolled files
        console_output: Also write colored records to stderr (keep off while
            a Textual app owns the terminal)
    """
    global _log_file_path

    if log_file is None:
        if _log_file_path is None:
            _log_file_path = os.path.join(os.getcwd(), "typeahead.log")
        log_file = _log_file_path
    else:
        if not os.path.isabs(log_file):
            log_file = os.path.abspath(log_file)
        _log_file_path = log_file

    logger.remove()

    if console_output:
        logger.add(
            sys.stderr,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            colorize=True,
        )

    logger.add(
        log_file,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        rotation=rotation,
        retention=retention,
        compression=compression,
        encoding="utf-8",
    )


def get_logger(name: Optional[str] = None):
    """Module logger tagged with a component name (``typeahead`` when omitted)."""
    return logger.bind(name=name or "typeahead")
