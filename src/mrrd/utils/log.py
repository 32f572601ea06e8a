"""Log configuration."""

import sys
from typing import TextIO

from loguru import logger

DEFAULT_LOGLEVEL = 'INFO'

LOG_FORMAT = '{time:HH:mm:ss} | {level: <8} | {message}'


def start_log(log_level: str = DEFAULT_LOGLEVEL, sink: TextIO = sys.stderr) -> None:
    """Enable the mrrd log and send it to a single sink.

    Parameters
    ----------
    log_level
        minimum level of the messages
    sink
        stream the messages are written to
    """
    # first remove (default) stderr output
    logger.remove()
    logger.add(sink, level=log_level, format=LOG_FORMAT, colorize=False)
    logger.enable('mrrd')


def stop_log() -> None:
    """Remove all sinks and disable the mrrd log again."""
    logger.remove()
    logger.disable('mrrd')
