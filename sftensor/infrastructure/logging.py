import logging
import sys


def setup_logging(level: int | str = logging.INFO):
    """
    Configure the application's root logger.

    Sets the log level (INFO by default), uses the format "timestamp - logger name - level - message" for records, and attaches a StreamHandler that writes logs to stdout.

    Parameters:
        level (int | str): Logging level, either a ``logging`` constant or its name (e.g. "DEBUG").
    """
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
    )
