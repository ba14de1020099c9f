"""
Logging Configuration
Sets up the logger of the tanabe_zhang package.
"""
import logging
import sys


def setup_logging(level=logging.INFO, log_file=None):
    """
    Configure the 'tanabe_zhang' logger.

    Parameters
    ----------
    level : int, optional
        Logging level, e.g. logging.DEBUG. The default is logging.INFO.
    log_file : str, optional
        Path of a log file written in addition to stdout.

    Returns
    -------
    logging.Logger
    """
    logger = logging.getLogger("tanabe_zhang")
    logger.setLevel(level)

    # avoid duplicate handlers when called again
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
