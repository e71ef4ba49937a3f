"""
Logging setup
"""

import logging
import os

from .constants import LOG_DIR, LOGGER_NAME


def setup_logging(log_dir: str = LOG_DIR) -> logging.Logger:
    """Log DEBUG to ``<log_dir>/deployer.log`` and INFO to the console.

    Calling again with another ``log_dir`` moves the file output there.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.abspath(os.path.join(log_dir, 'deployer.log'))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    current_files = [h.baseFilename for h in logger.handlers if isinstance(h, logging.FileHandler)]
    if current_files == [log_file]:
        return logger

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    if os.getenv('DEBUG_DEPLOY', 'false').lower() == 'true':
        console_handler.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s'
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger
