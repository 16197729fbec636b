import logging
import os
import sys
from datetime import datetime
from pathlib import Path

from utils.custom_formatter import CustomFormatter

def setup_logger():
    # create logger
    logger = logging.getLogger("soundcycle")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # console handler stays at INFO unless debug is enabled in config
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(CustomFormatter())
    logger.addHandler(ch)

    # Create log file in ApplicationData
    appdata_dir = os.getenv('APPDATA') if sys.platform == 'win32' else os.path.expanduser('~/.local/share')
    log_dir = Path(appdata_dir) / 'soundcycle' / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)
    date_str = datetime.now().strftime("%Y-%m-%d")
    log_file = log_dir / f'soundcycle_{date_str}.log'

    # Add file handler
    fh = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(CustomFormatter(use_color=False))
    logger.addHandler(fh)

    return logger, log_file

def set_debug(enabled):
    level = logging.DEBUG if enabled else logging.INFO
    for handler in logger.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)

# Initialize logger and log_file as module-level variables
logger, log_file = setup_logger()
