import logging

from utils.logger import logger as app_logger


def get_logger(name):
    """Return a logger under the application logger so records share its handlers."""
    if name is None or name == app_logger.name:
        return app_logger
    if name.startswith(app_logger.name + "."):
        return logging.getLogger(name)
    return app_logger.getChild(name)
