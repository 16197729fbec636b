import logging


class CustomFormatter(logging.Formatter):
    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    FORMATS = {
        logging.DEBUG: grey + format_str + reset,
        logging.INFO: grey + format_str + reset,
        logging.WARNING: yellow + format_str + reset,
        logging.ERROR: red + format_str + reset,
        logging.CRITICAL: bold_red + format_str + reset,
    }

    def __init__(self, use_color=True):
        super().__init__(CustomFormatter.format_str)
        self.use_color = use_color

    def format(self, record):
        if not self.use_color:
            return super().format(record)
        formatter = logging.Formatter(self.FORMATS.get(record.levelno, self.format_str))
        return formatter.format(record)
