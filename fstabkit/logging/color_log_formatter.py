import logging
from logging import Formatter, LogRecord


class ColorLogFormatter(Formatter):
    """Formatter that colors log records according to their level"""

    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    YELLOW = "\033[33m"

    def level_style(self, levelno: int) -> str:
        match levelno:
            case logging.CRITICAL:
                return self.BOLD + self.RED
            case logging.ERROR:
                return self.RED
            case logging.WARNING:
                return self.YELLOW
            case logging.DEBUG:
                return self.DIM
            case _:
                return ""

    def format(self, record: LogRecord) -> str:
        super_format = super().format(record)
        style = self.level_style(record.levelno)
        if not style:
            return super_format
        return style + super_format + self.RESET
