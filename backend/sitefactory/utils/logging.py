# backend/sitefactory/utils/logging.py
import logging
import sys
from logging.handlers import RotatingFileHandler
from ..config import settings

LOG_DIR = settings.LOG_PATH
LOG_DIR.mkdir(parents=True, exist_ok=True)

# Attributes every LogRecord carries; extra keys with these names get prefixed
RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class ExtraFormatter(logging.Formatter):
    """Appends the record's ``extra`` fields as key=value pairs"""

    def format(self, record):
        line = super().format(record)
        extras = {key: value for key, value in vars(record).items() if key not in RESERVED_ATTRS}
        if not extras:
            return line
        return line + " | " + " ".join(f"{key}={value!r}" for key, value in extras.items())


console_formatter = ExtraFormatter(
    '\033[1;36m%(asctime)s\033[0m \033[1;35m%(levelname)s\033[0m \033[1;33m%(name)s\033[0m: %(message)s'
)
file_formatter = ExtraFormatter('%(asctime)s %(levelname)s %(name)s [%(module)s:%(lineno)d]: %(message)s')


class ComponentLogger:
    """Logger for one part of the app, writing to ``<component>.log`` and stdout"""

    def __init__(self, component: str):
        self.logger = logging.getLogger(f"sitefactory.{component}")
        self.logger.setLevel(logging.INFO)
        if not self.logger.handlers:
            file_handler = RotatingFileHandler(LOG_DIR / f"{component}.log", maxBytes=5 * 1024 * 1024, backupCount=3)
            file_handler.setFormatter(file_formatter)
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(file_handler)
            self.logger.addHandler(console_handler)

    def _log(self, level, msg, extra, exc_info):
        if extra:
            extra = {f"extra_{key}" if key in RESERVED_ATTRS else key: value for key, value in extra.items()}
        self.logger.log(level, msg, extra=extra, exc_info=exc_info, stacklevel=3)

    def info(self, msg, extra=None, exc_info=None):
        self._log(logging.INFO, msg, extra, exc_info)

    def warning(self, msg, extra=None, exc_info=None):
        self._log(logging.WARNING, msg, extra, exc_info)

    def error(self, msg, extra=None, exc_info=None):
        self._log(logging.ERROR, msg, extra, exc_info)


api_logger = ComponentLogger("api")
db_logger = ComponentLogger("database")
service_logger = ComponentLogger("service")

__all__ = ["api_logger", "db_logger", "service_logger"]
