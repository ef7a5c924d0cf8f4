"""
Logging setup.

Production logs at INFO with full timestamps and an Apache "combined" access
log. Development logs at DEBUG through a compact console formatter with a
short access log line per request.
"""

import logging
import sys
from datetime import datetime

from bootstrapcdn.config import DeploymentMode

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

ACCESS_LOG_FORMATS = {
    DeploymentMode.PRODUCTION: '%a - - %t "%r" %s %b "%{Referer}i" "%{User-Agent}i"',
    DeploymentMode.DEVELOPMENT: '%r %s %Tfs - %b',
}


class DevFormatter(logging.Formatter):
    """Short console format for local work: time, level, message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        line = f"{timestamp} [{record.levelname}] │ {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(mode: DeploymentMode) -> None:
    """Configure the root logger for the given deployment mode."""
    if mode.is_production:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt=LOG_DATEFMT, force=True)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(DevFormatter())
    logging.basicConfig(level=logging.DEBUG, handlers=[handler], force=True)


def access_log_format(mode: DeploymentMode) -> str:
    return ACCESS_LOG_FORMATS[mode]
