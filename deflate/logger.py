"""
Structured logging for the Deflate SDK.

Handlers are only attached when a level is requested, so importing the SDK
into an application leaves its logging setup alone.
"""

import logging
import sys
from typing import Optional


class DeflateLogger:
    """Structured logger for API calls made by the SDK"""

    def __init__(self, name: str = "deflate", level: Optional[str] = None, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Logging level (DEBUG, INFO, WARNING, ERROR); None keeps the host's setup
            log_file: Optional file path for logging
        """
        self.logger = logging.getLogger(name)
        if level is None:
            return

        self.logger.setLevel(getattr(logging, level.upper()))

        # Clear existing handlers
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, level.upper()))

        # Format: [TIMESTAMP] [LEVEL] Message
        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)-7s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            file_formatter = logging.Formatter(
                '%(asctime)s | %(levelname)-7s | %(funcName)-20s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, msg: str, *args):
        self.logger.debug(msg, *args)

    def info(self, msg: str, *args):
        self.logger.info(msg, *args)

    def warning(self, msg: str, *args):
        self.logger.warning(msg, *args)

    def error(self, msg: str, *args):
        self.logger.error(msg, *args)

    def request(self, action: str, url: str):
        """Log an outbound call; never includes the request body"""
        self.debug("POST [%s] %s", action, url)

    def response(self, action: str, status: int, success: bool):
        """Log the outcome of a decoded response"""
        self.debug("[%s] HTTP %s | success=%s", action, status, success)

    def transport_failure(self, action: str, error: Exception):
        """Log a request that never produced a decodable body"""
        self.warning("[%s] request failed: %s", action, error)

    def rejected(self, action: str, reason: str):
        """Log a response the API did not mark as successful"""
        self.warning("[%s] rejected: %s", action, reason)


def get_logger(name: str = "deflate", level: Optional[str] = None, log_file: Optional[str] = None) -> DeflateLogger:
    """Get a configured logger instance"""
    return DeflateLogger(name, level, log_file)
