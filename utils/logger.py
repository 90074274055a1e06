# utils/logger.py
# This file is part of InfoBool - A cached boolean rule engine
#
# Logging utility for rule compilation and evaluation with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for rule compilation and evaluation."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class RuleLogger:
    """Centralized logger for the rule engine with structured output."""

    def __init__(self, name: str = "infobool", level: LogLevel = LogLevel.INFO):
        """Initialize the rule logger.

        Args:
            name: Logger name (typically module name)
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(RuleFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def is_enabled(self, level: LogLevel) -> bool:
        """Return True if messages at the given level are emitted."""
        return self.logger.isEnabledFor(level.value)

    # Core logging methods
    def debug(self, message: str, **kwargs):
        """Log debug message (detailed internal state)."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message (general progress)."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message (unexpected but recoverable)."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message (serious problems)."""
        self.logger.error(message, **kwargs)

    # Specialized methods for rule events
    def parse_failure(self, expression: str, context: int, reason: str, fallback: bool):
        """Log a rule that could not be compiled and was replaced by its fallback."""
        self.error(
            f"Error parsing boolean expression '{expression}' (context {context}): "
            f"{reason}; using constant {fallback}"
        )

    def unknown_condition(self, name: str, context: int):
        """Log a single condition whose name has no registered id."""
        self.error(f"Unknown condition '{name}' (context {context}); using constant False")

    def frame_refresh(self, expression: str, frame_time: int, value: bool):
        """Log a per-frame cache refresh."""
        self.debug(f"    🔄 '{expression}' refreshed at frame {frame_time} -> {value}")

    def item_refresh(self, expression: str, value: bool):
        """Log an uncached per-item evaluation."""
        self.debug(f"    🔂 '{expression}' evaluated for list item -> {value}")

    def group_combined(self, description: str, tree: str):
        """Log a group built or extended while compiling."""
        self.debug(f"      {description}: {tree}")

    def rule_result(self, expression: str, value: bool, frame_time: Optional[int] = None):
        """Log the value of a rule for the CLI."""
        frame_str = f" [frame {frame_time}]" if frame_time is not None else ""
        mark = "✅" if value else "❌"
        self.info(f"{mark} {expression}{frame_str} = {value}")


class RuleFormatter(logging.Formatter):
    """Custom formatter for rule engine logging with clean output."""

    def format(self, record):
        # WARNING and above carry their level name
        if record.levelno >= logging.WARNING:
            return f"[{record.levelname}] {record.getMessage()}"

        if record.levelno == logging.INFO:
            return record.getMessage()

        return f"[DEBUG] {record.getMessage()}"


# Global logger instance
_global_logger: Optional[RuleLogger] = None


def get_logger(name: str = "infobool") -> RuleLogger:
    """Get or create the global rule logger instance.

    Args:
        name: Logger name (default: "infobool")

    Returns:
        RuleLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = RuleLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)

