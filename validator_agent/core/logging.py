"""
Centralized logging configuration for the validator agent.
"""

import logging
import sys
from typing import Optional
from .config import LoggingConfig

NOISY_LIBRARY_LOGGERS = ('web3', 'urllib3', 'asyncio')


class LoggingManager:
    """
    Manages logging configuration for the entire application.

    Provides centralized logging setup with consistent formatting
    and level management across all agents and services.
    """

    _instance: Optional['LoggingManager'] = None
    _initialized: bool = False

    def __new__(cls, config: Optional[LoggingConfig] = None) -> 'LoggingManager':
        """Singleton pattern to ensure single logging configuration."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config: Optional[LoggingConfig] = None):
        """Initialize logging manager with configuration."""
        if self._initialized:
            return

        self.config = config or LoggingConfig()
        self._setup_logging()
        LoggingManager._initialized = True

    def _setup_logging(self) -> None:
        """Configure application-wide logging."""
        level = self._resolve_level(self.config.level)

        root_logger = logging.getLogger()
        root_logger.setLevel(level)

        # Remove existing handlers to avoid duplication
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(self.config.format))
        root_logger.addHandler(console_handler)

        self._quiet_libraries(level)

    def _quiet_libraries(self, level: int) -> None:
        # JSON-RPC request logs are only useful when debugging the agent itself
        if self.config.quiet_libraries and level > logging.DEBUG:
            for name in NOISY_LIBRARY_LOGGERS:
                logging.getLogger(name).setLevel(logging.WARNING)

    @staticmethod
    def _resolve_level(level: str) -> int:
        resolved = logging.getLevelName(str(level).upper())
        return resolved if isinstance(resolved, int) else logging.INFO

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger instance for the specified name.

        Args:
            name: Logger name (typically module or class name)

        Returns:
            Configured logger instance
        """
        return logging.getLogger(name)

    def set_level(self, level: str) -> None:
        """
        Change the logging level for all loggers.

        Args:
            level: New logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        logging_level = self._resolve_level(level)
        logging.getLogger().setLevel(logging_level)

        for handler in logging.getLogger().handlers:
            handler.setLevel(logging_level)

        self._quiet_libraries(logging_level)

    @classmethod
    def reset(cls) -> None:
        """Forget the configured instance so the next setup applies a new config."""
        cls._instance = None
        cls._initialized = False


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Setup application logging.

    Args:
        config: Logging configuration. If None, uses default config.

    Returns:
        LoggingManager instance
    """
    return LoggingManager(config)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    if not LoggingManager._initialized:
        setup_logging()

    return logging.getLogger(name)
