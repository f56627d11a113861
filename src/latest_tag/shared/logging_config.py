"""
Centralized logging configuration for the latest-tag indicator.

Provides loguru-based logging with consistent formatting across the
resolver, the cache layer and the command-line front end.
"""

import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class LoggingManager:
    """Manages logging configuration for the whole package."""

    def __init__(self, service_name: str = "latest-tag-indicator"):
        """
        Initialize logging manager.

        Args:
            service_name: Name of the service for logging identification
        """
        self.service_name = service_name
        self._configured = False

    @property
    def configured(self) -> bool:
        return self._configured

    def configure_logging(
        self,
        level: str = "INFO",
        enable_file_logging: bool = False,
        log_file_path: Path | None = None,
    ) -> None:
        """
        Configure logging for the entire application.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_file_logging: Whether to also write a rotating log file
            log_file_path: Path for log file (auto-generated if None)
        """
        if self._configured:
            return

        # Remove default loguru handler
        logger.remove()

        logger.add(
            sys.stderr,
            format=self._get_console_format(verbose=level == "DEBUG"),
            level=level,
            colorize=True,
            backtrace=False,
        )

        if enable_file_logging:
            if log_file_path is None:
                log_file_path = Path.cwd() / "logs" / f"{self.service_name}.log"

            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(log_file_path),
                format=self._get_file_format(),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="gz",
            )

        logger.configure(extra={"service_name": self.service_name})

        self._configured = True
        logger.debug(
            "Logging configured",
            service=self.service_name,
            level=level,
            file_logging=enable_file_logging,
        )

    def _get_console_format(self, verbose: bool) -> str:
        """Get console logging format."""
        if verbose:
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level> | "
                "{extra}"
            )
        return "{time:YYYY-MM-DD HH:mm:ss} [{level}] {message}"

    def _get_file_format(self) -> str:
        """Get file logging format."""
        return (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} | {message} | {extra}"
        )

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Logger bound to the component name
        """
        return logger.bind(component=name)

    def log_cache_operation(
        self, operation: str, key: str, hit: bool | None = None, **kwargs
    ) -> None:
        """Log cache operations."""
        logger.debug(
            "Cache operation", operation=operation, key=key, cache_hit=hit, **kwargs
        )

    def log_api_request(self, method: str, target: str, duration: float) -> None:
        """Log API request information."""
        logger.debug(
            "API request",
            method=method,
            target=target,
            duration_seconds=round(duration, 3),
        )


# Global logging manager instance
_logging_manager: LoggingManager | None = None


def get_logging_manager() -> LoggingManager:
    """Get or create the global logging manager instance."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def configure_logging(
    level: str | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure application logging with environment-based defaults.

    Args:
        level: Logging level, defaults to LOG_LEVEL or INFO
        enable_file_logging: Enable file logging, defaults to ENABLE_FILE_LOGGING
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO").upper()

    if enable_file_logging is None:
        enable_file_logging = (
            os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"
        )

    get_logging_manager().configure_logging(
        level=level, enable_file_logging=enable_file_logging
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given component.

    Args:
        name: Component name (usually __name__)

    Returns:
        Configured logger instance
    """
    return get_logging_manager().get_logger(name)
