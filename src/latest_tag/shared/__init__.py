"""
Ambient utilities shared by the resolver, the classifier and the CLI
"""

from .logging_config import configure_logging, get_logger, get_logging_manager
from .rate_limit_manager import RateLimitManager, RateLimitStatus
from .telemetry import get_telemetry_manager, trace_function, trace_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "get_logging_manager",
    "get_telemetry_manager",
    "trace_function",
    "trace_operation",
    "RateLimitManager",
    "RateLimitStatus",
]
