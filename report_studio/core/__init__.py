"""
Core Infrastructure - Configuration and Logging

This package provides the shared infrastructure used throughout the
application instead of direct library calls.

Usage:
    from report_studio.core import get_config, get_logger

    logger = get_logger(__name__)
    config = get_config()
"""

from ..config import ConfigurationError, ReportConfig, get_config, load_config, reset_config
from .logging_config import JSONFormatter, get_logger, log_with_context, setup_logging

__all__ = [
    # Configuration
    "get_config",
    "load_config",
    "reset_config",
    "ConfigurationError",
    "ReportConfig",
    # Logging
    "get_logger",
    "setup_logging",
    "log_with_context",
    "JSONFormatter",
]
