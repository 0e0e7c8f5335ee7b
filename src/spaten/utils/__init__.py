"""
Utility helpers for SPATEN.
"""

from .logging import configure_from_config, configure_logging, get_logger, log_context

__all__ = ["configure_logging", "configure_from_config", "get_logger", "log_context"]
