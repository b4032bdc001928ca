"""
Core utilities and configuration for GTO Workforce.

This package provides core functionality including logging configuration,
database setup, validation rules and other shared utilities.
"""

from gto_workforce.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
