"""Configuration module for entmodel."""

from entmodel.config.logging import get_logger, setup_logging

__all__ = ["setup_logging", "get_logger"]
