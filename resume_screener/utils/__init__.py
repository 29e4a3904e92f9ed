"""Utilities"""

from .config import get_settings, get_config
from .logger import app_logger, ai_logger, api_logger, get_logger

__all__ = [
    "get_settings",
    "get_config",
    "app_logger",
    "ai_logger",
    "api_logger",
    "get_logger",
]
