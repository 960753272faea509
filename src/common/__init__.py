# Common utilities and shared modules
"""
Shared components:
- Project configuration (settings.yaml + .env)
- Logging configuration
"""

from .config import PROJECT_ROOT, Settings, get_lunch_money_api_key
from .logging import setup_logging

__all__ = [
    "PROJECT_ROOT",
    "Settings",
    "get_lunch_money_api_key",
    "setup_logging",
]
