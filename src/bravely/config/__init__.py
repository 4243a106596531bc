"""
Bravely Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of goal bounds and rating scales
- Secure handling of secrets
"""

from bravely.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
