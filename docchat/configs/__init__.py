"""
Configuration management module.

Centralized, type-safe configuration using Pydantic Settings.
"""

from docchat.configs.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
