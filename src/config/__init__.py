"""
Configuration package for ovus

Provides application settings via environment variables using pydantic-settings.
"""

from .settings import appsettings, AppSettings, extensions_normalize

__all__ = ["appsettings", "AppSettings", "extensions_normalize"]
