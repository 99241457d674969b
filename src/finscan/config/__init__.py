"""Configuration module."""
from .settings import AppSettings, get_settings, set_settings

__all__ = ["AppSettings", "get_settings", "set_settings"]
