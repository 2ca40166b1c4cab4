"""
Configuration — Layered settings for mirroring, artifacts, and skills.
"""

from .settings import ConfigError, GuidelinesConfig, load_config

__all__ = ["ConfigError", "GuidelinesConfig", "load_config"]
