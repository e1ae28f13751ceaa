"""Configuration and logging setup shared by the web app."""

from .config import find_config, load_config
from .config_models import AppConfig
from .logging_config import setup_logging

__all__ = ["AppConfig", "find_config", "load_config", "setup_logging"]
