# Configuration module for the session store
from .settings import (
    Settings,
    Environment,
    ConfigurationError,
    load_settings,
    get_settings,
    clear_settings_cache,
)

__all__ = [
    "Settings",
    "Environment",
    "ConfigurationError",
    "load_settings",
    "get_settings",
    "clear_settings_cache",
]
