"""Configuration subpackage - settings and logging setup."""
from .settings import Settings, get_settings, reset_settings

__all__ = ['Settings', 'get_settings', 'reset_settings']
