"""Runtime configuration for the CRM platform."""

from config.settings import Settings, configure_logging, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
