"""Configuration package for ditakit."""

from ditakit.config.settings import DitakitSettings, get_settings, reload_settings

__all__ = ["DitakitSettings", "get_settings", "reload_settings"]
