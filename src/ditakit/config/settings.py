"""Configuration settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, YamlConfigSettingsSource

from ditakit.config.constants import DEFAULT_CONFIG_FILE, DEFAULT_LOG_DIR


class DitakitSettings(BaseSettings):
    """Main configuration class for ditakit.

    Directory settings left empty fall back to a namespaced directory under
    the system temporary location when the runtime starts.
    """

    model_config = SettingsConfigDict(
        env_prefix="DITAKIT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls, settings_cls, init_settings, env_settings, dotenv_settings, file_secret_settings
    ):
        """Customize settings sources to include YAML file."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=DEFAULT_CONFIG_FILE),
            file_secret_settings,
        )

    # Working directories
    install_dir: str = ""
    output_dir: str = ""
    temp_dir: str = ""

    # Toolchain
    bundle_archive: str | None = None  # Overrides the packaged archive
    toolchain_timeout: float | None = Field(default=None, gt=0)  # None blocks until exit

    # Global settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["console", "json"] = "console"
    log_dir: str = DEFAULT_LOG_DIR


@lru_cache
def get_settings() -> DitakitSettings:
    """Get cached settings instance."""
    return DitakitSettings()


def reload_settings() -> DitakitSettings:
    """Force reload settings (clear cache)."""
    get_settings.cache_clear()
    return get_settings()
