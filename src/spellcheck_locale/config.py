"""
Configuration module for the spellcheck locale library.

Settings control the verdict cache bounds, hint-text detection throttling, the
platform capability family and the default Hunspell dictionary source.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file from repository root, regardless of current working directory
load_dotenv(find_dotenv(".env"))


class PlatformFamily(str, Enum):
    """Capability families a spell check session can run under."""

    ENGINE_DICTIONARIES = "engine_dictionaries"
    SYSTEM_LOCALES = "system_locales"
    KEYBOARD_LAYOUTS = "keyboard_layouts"


class Settings(BaseSettings):
    """
    Configuration settings for spell check sessions.

    Settings are loaded from .env files and environment variables.
    """

    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = Field(
        default="development",
        validation_alias="ENVIRONMENT",  # Read from global ENVIRONMENT var
        description="Runtime environment",
    )
    SERVICE_NAME: str = "spellcheck_locale"

    DEFAULT_LANGUAGE: str = Field(
        default="en-US", description="Language a new session switches to on startup"
    )

    # Misspelling verdict cache
    MISSPELLING_CACHE_SIZE: int = Field(
        default=512, description="Maximum number of cached per-word verdicts"
    )
    MISSPELLING_CACHE_TTL_SECONDS: float = Field(
        default=4.0, description="Seconds a cached verdict stays valid"
    )

    # Hint text language detection
    HINT_DETECTION_DELAY_SECONDS: float = Field(
        default=0.01, description="Delay before a hint sample is handed to the detector"
    )
    HINT_SAMPLE_MAX_CHARS: int = Field(
        default=512, description="Characters of a hint sample passed to the detector"
    )
    DETECTOR_SEED: int = 0

    # Platform capabilities
    PLATFORM_FAMILY: PlatformFamily | None = Field(
        default=None, description="Force a capability family instead of detecting it"
    )
    LOCALE_OVERRIDE_ENV_VAR: str = Field(
        default="LANG", description="Environment variable that pins a language's locale"
    )
    LOCALE_PROBE_TIMEOUT_SECONDS: float = 5.0

    # Hunspell dictionary source
    DICTIONARY_CACHE_DIR: str | None = None  # Defaults to ~/.cache/spellcheck_locale
    DICTIONARY_URL_TEMPLATE: str = (
        "https://raw.githubusercontent.com/wooorm/dictionaries/main/dictionaries/"
        "{language}/index.{extension}"
    )
    DICTIONARY_FETCH_TIMEOUT_SECONDS: float = Field(
        default=30.0, description="Timeout for downloading one dictionary file"
    )

    @property
    def effective_dictionary_cache_dir(self) -> Path:
        """Get effective dictionary cache directory."""
        if self.DICTIONARY_CACHE_DIR:
            return Path(self.DICTIONARY_CACHE_DIR)
        return Path.home() / ".cache" / "spellcheck_locale" / "dictionaries"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SPELLCHECK_LOCALE_",
    )


# Create a single instance for the application to use
settings = Settings()
