"""
Platform capability families.

Each OS family differs in three ways that matter to a spell check session: where
the "likely locale" hints come from, whether the engine needs a dictionary
payload, and whether one engine instance can be reused across languages. Call
sites ask the capability object instead of branching on ``sys.platform``.
"""

from __future__ import annotations

import asyncio
import ctypes
import os
import sys
from collections.abc import Callable, Iterable, Mapping

from spellcheck_locale.config import PlatformFamily, Settings
from spellcheck_locale.error_handling import (
    SpellcheckLocaleError,
    raise_configuration_error,
    raise_locale_probe_failed,
)
from spellcheck_locale.logging_utils import create_service_logger

logger = create_service_logger("spellcheck_locale.platform_capabilities")

LOCALE_NAME_MAX_LENGTH = 85


class EngineDictionariesCapabilities:
    """The engine ships and owns its dictionaries (macOS-style).

    Likely locales come from the engine's installed dictionary list, which mixes bare
    languages and full locales (``['en', 'pt_BR', 'ko']``) and may contain codes
    nothing can interpret (``ars``); the likely-locale table discards those.
    """

    family = PlatformFamily.ENGINE_DICTIONARIES

    def __init__(self, list_dictionaries: Callable[[], Iterable[str]]) -> None:
        self._list_dictionaries = list_dictionaries

    async def probe_locales(self) -> list[str]:
        return list(self._list_dictionaries())

    def needs_explicit_dictionary(self) -> bool:
        return False

    def can_reuse_engine_across_languages(self) -> bool:
        return True

    def supports_user_additions(self) -> bool:
        return True

    def environment_override(self) -> str | None:
        return None


class SystemLocalesCapabilities:
    """Hunspell with downloaded dictionaries; hints from ``locale -a`` (Linux-style)."""

    family = PlatformFamily.SYSTEM_LOCALES

    def __init__(
        self,
        override_env_var: str = "LANG",
        environ: Mapping[str, str] | None = None,
        probe_timeout_seconds: float = 5.0,
    ) -> None:
        self._override_env_var = override_env_var
        self._environ = environ if environ is not None else os.environ
        self._probe_timeout_seconds = probe_timeout_seconds

    async def probe_locales(self) -> list[str]:
        """Run ``locale -a``; an unavailable or failing command yields no hints."""
        try:
            process = await asyncio.create_subprocess_exec(
                "locale",
                "-a",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.DEVNULL,
            )
            stdout, _ = await asyncio.wait_for(
                process.communicate(), timeout=self._probe_timeout_seconds
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.warning(f"Could not list system locales: {e}")
            return []

        if process.returncode != 0:
            logger.warning(f"'locale -a' exited with status {process.returncode}")
            return []

        return stdout.decode("utf-8", errors="replace").splitlines()

    def needs_explicit_dictionary(self) -> bool:
        return True

    def can_reuse_engine_across_languages(self) -> bool:
        return False

    def supports_user_additions(self) -> bool:
        return False

    def environment_override(self) -> str | None:
        return self._environ.get(self._override_env_var) or None


def read_installed_keyboard_languages() -> list[str]:
    """Locale names (``en-US``) of the keyboard layouts installed on Windows."""
    if sys.platform != "win32":
        raise_locale_probe_failed(
            operation="read_installed_keyboard_languages",
            message="Keyboard layouts can only be read on Windows",
            platform=sys.platform,
        )

    user32 = ctypes.WinDLL("user32")
    kernel32 = ctypes.WinDLL("kernel32")

    count = user32.GetKeyboardLayoutList(0, None)
    layouts = (ctypes.c_void_p * count)()
    user32.GetKeyboardLayoutList(count, layouts)

    languages: list[str] = []
    for layout in layouts:
        lcid = (layout or 0) & 0xFFFF
        name = ctypes.create_unicode_buffer(LOCALE_NAME_MAX_LENGTH)
        if kernel32.LCIDToLocaleName(lcid, name, LOCALE_NAME_MAX_LENGTH, 0):
            languages.append(name.value)
    return languages


class KeyboardLayoutsCapabilities:
    """Hunspell with downloaded dictionaries; hints from keyboard layouts (Windows-style)."""

    family = PlatformFamily.KEYBOARD_LAYOUTS

    def __init__(
        self,
        layout_reader: Callable[[], list[str]] = read_installed_keyboard_languages,
    ) -> None:
        self._layout_reader = layout_reader

    async def probe_locales(self) -> list[str]:
        """Installed keyboard languages; an unreadable layout list yields no hints."""
        try:
            return await asyncio.to_thread(self._layout_reader)
        except (SpellcheckLocaleError, OSError) as e:
            logger.warning(f"Could not read keyboard layouts: {e}")
            return []

    def needs_explicit_dictionary(self) -> bool:
        return True

    def can_reuse_engine_across_languages(self) -> bool:
        return False

    def supports_user_additions(self) -> bool:
        return False

    def environment_override(self) -> str | None:
        return None


PlatformCapabilities = (
    EngineDictionariesCapabilities | SystemLocalesCapabilities | KeyboardLayoutsCapabilities
)


def platform_family_for(platform: str) -> PlatformFamily:
    if platform == "darwin":
        return PlatformFamily.ENGINE_DICTIONARIES
    if platform == "win32":
        return PlatformFamily.KEYBOARD_LAYOUTS
    return PlatformFamily.SYSTEM_LOCALES


def detect_platform_capabilities(
    settings: Settings,
    list_dictionaries: Callable[[], Iterable[str]] | None = None,
    platform: str = sys.platform,
) -> PlatformCapabilities:
    """Build the capability object for the configured or detected platform family.

    Args:
        settings: Library settings (PLATFORM_FAMILY forces a family)
        list_dictionaries: Engine dictionary listing, required for the engine family
        platform: Value of ``sys.platform`` to detect from
    """
    family = settings.PLATFORM_FAMILY or platform_family_for(platform)
    logger.info(f"Using {family.value} platform capabilities (platform={platform})")

    if family is PlatformFamily.ENGINE_DICTIONARIES:
        if list_dictionaries is None:
            raise_configuration_error(
                operation="detect_platform_capabilities",
                config_key="PLATFORM_FAMILY",
                message="Engine dictionary family needs the engine's dictionary listing",
            )
        return EngineDictionariesCapabilities(list_dictionaries)

    if family is PlatformFamily.KEYBOARD_LAYOUTS:
        return KeyboardLayoutsCapabilities()

    return SystemLocalesCapabilities(
        override_env_var=settings.LOCALE_OVERRIDE_ENV_VAR,
        probe_timeout_seconds=settings.LOCALE_PROBE_TIMEOUT_SECONDS,
    )
