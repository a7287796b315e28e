"""Default locale for each bare language, used when the OS gives no usable hint."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

FALLBACK_LOCALES: Mapping[str, str] = MappingProxyType(
    {
        "af": "af-ZA",
        "bg": "bg-BG",
        "ca": "ca-ES",
        "cs": "cs-CZ",
        "cy": "cy-GB",
        "da": "da-DK",
        "de": "de-DE",
        "el": "el-GR",
        "en": "en-US",
        "es": "es-ES",
        "et": "et-EE",
        "fa": "fa-IR",
        "fo": "fo-FO",
        "fr": "fr-FR",
        "he": "he-IL",
        "hi": "hi-IN",
        "hr": "hr-HR",
        "hu": "hu-HU",
        "hy": "hy-AM",
        "id": "id-ID",
        "it": "it-IT",
        "ko": "ko-KR",
        "lt": "lt-LT",
        "lv": "lv-LV",
        "nb": "nb-NO",
        "nl": "nl-NL",
        "pl": "pl-PL",
        "pt": "pt-BR",
        "ro": "ro-RO",
        "ru": "ru-RU",
        "sk": "sk-SK",
        "sl": "sl-SI",
        "sq": "sq-AL",
        "sr": "sr-RS",
        "sv": "sv-SE",
        "ta": "ta-IN",
        "tg": "tg-TJ",
        "tr": "tr-TR",
        "uk": "uk-UA",
        "vi": "vi-VN",
    }
)
