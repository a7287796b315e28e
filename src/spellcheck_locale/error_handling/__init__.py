"""Structured error handling for the spellcheck locale library."""

from .factories import (
    raise_configuration_error,
    raise_dictionary_fetch_error,
    raise_engine_error,
    raise_language_detection_failed,
    raise_locale_probe_failed,
    raise_malformed_locale_error,
)
from .models import ErrorCode, ErrorDetail
from .spellcheck_error import SpellcheckLocaleError

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "SpellcheckLocaleError",
    "raise_configuration_error",
    "raise_dictionary_fetch_error",
    "raise_engine_error",
    "raise_language_detection_failed",
    "raise_locale_probe_failed",
    "raise_malformed_locale_error",
]
