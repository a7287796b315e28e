"""
Factory functions that build an ErrorDetail and raise SpellcheckLocaleError.

Every factory is typed NoReturn so call sites read as control flow.
"""

from __future__ import annotations

from typing import Any, NoReturn
from uuid import UUID, uuid4

from spellcheck_locale.error_handling.models import ErrorCode, ErrorDetail
from spellcheck_locale.error_handling.spellcheck_error import SpellcheckLocaleError


def _raise(
    error_code: ErrorCode,
    operation: str,
    message: str,
    correlation_id: UUID | None,
    details: dict[str, Any],
) -> NoReturn:
    raise SpellcheckLocaleError(
        ErrorDetail(
            error_code=error_code,
            message=message,
            operation=operation,
            correlation_id=correlation_id or uuid4(),
            details=details,
        )
    )


def raise_malformed_locale_error(
    operation: str,
    locale: str,
    message: str | None = None,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a locale that must normalize cannot be made canonical."""
    _raise(
        ErrorCode.MALFORMED_LOCALE,
        operation,
        message or f"{locale} is not a valid language code",
        correlation_id,
        {"locale": locale, **additional_context},
    )


def raise_dictionary_fetch_error(
    operation: str,
    language: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a dictionary cannot be read from cache or downloaded."""
    _raise(
        ErrorCode.DICTIONARY_FETCH_ERROR,
        operation,
        message,
        correlation_id,
        {"language": language, **additional_context},
    )


def raise_language_detection_failed(
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when the language detector cannot classify a text sample."""
    _raise(
        ErrorCode.LANGUAGE_DETECTION_FAILED,
        operation,
        message,
        correlation_id,
        dict(additional_context),
    )


def raise_locale_probe_failed(
    operation: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when the OS cannot be queried for installed locales."""
    _raise(
        ErrorCode.LOCALE_PROBE_FAILED,
        operation,
        message,
        correlation_id,
        dict(additional_context),
    )


def raise_engine_error(
    operation: str,
    language: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when the native spelling engine rejects a dictionary."""
    _raise(
        ErrorCode.ENGINE_ERROR,
        operation,
        message,
        correlation_id,
        {"language": language, **additional_context},
    )


def raise_configuration_error(
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise on an unusable configuration value."""
    _raise(
        ErrorCode.CONFIGURATION_ERROR,
        operation,
        message,
        correlation_id,
        {"config_key": config_key, **additional_context},
    )
