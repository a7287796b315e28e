"""Error codes and the structured error payload carried by SpellcheckLocaleError."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class ErrorCode(str, Enum):
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    MALFORMED_LOCALE = "MALFORMED_LOCALE"
    DICTIONARY_FETCH_ERROR = "DICTIONARY_FETCH_ERROR"
    LANGUAGE_DETECTION_FAILED = "LANGUAGE_DETECTION_FAILED"
    LOCALE_PROBE_FAILED = "LOCALE_PROBE_FAILED"
    ENGINE_ERROR = "ENGINE_ERROR"


class ErrorDetail(BaseModel):
    """Structured description of a failure, independent of the raising code path."""

    model_config = ConfigDict(frozen=True)

    error_code: ErrorCode
    message: str
    service: str = "spellcheck_locale"
    operation: str
    correlation_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    details: dict[str, Any] = Field(default_factory=dict)
