"""
Exception hierarchy for the support assistant.

ConfigurationError  - missing/invalid credential or settings, raised before any network call
EmbeddingError      - embedding call failed or returned no vector
GenerationError     - generation call failed
IngestionError      - uploaded file unreadable or empty after decoding
"""

from typing import Any


class SupportRagError(Exception):
    """Base exception for all support assistant errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(SupportRagError):
    """Raised when the assistant is not configured well enough to run."""


class EmbeddingError(SupportRagError):
    """Raised when the embedding service cannot produce a vector."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class GenerationError(SupportRagError):
    """Raised when the generation service call fails."""

    def __init__(
        self,
        message: str,
        model: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if model:
            details["model"] = model
        super().__init__(message, details)


class IngestionError(SupportRagError):
    """Raised when an uploaded file cannot be turned into text."""

    def __init__(
        self,
        message: str,
        file_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_name:
            details["file_name"] = file_name
        super().__init__(message, details)
