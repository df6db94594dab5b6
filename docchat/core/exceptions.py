"""
Exception hierarchy for the document chat service.

Every failure crosses the core boundary as one of these types. Each carries a
human-readable message plus a `details` dict used for logging and for the
HTTP error body.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocChatException(Exception):
    """Base exception for all docchat errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidArgumentError(DocChatException):
    """Raised before any side effect when an argument is out of range or missing."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ProviderError(DocChatException):
    """Raised when a remote capability (embedding, completion, OCR) fails."""

    def __init__(
        self,
        message: str,
        provider: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Capability that failed ("embedding", "completion", "ocr")
            operation: Provider call that failed
            details: Additional context
        """
        details = details or {}
        details["provider"] = provider
        if operation:
            details["operation"] = operation
        self.provider = provider
        super().__init__(message, details)


class StoreError(DocChatException):
    """Raised when the persisted store (vectors, sources, mappings) fails."""

    def __init__(
        self,
        message: str,
        operation: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class EmbeddingFailure(DocChatException):
    """
    Raised when any embedding call of an ingestion job fails.

    `ordinal` is the lowest failing chunk ordinal of the batch that failed.
    No vectors are returned alongside this error.
    """

    def __init__(
        self,
        ordinal: int,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["ordinal"] = ordinal
        if source_id:
            details["source_id"] = source_id
        self.ordinal = ordinal
        self.source_id = source_id
        super().__init__(f"Failed to generate embedding for chunk {ordinal}", details)


class RetrievalFailure(DocChatException):
    """Raised when a similarity search fails while answering."""

    def __init__(
        self,
        message: str,
        source_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if source_id:
            details["source_id"] = source_id
        self.source_id = source_id
        super().__init__(message, details)


class StreamAborted(DocChatException):
    """Raised by the stream relay when the upstream token stream errors mid-way."""


class NoDocumentsError(DocChatException):
    """Raised when a mapping key resolves to no sources."""

    def __init__(self, mapping_key: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["mapping_key"] = mapping_key
        self.mapping_key = mapping_key
        super().__init__(f"No documents mapped to {mapping_key}", details)


class MappingConflictError(DocChatException):
    """Raised when a (phone number, source) mapping already exists."""

    def __init__(
        self,
        phone_number: str,
        source_id: str | None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["phone_number"] = phone_number
        details["source_id"] = source_id
        super().__init__("This phone number is already mapped to this file", details)
