"""
Custom exceptions and error handling for the meeting-actions service.

The extraction engine itself never raises for string input; these errors
belong to the surrounding service (uploads, transcription, e-mail, sharing).

Provides:
- Typed exception hierarchy for different failure modes
- Error context preservation for debugging
- Partial success handling for per-recipient e-mail delivery
"""

from dataclasses import dataclass, field
from typing import Any


class MeetingActionsError(Exception):
    """Base exception for all meeting-actions errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Client Errors
# =============================================================================


class ClientError(MeetingActionsError):
    """Base class for errors from external providers."""

    pass


class TranscriptionError(ClientError):
    """Speech-to-text provider failed to transcribe the audio."""

    pass


class TranscriptionTimeoutError(TranscriptionError):
    """Transcription did not complete within the polling budget."""

    pass


class EmailDeliveryError(ClientError):
    """E-mail provider rejected or failed to deliver a message."""

    pass


# =============================================================================
# Service Errors
# =============================================================================


class ServiceError(MeetingActionsError):
    """Base class for service-level refusals."""

    pass


class ServiceNotConfiguredError(ServiceError):
    """An optional provider (transcription, e-mail) has no API key configured."""

    pass


class EmailQuotaExceededError(ServiceError):
    """The daily e-mail quota cannot accommodate the request."""

    pass


class ShareNotFoundError(ServiceError):
    """No shared result exists for the given share ID."""

    pass


# =============================================================================
# Pipeline Errors
# =============================================================================


class PipelineError(MeetingActionsError):
    """Base class for request-processing errors."""

    pass


class ValidationError(PipelineError):
    """Input validation failed."""

    pass


class UnsupportedFileTypeError(ValidationError):
    """Uploaded file is neither a text transcript nor a supported audio format."""

    pass


class EmptyTranscriptError(ValidationError):
    """Uploaded file produced no transcript text."""

    pass


class ConfigurationError(PipelineError):
    """Configuration value is invalid or a configured backend cannot be loaded."""

    pass


# =============================================================================
# Partial Success Handling
# =============================================================================


@dataclass
class ItemResult:
    """Result for a single item in a batch operation."""

    item_id: str | None
    success: bool
    error: MeetingActionsError | None = None
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class PartialSuccessResult:
    """
    Result of a batch operation that may partially succeed.

    Allows processing to continue even when some items fail,
    while preserving error context for debugging.
    """

    succeeded: list[ItemResult] = field(default_factory=list)
    failed: list[ItemResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def total_count(self) -> int:
        return self.success_count + self.failure_count

    @property
    def all_succeeded(self) -> bool:
        return self.failure_count == 0

    @property
    def all_failed(self) -> bool:
        return self.success_count == 0

    @property
    def partial_success(self) -> bool:
        return self.success_count > 0 and self.failure_count > 0

    def add_success(
        self,
        item_id: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record a successful item."""
        self.succeeded.append(
            ItemResult(item_id=item_id, success=True, data=data or {})
        )

    def add_failure(
        self,
        error: MeetingActionsError,
        item_id: str | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record a failed item."""
        self.failed.append(
            ItemResult(item_id=item_id, success=False, error=error, data=data or {})
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'success_count': self.success_count,
            'failure_count': self.failure_count,
            'total_count': self.total_count,
            'all_succeeded': self.all_succeeded,
            'succeeded_ids': [r.item_id for r in self.succeeded if r.item_id],
            'failed_ids': [r.item_id for r in self.failed if r.item_id],
            'errors': [
                {'item_id': r.item_id, 'error': r.error.message}
                for r in self.failed
                if r.error
            ],
        }


# =============================================================================
# Error Handling Utilities
# =============================================================================


def wrap_assemblyai_error(
    exc: Exception, context: dict[str, Any] | None = None
) -> TranscriptionError:
    """
    Wrap a speech-to-text exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        Typed TranscriptionError subclass
    """
    if isinstance(exc, TranscriptionError):
        return exc

    error_str = str(exc).lower()
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if 'timed out' in error_str or 'timeout' in error_str:
        return TranscriptionTimeoutError(
            f"Transcription timed out: {exc}",
            context=ctx,
        )
    return TranscriptionError(
        f"Failed to transcribe audio: {exc}",
        context=ctx,
    )


def wrap_sendgrid_error(
    exc: Exception, context: dict[str, Any] | None = None
) -> EmailDeliveryError:
    """
    Wrap an e-mail provider exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        EmailDeliveryError with the provider's message when available
    """
    if isinstance(exc, EmailDeliveryError):
        return exc

    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    response = getattr(exc, 'response', None)
    if response is not None:
        ctx['status_code'] = response.status_code
        detail = _sendgrid_error_message(response) or str(exc)
        return EmailDeliveryError(f"SendGrid API error: {detail}", context=ctx)

    return EmailDeliveryError(f"Failed to send email: {exc}", context=ctx)


def _sendgrid_error_message(response: Any) -> str | None:
    """First error message from a SendGrid error body, if parseable."""
    try:
        body = response.json()
    except ValueError:
        return None
    errors = body.get('errors') if isinstance(body, dict) else None
    if errors and isinstance(errors[0], dict):
        return errors[0].get('message')
    return None
