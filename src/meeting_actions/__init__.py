"""
Meeting Actions

Heuristic extraction of owner/task action items from meeting transcripts,
with an HTTP service for text and audio uploads, share links and e-mail.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .pipeline import (
    ActionExtractionPipeline,
    ExtractionResult,
    ActionParser,
    PersonDetector,
    RegexPersonDetector,
    SpacyPersonDetector,
    build_person_detector,
    extract_actions,
)
from .models import UNASSIGNED, ActionItem, MatchCandidate
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
    PipelineTimer,
)
from .errors import (
    MeetingActionsError,
    ClientError,
    TranscriptionError,
    TranscriptionTimeoutError,
    EmailDeliveryError,
    ServiceError,
    ServiceNotConfiguredError,
    EmailQuotaExceededError,
    ShareNotFoundError,
    PipelineError,
    ValidationError,
    UnsupportedFileTypeError,
    EmptyTranscriptError,
    ConfigurationError,
    PartialSuccessResult,
)

__all__ = [
    # Version
    '__version__',
    # Main Pipeline
    'ActionExtractionPipeline',
    'ExtractionResult',
    'extract_actions',
    # Components
    'ActionParser',
    'PersonDetector',
    'RegexPersonDetector',
    'SpacyPersonDetector',
    'build_person_detector',
    # Models
    'UNASSIGNED',
    'ActionItem',
    'MatchCandidate',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    'PipelineTimer',
    # Errors
    'MeetingActionsError',
    'ClientError',
    'TranscriptionError',
    'TranscriptionTimeoutError',
    'EmailDeliveryError',
    'ServiceError',
    'ServiceNotConfiguredError',
    'EmailQuotaExceededError',
    'ShareNotFoundError',
    'PipelineError',
    'ValidationError',
    'UnsupportedFileTypeError',
    'EmptyTranscriptError',
    'ConfigurationError',
    'PartialSuccessResult',
]
