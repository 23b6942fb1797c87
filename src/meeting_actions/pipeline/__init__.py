"""
Action-item extraction engine: sentence splitting, pattern matching, owner
attribution, normalization and de-duplication.
"""

from .dedup import dedupe_actions, dedupe_key
from .names import looks_like_name
from .normalizer import clean_owner, clean_task
from .parser import ActionParser
from .patterns import PATTERN_FAMILIES, PatternFamily, match_sentence
from .people import (
    PersonDetector,
    RegexPersonDetector,
    SpacyPersonDetector,
    build_person_detector,
)
from .pipeline import (
    ActionExtractionPipeline,
    ExtractionResult,
    extract_actions,
    get_default_pipeline,
)
from .sentences import split_sentences

__all__ = [
    # Main Pipeline
    'ActionExtractionPipeline',
    'ExtractionResult',
    'extract_actions',
    'get_default_pipeline',
    # Stages
    'split_sentences',
    'looks_like_name',
    'PatternFamily',
    'PATTERN_FAMILIES',
    'match_sentence',
    'ActionParser',
    'clean_owner',
    'clean_task',
    'dedupe_actions',
    'dedupe_key',
    # Person detection
    'PersonDetector',
    'RegexPersonDetector',
    'SpacyPersonDetector',
    'build_person_detector',
]
