"""
Person detection for owner attribution.

PersonDetector is a capability boundary: the parser only needs an object with
detect_people(sentence) -> list[str]. Two implementations are provided:

- RegexPersonDetector: deterministic, dependency-free, looks for name-shaped
  spans in the positions where meeting transcripts name an owner.
- SpacyPersonDetector: PERSON entities from a spaCy pipeline (optional
  ``nlp`` extra).

Detectors never raise on malformed input; failures degrade to [].
"""

import re
from typing import Any, Protocol

from ..errors import ConfigurationError
from ..logging import get_logger
from .names import ASSIGNMENT_LABEL, MAX_NAME_WORDS, MODAL_CUE, looks_like_name

logger = get_logger(__name__)

# Up to MAX_NAME_WORDS Title Case or ALL CAPS words ("Sarah Lee", "JOHN")
_LOOSE_NAME = r'[A-Z][A-Za-z]+(?:[ \t]+[A-Z][A-Za-z]+){0,' + str(MAX_NAME_WORDS - 1) + r'}'

_LABELED_PERSON = re.compile(ASSIGNMENT_LABEL + r':\s*(' + _LOOSE_NAME + r')')
_SUBJECT_PERSON = re.compile(r'\b(' + _LOOSE_NAME + r')\s+' + MODAL_CUE + r'\b')


class PersonDetector(Protocol):
    """Proposes candidate person names found in a sentence, best first."""

    def detect_people(self, sentence: str) -> list[str]: ...


class RegexPersonDetector:
    """
    Regex-based person detector.

    Proposes spans that follow an assignment label ("Owner: Sarah"), then
    spans in subject position before a modal cue ("Sarah will", "JOHN
    will"). A span is kept only if its title-cased form passes the name
    heuristic; the span is returned as written in the sentence.

    Spans are greedy over adjacent capitalized words, so a capitalized
    lead-in is kept as part of the name: "Yesterday John will ..." proposes
    "Yesterday John". At most MAX_NAME_WORDS words are taken; on a longer
    run the span is the last words before the cue.
    """

    patterns = (_LABELED_PERSON, _SUBJECT_PERSON)

    def detect_people(self, sentence: str) -> list[str]:
        if not sentence:
            return []

        people: list[str] = []
        for pattern in self.patterns:
            for match in pattern.finditer(sentence):
                span = match.group(1)
                if span in people:
                    continue
                if looks_like_name(span.title()):
                    people.append(span)
        return people


class SpacyPersonDetector:
    """
    spaCy-backed person detector returning PERSON entities in document order.

    The model is loaded once at construction; requires spaCy and the model
    package to be installed (``pip install meeting-actions[nlp]`` and
    ``python -m spacy download en_core_web_sm``).
    """

    def __init__(self, model: str = 'en_core_web_sm', nlp: Any = None):
        """
        Initialize the detector.

        Args:
            model: spaCy model package name
            nlp: Preloaded spaCy Language object (skips loading)
        """
        self.model = model
        if nlp is None:
            import spacy

            nlp = spacy.load(model)
        self._nlp = nlp

    def detect_people(self, sentence: str) -> list[str]:
        if not sentence:
            return []
        try:
            doc = self._nlp(sentence)
            people: list[str] = []
            for ent in doc.ents:
                if ent.label_ == 'PERSON' and ent.text not in people:
                    people.append(ent.text)
            return people
        except Exception as e:
            logger.warning(
                'person_detector.failed',
                detector='spacy',
                error=str(e),
                error_type=type(e).__name__,
            )
            return []


def build_person_detector(kind: str = 'regex', model: str = 'en_core_web_sm') -> PersonDetector:
    """
    Build a person detector by name.

    Args:
        kind: "regex" or "spacy"
        model: spaCy model name (only used for "spacy")

    Returns:
        A PersonDetector implementation

    Raises:
        ConfigurationError: If kind is unknown or the spaCy model cannot be loaded
    """
    kind = kind.strip().lower()
    if kind == 'regex':
        return RegexPersonDetector()
    if kind == 'spacy':
        try:
            return SpacyPersonDetector(model=model)
        except (ImportError, OSError) as e:
            raise ConfigurationError(
                f"Cannot load spaCy model '{model}': {e}",
                context={'detector': kind, 'model': model},
            ) from e
    raise ConfigurationError(
        f"Unknown person detector '{kind}'",
        context={'detector': kind, 'supported': ['regex', 'spacy']},
    )
