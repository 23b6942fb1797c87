"""
Extraction pipeline orchestrator.

Provides end-to-end processing of transcript text:
1. Split text into sentences
2. Apply every pattern family to every sentence
3. Resolve owner and task for each match
4. De-duplicate on the (owner, task) key
5. Clean owner and task strings on the surviving items

The pipeline is a pure function of its input. It never raises for string
input: every degradation ends as "no match" or an "Unassigned" owner.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..config import config
from ..logging import PipelineTimer, get_logger
from ..models.action_item import ActionItem, MatchCandidate
from .dedup import dedupe_actions
from .normalizer import clean_owner, clean_task
from .parser import ActionParser
from .patterns import PATTERN_FAMILIES, PatternFamily, match_sentence
from .people import PersonDetector, build_person_detector
from .sentences import split_sentences

logger = get_logger(__name__)


@dataclass
class ExtractionResult:
    """Action items extracted from one text, with processing statistics."""

    actions: list[ActionItem] = field(default_factory=list)

    # Statistics
    sentence_count: int = 0
    candidate_count: int = 0
    parsed_count: int = 0
    dropped_count: int = 0
    duplicate_count: int = 0

    # Timing
    processing_time_ms: float | None = None
    stage_timings: dict[str, float] = field(default_factory=dict)

    @property
    def count(self) -> int:
        """Number of action items extracted."""
        return len(self.actions)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'actions': [a.to_dict() for a in self.actions],
            'action_count': self.count,
            'sentence_count': self.sentence_count,
            'candidate_count': self.candidate_count,
            'parsed_count': self.parsed_count,
            'dropped_count': self.dropped_count,
            'duplicate_count': self.duplicate_count,
            'processing_time_ms': self.processing_time_ms,
            'stage_timings': self.stage_timings,
        }


class ActionExtractionPipeline:
    """
    Heuristic action-item extractor for meeting transcripts.

    Orchestrates:
    - split_sentences: sentence units
    - match_sentence: pattern-family candidates per sentence
    - ActionParser: owner/task resolution per candidate
    - dedupe_actions / clean_owner / clean_task: final list

    Usage:
        pipeline = ActionExtractionPipeline()
        actions = pipeline.extract("John will send the report.")
    """

    def __init__(
        self,
        person_detector: PersonDetector | None = None,
        families: tuple[PatternFamily, ...] = PATTERN_FAMILIES,
    ):
        """
        Initialize the pipeline.

        Args:
            person_detector: Detector used for owner attribution
                (defaults to the regex detector)
            families: Pattern families applied to each sentence, in order
        """
        self.parser = ActionParser(person_detector)
        self.families = families

    @classmethod
    def from_config(cls) -> ActionExtractionPipeline:
        """Create a pipeline using PERSON_DETECTOR / SPACY_MODEL from the environment."""
        detector = build_person_detector(config.PERSON_DETECTOR, model=config.SPACY_MODEL)
        return cls(person_detector=detector)

    def extract(self, text: str) -> list[ActionItem]:
        """Extract de-duplicated, cleaned action items from text."""
        return self.run(text).actions

    def run(self, text: str) -> ExtractionResult:
        """
        Extract action items and collect statistics.

        Args:
            text: Transcript text; empty or whitespace-only yields no items

        Returns:
            ExtractionResult with actions in source order
        """
        result = ExtractionResult()
        if not text or not text.strip():
            return result

        timer = PipelineTimer()

        with timer.stage('split'):
            sentences = split_sentences(text)
        result.sentence_count = len(sentences)

        with timer.stage('match'):
            candidates: list[MatchCandidate] = []
            for sentence in sentences:
                candidates.extend(match_sentence(sentence, self.families))
        result.candidate_count = len(candidates)

        with timer.stage('parse'):
            parsed: list[ActionItem] = []
            owners: dict[str, str | None] = {}
            for candidate in candidates:
                action = self.parser.parse(candidate, owners)
                if action is None or not action.task:
                    logger.warning(
                        'extraction.candidate_dropped',
                        family=candidate.family,
                        sentence=candidate.source_sentence,
                    )
                    result.dropped_count += 1
                    continue
                parsed.append(action)
        result.parsed_count = len(parsed)

        with timer.stage('dedupe'):
            unique = dedupe_actions(parsed)
        result.duplicate_count = len(parsed) - len(unique)

        with timer.stage('clean'):
            for action in unique:
                owner = clean_owner(action.owner)
                task = clean_task(action.task)
                if not task:
                    result.dropped_count += 1
                    continue
                result.actions.append(ActionItem(owner=owner, task=task))

        summary = timer.summary()
        result.processing_time_ms = summary['total_ms']
        result.stage_timings = summary['stages']

        logger.debug(
            'extraction.complete',
            sentences=result.sentence_count,
            candidates=result.candidate_count,
            actions=result.count,
            dropped=result.dropped_count,
            duplicates=result.duplicate_count,
            processing_time_ms=result.processing_time_ms,
        )
        return result


_default_pipeline: ActionExtractionPipeline | None = None


def get_default_pipeline() -> ActionExtractionPipeline:
    """Lazily build the module-level pipeline from configuration."""
    global _default_pipeline
    if _default_pipeline is None:
        _default_pipeline = ActionExtractionPipeline.from_config()
    return _default_pipeline


def extract_actions(text: str) -> list[ActionItem]:
    """
    Extract action items from transcript text.

    Args:
        text: Any string, including empty

    Returns:
        Ordered, de-duplicated list of ActionItem
    """
    return get_default_pipeline().extract(text)
