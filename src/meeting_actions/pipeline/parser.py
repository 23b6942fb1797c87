"""
Owner and task resolution for raw pattern matches.

Resolution order for a MatchCandidate (first rule that applies wins):

1. Task starts as the whole sentence minus a leading modal cue / action label
2. One captured group: that group is the task
3. Two captured groups: if the first looks like a name it is the owner and
   the second is the task; otherwise the second becomes the task
4. First person proposed by the PersonDetector becomes the owner
5. Owner regexes over the sentence: "Name will ..." then "Owner: Name"
6. Otherwise the item is "Unassigned"

When removing the owner's name empties the task, the whole sentence is used
as the task (owner name included).
"""

import re

from ..logging import get_logger
from ..models.action_item import UNASSIGNED, ActionItem, MatchCandidate
from .names import (
    ASSIGNMENT_LABEL,
    MODAL_CUE,
    NAME_SPAN,
    looks_like_name,
    strip_leading_cue,
    strip_leading_prefix,
)
from .people import PersonDetector, RegexPersonDetector

logger = get_logger(__name__)

OWNER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r'\b(' + NAME_SPAN + r')\s+' + MODAL_CUE),
    re.compile(ASSIGNMENT_LABEL + r':\s*(' + NAME_SPAN + r')'),
)


def remove_owner(task: str, owner: str) -> str:
    """Remove every case-insensitive occurrence of owner, then a leading cue."""
    task = re.sub(re.escape(owner), '', task, flags=re.IGNORECASE).strip()
    return strip_leading_cue(task)


class ActionParser:
    """
    Resolves an owner and a task for each MatchCandidate.

    Usage:
        parser = ActionParser()
        item = parser.parse(candidate)
    """

    def __init__(self, person_detector: PersonDetector | None = None):
        """
        Initialize the parser.

        Args:
            person_detector: Detector used for rule 4 (defaults to RegexPersonDetector)
        """
        self.person_detector = person_detector or RegexPersonDetector()

    def parse(
        self,
        candidate: MatchCandidate,
        owners: dict[str, str | None] | None = None,
    ) -> ActionItem | None:
        """
        Resolve a candidate into an ActionItem.

        Args:
            candidate: Raw pattern match
            owners: Per-call cache of sentence -> resolved owner; pass the
                same dict for every candidate of one text so a sentence with
                many matches is scanned for an owner only once

        Returns:
            ActionItem, or None if neither a task nor a sentence is available
        """
        sentence = candidate.source_sentence
        groups = candidate.captured_groups

        if len(groups) == 1:
            task = groups[0]
        elif len(groups) == 2:
            potential_owner, group_task = groups
            if looks_like_name(potential_owner):
                if not group_task:
                    return None
                return ActionItem(owner=potential_owner, task=group_task)
            task = group_task
        else:
            task = strip_leading_prefix(sentence)

        if owners is None:
            owners = {}
        if sentence not in owners:
            owners[sentence] = self._sentence_owner(sentence)
        owner = owners[sentence]

        if owner:
            return self._build(owner, remove_owner(task, owner), sentence)
        return self._build(UNASSIGNED, task, sentence)

    def _sentence_owner(self, sentence: str) -> str | None:
        """Owner named anywhere in the sentence: detector first, then owner regexes."""
        person = self._first_person(sentence)
        if person:
            return person

        for pattern in OWNER_PATTERNS:
            match = pattern.search(sentence)
            if match and looks_like_name(match.group(1)):
                return match.group(1)
        return None

    def _first_person(self, sentence: str) -> str | None:
        """First name proposed by the detector; detector failures count as none."""
        try:
            people = self.person_detector.detect_people(sentence)
        except Exception as e:
            logger.warning(
                'parser.person_detector_failed',
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
        return people[0] if people else None

    @staticmethod
    def _build(owner: str, task: str, sentence: str) -> ActionItem | None:
        task = task or sentence
        if not task:
            return None
        return ActionItem(owner=owner, task=task)
