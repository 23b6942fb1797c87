"""
Commitment-recognition pattern families.

Each family is a compiled regex plus the number of groups it captures. The
families are applied in a fixed order to every sentence and every
non-overlapping match becomes a MatchCandidate:

1. modal       "... will send the deck"              -> (task,)
2. labeled     "Action: send the deck"               -> (task,)
3. assignment  "Owner: Sarah will send the deck"     -> (owner, task)
4. subject     "Sarah will send the deck"            -> (owner, task)

Cue words match case-insensitively; name-shaped spans must start uppercase.
"""

import re
from dataclasses import dataclass

from ..models.action_item import MatchCandidate
from .names import ACTION_LABEL, ASSIGNMENT_LABEL, MODAL_CUE, NAME_SPAN

# Task text runs to a period or the end of the line
_TASK_TAIL = r'(.+?)(?:\.|$)'


@dataclass(frozen=True)
class PatternFamily:
    """A named commitment pattern and the arity of its captured groups."""

    name: str
    regex: re.Pattern[str]
    arity: int

    def finditer(self, sentence: str) -> list[MatchCandidate]:
        """Return one candidate per non-overlapping match in the sentence."""
        return [
            MatchCandidate(
                source_sentence=sentence,
                matched_span=m.group(0),
                captured_groups=tuple(m.groups()),
                family=self.name,
            )
            for m in self.regex.finditer(sentence)
        ]


MODAL_FAMILY = PatternFamily(
    name='modal',
    regex=re.compile(MODAL_CUE + r'\s+' + _TASK_TAIL, re.MULTILINE),
    arity=1,
)

LABELED_FAMILY = PatternFamily(
    name='labeled',
    regex=re.compile(ACTION_LABEL + r':\s*' + _TASK_TAIL, re.MULTILINE),
    arity=1,
)

ASSIGNMENT_FAMILY = PatternFamily(
    name='assignment',
    regex=re.compile(
        ASSIGNMENT_LABEL + r':\s*(' + NAME_SPAN + r')\s+' + MODAL_CUE + r'\s+' + _TASK_TAIL,
        re.MULTILINE,
    ),
    arity=2,
)

SUBJECT_FAMILY = PatternFamily(
    name='subject',
    regex=re.compile(r'\b(' + NAME_SPAN + r')\s+' + MODAL_CUE + r'\s+' + _TASK_TAIL, re.MULTILINE),
    arity=2,
)

PATTERN_FAMILIES: tuple[PatternFamily, ...] = (
    MODAL_FAMILY,
    LABELED_FAMILY,
    ASSIGNMENT_FAMILY,
    SUBJECT_FAMILY,
)


def match_sentence(
    sentence: str,
    families: tuple[PatternFamily, ...] = PATTERN_FAMILIES,
) -> list[MatchCandidate]:
    """
    Apply every pattern family to a sentence, in family order.

    Args:
        sentence: A single trimmed sentence
        families: Pattern families to apply (defaults to PATTERN_FAMILIES)

    Returns:
        All candidates from all families; a sentence may yield several
    """
    candidates: list[MatchCandidate] = []
    for family in families:
        candidates.extend(family.finditer(sentence))
    return candidates
