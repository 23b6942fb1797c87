"""
Name heuristic and the cue vocabulary shared by the matching and parsing stages.

Both the pattern families and the owner fallbacks in the parser are built from
the alternations defined here, so the two stages always agree on what a modal
cue, an action label, an assignment label and a name-shaped span look like.
"""

import re

# Cue vocabularies (case-insensitive wherever they are used)
MODAL_CUES = ('will', 'should', 'must', 'need to', 'going to', 'plan to')
ACTION_LABELS = ('action', 'task', 'todo', 'follow up', 'follow-up')
ASSIGNMENT_LABELS = ('assign', 'assigned to', 'owner', 'responsible')

MODAL_CUE = r'\b(?i:' + '|'.join(MODAL_CUES) + r')'
ACTION_LABEL = r'\b(?i:' + '|'.join(ACTION_LABELS) + r')'
ASSIGNMENT_LABEL = r'\b(?i:' + '|'.join(ASSIGNMENT_LABELS) + r')'

# Up to MAX_NAME_WORDS consecutive words, each uppercase then lowercase
# (case-sensitive). The cap keeps unanchored searches linear on long runs of
# capitalized words.
MAX_NAME_WORDS = 4
NAME_SPAN = r'[A-Z][a-z]+(?:\s+[A-Z][a-z]+){0,' + str(MAX_NAME_WORDS - 1) + r'}'

LEADING_MODAL_CUE = re.compile(r'^' + MODAL_CUE + r'\s+')
LEADING_ACTION_LABEL = re.compile(r'^' + ACTION_LABEL + r':\s*')

RESERVED_WORDS = frozenset({'Action', 'Task', 'Todo', 'Follow', 'Up', 'Meeting', 'Project'})
SUBJECT_WORDS = frozenset({
    'We', 'You', 'They', 'He', 'She', 'It', 'Everyone', 'Everybody',
    'Someone', 'Somebody', 'Anyone', 'Nobody', 'Team', 'Who',
})

_FULL_NAME = re.compile(r'[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*')


def looks_like_name(candidate: str | None) -> bool:
    """
    Check whether a token run plausibly denotes a person's name.

    Accepts "John" and "Mary Jane"; rejects lowercase or all-caps words,
    hyphenated or apostrophised names, and reserved action vocabulary
    such as "Action Items" or "Follow Up".
    """
    if not candidate or len(candidate) < 2:
        return False

    if not _FULL_NAME.fullmatch(candidate):
        return False

    words = candidate.split()
    if any(w in RESERVED_WORDS for w in words):
        return False
    if any(w in SUBJECT_WORDS for w in words):
        return False

    return True


def strip_leading_cue(text: str) -> str:
    """Remove one leading modal cue (e.g. "will ") and trim."""
    return LEADING_MODAL_CUE.sub('', text, count=1).strip()


def strip_leading_prefix(text: str) -> str:
    """Remove a leading modal cue, then a leading action label, and trim."""
    text = LEADING_MODAL_CUE.sub('', text, count=1)
    text = LEADING_ACTION_LABEL.sub('', text, count=1)
    return text.strip()
