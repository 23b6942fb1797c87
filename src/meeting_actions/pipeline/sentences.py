"""
Sentence splitting for transcript text.

Splits on runs of terminal punctuation only. Abbreviations such as "Dr." end
a sentence; callers rely on this exact behaviour.
"""

import re

_TERMINATORS = re.compile(r'[.!?]+')


def split_sentences(text: str) -> list[str]:
    """
    Split text into trimmed, non-empty sentences in source order.

    Args:
        text: Raw transcript text (may be empty)

    Returns:
        List of sentence strings
    """
    if not text:
        return []
    fragments = (f.strip() for f in _TERMINATORS.split(text))
    return [f for f in fragments if f]
