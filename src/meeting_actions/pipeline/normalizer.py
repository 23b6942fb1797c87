"""Owner and task string cleanup applied to extracted action items."""

import re

from ..models.action_item import UNASSIGNED

# A leading ":" or "-" marker, including stacked markers like ": - "
_LEADING_MARKER = re.compile(r'^[:\-][\s:\-]*')
_WHITESPACE = re.compile(r'\s+')


def clean_owner(owner: str | None) -> str:
    """Trim an owner name; missing or blank owners become "Unassigned"."""
    if not owner:
        return UNASSIGNED
    return owner.strip() or UNASSIGNED


def clean_task(task: str | None) -> str:
    """
    Normalize a task description.

    Trims, drops a leading ":" or "-" marker, and collapses runs of
    whitespace to a single space. Idempotent.
    """
    if not task:
        return ''
    task = task.strip()
    task = _LEADING_MARKER.sub('', task, count=1)
    task = _WHITESPACE.sub(' ', task)
    return task.strip()
