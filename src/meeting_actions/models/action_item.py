"""
ActionItem and MatchCandidate models.

ActionItem is the terminal, user-facing (owner, task) pair returned by the
extraction pipeline and carried as an opaque payload by the share and e-mail
endpoints. MatchCandidate is the intermediate produced by one pattern family
matching one sentence.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

UNASSIGNED = 'Unassigned'


class ActionItem(BaseModel):
    """A commitment extracted from a transcript."""

    owner: str = Field(
        default=UNASSIGNED,
        description='Person responsible for the task, or "Unassigned"',
    )
    task: str = Field(..., description='Normalized description of what needs to be done')

    @property
    def is_assigned(self) -> bool:
        """True if an owner was identified."""
        return self.owner != UNASSIGNED

    def to_dict(self) -> dict[str, str]:
        """Convert to the wire representation."""
        return {'owner': self.owner, 'task': self.task}


@dataclass(frozen=True)
class MatchCandidate:
    """A raw match of one pattern family against one sentence."""

    source_sentence: str
    matched_span: str
    captured_groups: tuple[str, ...]
    family: str = ''
