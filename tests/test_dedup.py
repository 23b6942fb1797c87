"""
Tests for action item de-duplication.
"""

from meeting_actions.models.action_item import ActionItem
from meeting_actions.pipeline.dedup import dedupe_actions, dedupe_key


class TestDedupe:
    def test_key_is_lowercased(self):
        assert dedupe_key(ActionItem(owner='John', task='Send It')) == 'john|send it'

    def test_first_occurrence_wins(self):
        items = [
            ActionItem(owner='John', task='Send the Report'),
            ActionItem(owner='Mary', task='review the budget'),
            ActionItem(owner='JOHN', task='send the report'),
        ]

        assert dedupe_actions(items) == items[:2]

    def test_whitespace_is_not_folded(self):
        items = [
            ActionItem(owner='John', task='send  the report'),
            ActionItem(owner='John', task='send the report'),
        ]

        assert dedupe_actions(items) == items

    def test_same_task_different_owner_kept(self):
        items = [
            ActionItem(owner='John', task='send the report'),
            ActionItem(task='send the report'),
        ]

        assert len(dedupe_actions(items)) == 2

    def test_empty(self):
        assert dedupe_actions([]) == []
