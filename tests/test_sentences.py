"""
Tests for sentence splitting.
"""

from meeting_actions.pipeline.sentences import split_sentences


class TestSplitSentences:
    def test_empty_text(self):
        assert split_sentences('') == []

    def test_whitespace_only(self):
        assert split_sentences('   \n\t ') == []

    def test_splits_on_terminal_punctuation(self):
        text = 'Hello. World!  How are you?'
        assert split_sentences(text) == ['Hello', 'World', 'How are you']

    def test_runs_of_punctuation_are_one_boundary(self):
        assert split_sentences('Wait... what?!') == ['Wait', 'what']

    def test_abbreviations_are_split(self):
        """No abbreviation handling: "Dr." ends a sentence."""
        assert split_sentences('Dr. Smith will call') == ['Dr', 'Smith will call']

    def test_newlines_do_not_split(self):
        assert split_sentences('Line one\nline two.') == ['Line one\nline two']

    def test_order_preserved(self):
        text = 'First. Second. Third.'
        assert split_sentences(text) == ['First', 'Second', 'Third']
