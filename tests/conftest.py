"""
Pytest configuration and shared fixtures.

Key fixtures:
- pipeline: extraction pipeline with the deterministic regex person detector
- sample_transcript: short diarized meeting transcript
- settings: API settings pointing uploads at a temporary directory

No test needs network access or a spaCy model.
"""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from meeting_actions.api.config import Settings
from meeting_actions.pipeline import ActionExtractionPipeline, RegexPersonDetector


@pytest.fixture
def pipeline() -> ActionExtractionPipeline:
    """Pipeline with the regex person detector."""
    return ActionExtractionPipeline(person_detector=RegexPersonDetector())


@pytest.fixture
def sample_transcript() -> str:
    """Sample transcript for testing extraction."""
    return """
John: Thanks for joining the call today. We need to discuss the proposal timeline.
Sarah will send over the updated deck by Friday.
Action: schedule the follow-up demo with the technical team.
Owner: Priya Patel will review the contract terms.
Mary should loop in legal before we sign.
""".strip()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """API settings with uploads under a temporary directory and no providers."""
    return Settings(
        ASSEMBLYAI_API_KEY='',
        SENDGRID_API_KEY='',
        UPLOAD_DIR=str(tmp_path / 'uploads'),
        BASE_URL='http://testserver',
    )
