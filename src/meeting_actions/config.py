"""
Configuration management for the meeting-actions extraction engine.

Loads settings from environment variables with sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / '.env'
if _env_file.exists():
    load_dotenv(_env_file)

SUPPORTED_PERSON_DETECTORS = ('regex', 'spacy')


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Configuration settings loaded from environment."""

    # Logging
    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')
    LOG_JSON: bool = _env_bool('LOG_JSON')

    # Owner attribution
    PERSON_DETECTOR: str = os.getenv('PERSON_DETECTOR', 'regex')
    SPACY_MODEL: str = os.getenv('SPACY_MODEL', 'en_core_web_sm')

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List of problems, empty when the configuration is usable
        """
        problems = []
        if cls.PERSON_DETECTOR.strip().lower() not in SUPPORTED_PERSON_DETECTORS:
            problems.append(
                f"PERSON_DETECTOR must be one of {', '.join(SUPPORTED_PERSON_DETECTORS)}"
            )
        if cls.LOG_LEVEL.upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            problems.append('LOG_LEVEL must be a standard logging level name')
        return problems


# Singleton config instance
config = Config()
