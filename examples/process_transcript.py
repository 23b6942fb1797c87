#!/usr/bin/env python3
"""
Example: Extract action items from a meeting transcript.

This script demonstrates:
1. Running the extraction pipeline over a transcript (a file or the built-in sample)
2. Reading the per-stage statistics from ExtractionResult
3. Switching the person detector via PERSON_DETECTOR (regex or spacy)

Usage:
    python examples/process_transcript.py
    python examples/process_transcript.py path/to/transcript.txt
    PERSON_DETECTOR=spacy python examples/process_transcript.py
"""

import sys
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv

# Load environment variables
env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from meeting_actions.config import config
from meeting_actions.errors import ConfigurationError
from meeting_actions.pipeline import ActionExtractionPipeline


SAMPLE_TRANSCRIPT = """
Sarah: Thanks for taking the time to meet today. Let's discuss the next steps for the Acme deal.
John will send over the pricing proposal by end of day Friday.
Sarah should schedule a technical demo with their engineering team for next week.
We need to loop in legal to review the contract terms before we send it.
Action: compile the case studies they asked about.
Owner: Priya Patel will draft the statement of work.
"""


def main():
    """Run the example extraction."""
    print("=" * 60)
    print("Action Item Extraction Example")
    print("=" * 60)

    problems = config.validate()
    if problems:
        for problem in problems:
            print(f"ERROR: {problem}")
        return

    if len(sys.argv) > 1:
        path = Path(sys.argv[1])
        text = path.read_text(encoding='utf-8', errors='replace')
        print(f"\nTranscript: {path}")
    else:
        text = SAMPLE_TRANSCRIPT
        print("\nTranscript: built-in sample")

    try:
        pipeline = ActionExtractionPipeline.from_config()
    except ConfigurationError as e:
        print(f"ERROR: {e.message}")
        return

    print(f"Person detector: {config.PERSON_DETECTOR}")

    result = pipeline.run(text)

    print("\n" + "-" * 60)
    print("Action items:")
    print("-" * 60)
    for action in result.actions:
        print(f"  - [{action.owner}] {action.task}")

    print(f"\nResult:")
    print(f"  Sentences: {result.sentence_count}")
    print(f"  Pattern matches: {result.candidate_count}")
    print(f"  Duplicates removed: {result.duplicate_count}")
    print(f"  Action items: {result.count}")
    print(f"  Processing time: {result.processing_time_ms}ms")


if __name__ == "__main__":
    main()
