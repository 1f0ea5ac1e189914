"""
proof_engine/language_gate.py

Cheapest check in the pipeline: does the text contain anything we grade?
Text with no Latin letter (Korean-only prompts, bare numbers, symbols) is
passed through without ever calling a model.
"""

import re

# Target script for review. Swap for another character class to grade a
# different alphabet.
LATIN_LETTER = re.compile(r"[a-zA-Z]")


def is_reviewable(text: str, pattern: re.Pattern = LATIN_LETTER) -> bool:
    """Return True when `text` has at least one character matching `pattern`."""
    if not text:
        return False
    return pattern.search(text) is not None
