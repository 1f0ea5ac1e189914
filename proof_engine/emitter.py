"""
proof_engine/emitter.py

Maps a Verdict onto the UserPromptSubmit hook output contract and writes it.

    clean       → {"suppressOutput": true, "systemMessage": "..."}
    has issues  → {"decision": "block", "reason": "..."}

The third shape, {}, is produced by the pipeline for prompts that were never
reviewed, not by this module.
"""

import json
import sys
from typing import Optional, TextIO

from .base import FeedbackItem, RawFeedback, Verdict

CLEAN_MESSAGE = "✓ No English issues found"
REASON_HEADER = "📝 English Proofreading:"
REASON_FOOTER = "Please revise your prompt and re-submit."
ITEM_SEPARATOR = "\n\n---\n\n"


def render_item(item: FeedbackItem) -> str:
    """Render one finding for the block reason."""
    if isinstance(item, RawFeedback):
        return item.text
    return (
        f'✗ "{item.original}" → "{item.corrected}"\n'
        f"Explanation: {item.explanation}"
    )


def render_reason(verdict: Verdict) -> str:
    body = ITEM_SEPARATOR.join(render_item(item) for item in verdict.items)
    return f"{REASON_HEADER}\n\n{body}\n\n{REASON_FOOTER}"


def emit(verdict: Verdict) -> dict:
    """Return the hook output dict for `verdict`."""
    if verdict.is_clean:
        return {"suppressOutput": True, "systemMessage": CLEAN_MESSAGE}
    return {"decision": "block", "reason": render_reason(verdict)}


def write_output(output: dict, stream: Optional[TextIO] = None) -> None:
    """Write `output` as a single JSON line to the hook's output channel."""
    stream = stream or sys.stdout
    stream.write(json.dumps(output) + "\n")
    stream.flush()
