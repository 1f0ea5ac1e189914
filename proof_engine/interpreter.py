"""
proof_engine/interpreter.py

Turns the review model's reply into a Verdict.
──────────────────────────────────────────────
The reply format moved from free-text explanations to a JSON array, and the
model does not always honour either. Parsing is therefore two-tier:

    1. "NO_ISSUES" (exact or as a prefix)      → clean
    2. JSON array, optionally code-fenced      → one item per element
    3. anything else                           → one RawFeedback, verbatim

Step 3 guarantees the user still sees the model's feedback when the
structured contract is broken. Nothing here raises on bad input.
"""

import json
import logging
import re

from .base import NO_ISSUES_SENTINEL, RawFeedback, StructuredCorrection, Verdict

logger = logging.getLogger(__name__)

# ```json\n ... \n```  wrapping the whole reply.
_CODE_FENCE = re.compile(r"\A```[\w-]*[ \t]*\n?(?P<body>.*?)\n?```\Z", re.DOTALL)


def _strip_code_fence(text: str) -> str:
    match = _CODE_FENCE.match(text)
    return match.group("body").strip() if match else text


def _to_item(element):
    if isinstance(element, dict):
        return StructuredCorrection(
            original=element.get("original", ""),
            corrected=element.get("corrected", ""),
            explanation=element.get("explanation", ""),
        )
    return RawFeedback(json.dumps(element, ensure_ascii=False))


def interpret(raw_reply: str) -> Verdict:
    """Parse `raw_reply` into a Verdict; never raises for malformed replies."""
    trimmed = raw_reply.strip()

    if trimmed.startswith(NO_ISSUES_SENTINEL):
        return Verdict.clean()

    try:
        parsed = json.loads(_strip_code_fence(trimmed))
    except (json.JSONDecodeError, RecursionError):
        logger.info("Reply is not parseable JSON; keeping it as raw feedback")
        return Verdict.with_issues([RawFeedback(trimmed)])

    if not isinstance(parsed, list):
        logger.info("Reply JSON is %s, not an array; keeping it as raw feedback",
                    type(parsed).__name__)
        return Verdict.with_issues([RawFeedback(trimmed)])

    if not parsed:
        # An empty correction list means the model found nothing.
        return Verdict.clean()

    return Verdict.with_issues(_to_item(element) for element in parsed)
