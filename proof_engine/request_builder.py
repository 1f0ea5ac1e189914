"""
proof_engine/request_builder.py

Builds the single prompt sent to the review model. Pure string composition:
no I/O, no model call.
"""

from typing import Optional

from .base import NO_ISSUES_SENTINEL

_RUBRIC = """You are an English proofreading assistant for a non-native speaker who wants to learn.

Analyze the user's text for:
1. Grammar errors
2. Wrong word usage
3. Unnatural expressions (from a native speaker's perspective)

Focus ONLY on the English parts. Ignore any Korean or other non-English text.
Be thorough but focus on actual errors, not style preferences."""

_CONTEXT_SECTION = """The user is replying to this previous assistant message:
\"\"\"
{context}
\"\"\"

Short or elliptical replies (for example "yes", "do the second one") are normal in a conversation. Do not flag a reply as incomplete when it makes sense as an answer to the message above."""

_INSTRUCTION_SECTION = """Text to proofread:
\"\"\"
{instruction}
\"\"\""""

_OUTPUT_FORMAT = """If there are NO issues, respond with exactly:
{sentinel}

If there ARE issues, respond with ONLY a JSON array, no code fences and no text before or after it. One object per issue:
[
  {{
    "original": "the phrase as written",
    "corrected": "the corrected phrase",
    "explanation": "why it is wrong and how to remember the correct usage (grammar rule, common pattern or tip)"
  }}
]

If the English is grammatically correct and natural-sounding, respond with {sentinel}."""


def build_review_request(instruction: str, context: Optional[str] = None) -> str:
    """
    Compose rubric, optional previous-message context, the instruction and
    the output-format directive into one prompt.

    The context section is included only when `context` is a non-empty string.
    """
    sections = [_RUBRIC]
    if context:
        sections.append(_CONTEXT_SECTION.format(context=context))
    sections.append(_INSTRUCTION_SECTION.format(instruction=instruction))
    sections.append(_OUTPUT_FORMAT.format(sentinel=NO_ISSUES_SENTINEL))
    return "\n\n".join(sections)
