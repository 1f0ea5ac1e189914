"""
proof_engine/base.py

Core value objects for ProofGate's review pipeline.

Architecture Note:
    A review reply arrives in one of two historical shapes: the older
    free-text explanation format and the current JSON-array format. Rather
    than carrying a version flag through the callers, every reply is turned
    into a `Verdict` holding a tuple of items, where each item is either a
    `StructuredCorrection` or a `RawFeedback`. RawFeedback is the universal
    fallback: anything that cannot be parsed is kept verbatim so a real
    finding is never discarded.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple, Union

# Exact reply the reviewer sends when it finds nothing to correct.
NO_ISSUES_SENTINEL = "NO_ISSUES"


class Decision(Enum):
    """Decision tag recorded in the audit log."""
    BLOCK = "block"
    PASS = "pass"


@dataclass(frozen=True)
class StructuredCorrection:
    """
    One finding in the current reply format.

    Attributes:
        original    : The fragment as the user wrote it.
        corrected   : The suggested replacement.
        explanation : Educational note on why the change is needed.
    """
    original: str
    corrected: str
    explanation: str

    def to_dict(self) -> dict:
        return {
            "original": self.original,
            "corrected": self.corrected,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class RawFeedback:
    """Reply text kept verbatim because it could not be parsed."""
    text: str

    def to_dict(self) -> dict:
        return {"raw": self.text}


FeedbackItem = Union[StructuredCorrection, RawFeedback]


@dataclass(frozen=True)
class Verdict:
    """
    Result of interpreting one review reply.

    A verdict with no items is clean; a verdict with one or more items has
    issues. Use `Verdict.clean()` and `Verdict.with_issues()` rather than
    building one by hand.
    """
    items: Tuple[FeedbackItem, ...] = ()

    @classmethod
    def clean(cls) -> "Verdict":
        return cls(items=())

    @classmethod
    def with_issues(cls, items) -> "Verdict":
        items = tuple(items)
        if not items:
            raise ValueError("with_issues() needs at least one item; use clean()")
        return cls(items=items)

    @property
    def is_clean(self) -> bool:
        return not self.items


@dataclass(frozen=True)
class LogEntry:
    """
    One audit record, written once and never read back.

    Attributes:
        prompt    : The original, un-normalised instruction.
        items     : The verdict's items (empty for a pass).
        decision  : BLOCK when issues were found, PASS otherwise.
        timestamp : When the decision was made (local time).
    """
    prompt: str
    items: Tuple[FeedbackItem, ...]
    decision: Decision
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "prompt": self.prompt,
            "issues": [item.to_dict() for item in self.items],
            "decision": self.decision.value,
        }
