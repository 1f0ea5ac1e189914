"""
proof_engine — ProofGate's prompt review pipeline.

Public API:
    ProofreadPipeline    : Orchestrator — use this from the hook entry point.
    Verdict              : Clean / has-issues result of one review.
    StructuredCorrection : One original → corrected finding.
    RawFeedback          : Reply text kept verbatim when it can't be parsed.
    AuditLogger          : Per-day JSONL decision log.
    Settings             : Environment-driven configuration.
"""

from .audit_log import AuditLogger
from .base import Decision, LogEntry, RawFeedback, StructuredCorrection, Verdict
from .config import Settings, load_settings
from .emitter import emit, write_output
from .interpreter import interpret
from .language_gate import is_reviewable
from .normalizer import TokenNormalizer, normalize
from .pipeline import ProofreadPipeline
from .request_builder import build_review_request
from .transcript import bound_context, last_assistant_message

__all__ = [
    "AuditLogger",
    "Decision",
    "LogEntry",
    "ProofreadPipeline",
    "RawFeedback",
    "Settings",
    "StructuredCorrection",
    "TokenNormalizer",
    "Verdict",
    "bound_context",
    "build_review_request",
    "emit",
    "interpret",
    "is_reviewable",
    "last_assistant_message",
    "load_settings",
    "normalize",
    "write_output",
]
