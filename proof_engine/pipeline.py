"""
proof_engine/pipeline.py

ProofreadPipeline — orchestrates one hook invocation.
─────────────────────────────────────────────────────
    hook input
        → is_reviewable()            no Latin letters    → {}
        → TokenNormalizer            nothing left        → {}
        → last_assistant_message()   optional context
        → build_review_request()
        → adapter.complete()         blank reply         → {}
        → interpret()
        → emit()
        → AuditLogger.append()       best-effort

The review backend is injected. Any object with `complete(prompt) -> str`
works; llm_adapter.LLMAdapter is the production interface and tests pass a
MagicMock. Exceptions raised by the backend propagate to the caller, whose
outermost guard turns them into {}.
"""

import logging
from typing import Optional

from .audit_log import AuditLogger
from .base import Decision, LogEntry
from .emitter import emit
from .interpreter import interpret
from .language_gate import is_reviewable
from .normalizer import TokenNormalizer
from .request_builder import build_review_request
from .transcript import DEFAULT_CONTEXT_CHARS, bound_context, last_assistant_message

logger = logging.getLogger(__name__)


class ProofreadPipeline:
    """
    Args:
        adapter       : Review backend (see llm_adapter.get_adapter()).
        audit_logger  : Where decisions are recorded. None disables the
                        audit log.
        context_chars : Cap on the previous assistant message.
        normalizer    : Token normalizer; defaults to TokenNormalizer().

    Usage:
        pipeline = ProofreadPipeline(adapter=get_adapter("agent-sdk"))
        output = pipeline.run({"prompt": "I have went to the store"})
    """

    def __init__(
        self,
        adapter,
        audit_logger: Optional[AuditLogger] = None,
        context_chars: int = DEFAULT_CONTEXT_CHARS,
        normalizer: Optional[TokenNormalizer] = None,
    ) -> None:
        self._adapter = adapter
        self._audit_logger = audit_logger
        self._context_chars = context_chars
        self._normalizer = normalizer or TokenNormalizer()

    def run(self, hook_input: dict) -> dict:
        """Review one UserPromptSubmit payload and return the hook output."""
        prompt = hook_input.get("prompt") or ""
        if not isinstance(prompt, str):
            prompt = str(prompt)

        if not is_reviewable(prompt):
            logger.debug("No reviewable text; skipping review")
            return {}

        instruction = self._normalizer.normalize(prompt)
        if not is_reviewable(instruction):
            logger.debug("Nothing reviewable left after normalization")
            return {}

        context = self._load_context(hook_input.get("transcript_path"))
        request = build_review_request(instruction, context)

        logger.info(
            "Requesting review | provider=%s model=%s chars=%d context=%s",
            getattr(self._adapter, "provider_name", "?"),
            getattr(self._adapter, "model_name", "?"),
            len(instruction),
            "yes" if context else "no",
        )
        reply = self._adapter.complete(request)

        if not reply or not reply.strip():
            logger.warning("Review backend returned no text; allowing prompt")
            return {}

        verdict = interpret(reply)
        output = emit(verdict)
        logger.info("Review result | issues=%d", len(verdict.items))

        if self._audit_logger is not None:
            decision = Decision.PASS if verdict.is_clean else Decision.BLOCK
            self._audit_logger.append(
                LogEntry(prompt=prompt, items=verdict.items, decision=decision)
            )

        return output

    # ── Private helpers ───────────────────────────────────────────────────────

    def _load_context(self, transcript_path) -> Optional[str]:
        if not transcript_path or not isinstance(transcript_path, str):
            return None
        message = last_assistant_message(transcript_path)
        if not message:
            return None
        return bound_context(message, self._context_chars)
