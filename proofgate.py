#!/usr/bin/env python3
"""
proofgate.py — ProofGate UserPromptSubmit hook entry point.
───────────────────────────────────────────────────────────
Register this script as a UserPromptSubmit hook:

    {"hooks": {"UserPromptSubmit": [{"hooks": [
        {"type": "command", "command": "python3 /path/to/proofgate.py"}
    ]}]}}

For every prompt ProofGate will:
  1. Read the hook payload {"prompt": ..., "transcript_path": ...} from stdin.
  2. Skip prompts with no English text and strip slash-commands / mentions.
  3. Add the previous assistant message as context when a transcript exists.
  4. Ask the review backend for corrections.
  5. Print exactly one JSON object to stdout:
        {}                                          not reviewed / error
        {"suppressOutput": true, "systemMessage": …} no issues
        {"decision": "block", "reason": …}          issues found
  6. Append the decision to the per-day audit log.

Fail-open: any error yields {} so the prompt goes through unchanged.

CLI Options
───────────
  --log-level LEVEL      Python logging level for stderr diagnostics.
                         Defaults to $PROOFGATE_LOG_LEVEL or WARNING.
  --version              Print ProofGate version and exit.
  -h / --help            Show this help message and exit.

Exit Codes
──────────
  0     Always. Failures are reported only through the {} output.
"""

import argparse
import io
import json
import logging
import sys
from typing import Callable, TextIO

from llm_adapter import LLMAdapter, get_adapter
from proof_engine.audit_log import AuditLogger
from proof_engine.config import Settings, load_settings
from proof_engine.emitter import write_output
from proof_engine.pipeline import ProofreadPipeline

__version__ = "0.2.0"

logger = logging.getLogger("proofgate")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="proofgate",
        description=(
            "ProofGate — English proofreading hook that reviews each prompt "
            "before it is sent and blocks it with feedback when it has errors."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the Python logging level. Default: $PROOFGATE_LOG_LEVEL or WARNING.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ProofGate {__version__}",
    )
    return parser


def configure_logging(level_str: str) -> None:
    """Set up logging to stderr; stdout carries only the hook decision."""
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, level_str.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def read_hook_input(stream: TextIO) -> dict:
    """
    Read the whole hook payload from `stream`.

    Raises json.JSONDecodeError for invalid JSON. A valid JSON value that is
    not an object is treated as an empty payload.
    """
    data = json.loads(stream.read())
    if not isinstance(data, dict):
        logger.warning("Hook input is %s, not an object; ignoring", type(data).__name__)
        return {}
    return data


def build_pipeline(
    settings: Settings,
    adapter_factory: Callable[..., LLMAdapter] = get_adapter,
) -> ProofreadPipeline:
    """Construct the review pipeline from settings."""
    adapter = adapter_factory(
        settings.provider,
        model=settings.model,
        **settings.adapter_kwargs(),
    )
    return ProofreadPipeline(
        adapter=adapter,
        audit_logger=AuditLogger(settings.log_dir),
        context_chars=settings.context_chars,
    )


def run_hook(
    stdin: TextIO,
    settings: Settings,
    adapter_factory: Callable[..., LLMAdapter] = get_adapter,
) -> dict:
    """
    Process one hook invocation and return the output object.

    Fail-open: bad input, backend errors and anything unexpected all become
    {}. main() guards the settings and logging setup around this call.
    """
    try:
        if not settings.enabled:
            logger.debug("ProofGate disabled via PROOFGATE_ENABLED")
            return {}

        hook_input = read_hook_input(stdin)
        pipeline = build_pipeline(settings, adapter_factory)
        return pipeline.run(hook_input)
    except Exception as exc:
        logger.exception("Proofreading error: %s", exc)
        return {}


def main(argv=None) -> int:
    """
    ProofGate entry point.

    Returns the exit code to pass to the OS (always 0).
    """
    args = build_arg_parser().parse_args(argv)

    output: dict = {}
    try:
        settings = load_settings()
        configure_logging(args.log_level or settings.log_level)
        logger.debug("ProofGate %s | provider=%s", __version__, settings.provider)

        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding="utf-8", errors="replace")
        output = run_hook(stdin, settings)
    except Exception as exc:
        # Settings or logging setup failed before run_hook could guard.
        logger.exception("Proofreading error: %s", exc)
        output = {}

    write_output(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
