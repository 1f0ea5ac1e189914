"""
proof_engine/config.py

Runtime settings for the ProofGate hook.

Precedence: process environment > .env file next to the project > defaults.
The hook is launched by the editor with no arguments, so the environment is
the only configuration channel.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .audit_log import default_log_dir
from .transcript import DEFAULT_CONTEXT_CHARS

logger = logging.getLogger(__name__)

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Settings:
    """
    Attributes:
        enabled          : False makes the hook answer {} for every prompt.
        provider         : Backend name understood by llm_adapter.get_adapter().
        model            : Model override; None means the provider default.
        log_dir          : Directory for the per-day audit log.
        context_chars    : Cap on the previous assistant message.
        mock_samples_dir : Reply directory for the "mock" provider.
        log_level        : Python logging level name for stderr diagnostics.
    """
    enabled: bool = True
    provider: str = "agent-sdk"
    model: Optional[str] = None
    log_dir: Path = field(default_factory=default_log_dir)
    context_chars: int = DEFAULT_CONTEXT_CHARS
    mock_samples_dir: str = "./samples"
    log_level: str = "WARNING"

    def adapter_kwargs(self) -> dict:
        """Extra keyword arguments for get_adapter() for this provider."""
        if self.provider.lower().strip() == "mock":
            return {"samples_dir": self.mock_samples_dir}
        return {}


def _positive_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer; using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s=%r must be positive; using %d", name, raw, default)
        return default
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from `env`.

    When `env` is None the project's .env file is loaded into the process
    environment first (existing variables are not overridden) and
    os.environ is used.
    """
    if env is None:
        load_dotenv(_PROJECT_ROOT / ".env")
        env = os.environ

    log_dir = env.get("PROOFGATE_LOG_DIR")
    return Settings(
        enabled=env.get("PROOFGATE_ENABLED", "1").strip().lower() not in _FALSE_VALUES,
        provider=env.get("PROOFGATE_PROVIDER", "agent-sdk").strip() or "agent-sdk",
        model=env.get("PROOFGATE_MODEL") or None,
        log_dir=Path(log_dir).expanduser() if log_dir else default_log_dir(),
        context_chars=_positive_int(
            env.get("PROOFGATE_CONTEXT_CHARS"), "PROOFGATE_CONTEXT_CHARS", DEFAULT_CONTEXT_CHARS
        ),
        mock_samples_dir=env.get("PROOFGATE_MOCK_SAMPLES", "./samples"),
        log_level=env.get("PROOFGATE_LOG_LEVEL", "WARNING").upper(),
    )
