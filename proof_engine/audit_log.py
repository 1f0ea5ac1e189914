"""
proof_engine/audit_log.py

Append-only, per-day JSONL record of every block/pass decision.

Logging happens after the decision has been made and must never change it:
every write failure is caught here and reported through `logging`.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .base import LogEntry

logger = logging.getLogger(__name__)


def default_log_dir() -> Path:
    """~/.proofgate/logs, resolved when first needed."""
    return Path.home() / ".proofgate" / "logs"


class AuditLogger:
    """
    Writes LogEntry records to <log_dir>/<YYYY-MM-DD>.jsonl.

    Each entry is one line written with a single append, so concurrent hook
    processes never corrupt each other's records.
    """

    def __init__(self, log_dir: Optional[Union[str, Path]] = None) -> None:
        self._log_dir = Path(log_dir).expanduser() if log_dir else default_log_dir()

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def path_for(self, entry: LogEntry) -> Path:
        return self._log_dir / f"{entry.timestamp.date().isoformat()}.jsonl"

    def append(self, entry: LogEntry) -> None:
        """Append `entry`; failures are logged, never raised."""
        try:
            line = json.dumps(entry.to_dict(), ensure_ascii=False) + "\n"
            self._log_dir.mkdir(parents=True, exist_ok=True)
            with self.path_for(entry).open("a", encoding="utf-8") as fh:
                fh.write(line)
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Audit log write failed (%s): %s", self._log_dir, exc)
            return

        logger.debug("Audit entry written | decision=%s", entry.decision.value)
