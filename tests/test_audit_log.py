"""
tests/test_audit_log.py

Unit tests for the per-day JSONL audit log.
"""

import json
import os
import sys
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from proof_engine.audit_log import AuditLogger
from proof_engine.base import Decision, LogEntry, RawFeedback, StructuredCorrection


class TestAuditLogger(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.log_dir = Path(self._tmp.name) / "nested" / "logs"
        self.logger = AuditLogger(self.log_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def _read(self, day: str) -> list:
        with open(self.log_dir / f"{day}.jsonl", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh]

    def test_creates_directory_and_daily_file(self):
        entry = LogEntry(
            prompt="I have went",
            items=(StructuredCorrection("have went", "have gone", "participle"),),
            decision=Decision.BLOCK,
            timestamp=datetime(2026, 3, 14, 9, 26, 53),
        )
        self.logger.append(entry)

        records = self._read("2026-03-14")
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["decision"], "block")
        self.assertEqual(records[0]["prompt"], "I have went")
        self.assertEqual(records[0]["timestamp"], "2026-03-14T09:26:53")
        self.assertEqual(
            records[0]["issues"],
            [{"original": "have went", "corrected": "have gone", "explanation": "participle"}],
        )

    def test_appends_without_rewriting(self):
        day = datetime(2026, 1, 2, 12, 0, 0)
        self.logger.append(LogEntry("one", (), Decision.PASS, timestamp=day))
        self.logger.append(LogEntry("two", (RawFeedback("raw"),), Decision.BLOCK, timestamp=day))

        records = self._read("2026-01-02")
        self.assertEqual([r["prompt"] for r in records], ["one", "two"])
        self.assertEqual(records[0]["issues"], [])
        self.assertEqual(records[1]["issues"], [{"raw": "raw"}])

    def test_entries_split_by_day(self):
        self.logger.append(LogEntry("a", (), Decision.PASS, timestamp=datetime(2026, 5, 1, 23, 59)))
        self.logger.append(LogEntry("b", (), Decision.PASS, timestamp=datetime(2026, 5, 2, 0, 1)))
        self.assertEqual(len(self._read("2026-05-01")), 1)
        self.assertEqual(len(self._read("2026-05-02")), 1)

    def test_non_ascii_prompt_kept_readable(self):
        self.logger.append(
            LogEntry("안녕 hello", (), Decision.PASS, timestamp=datetime(2026, 2, 2))
        )
        raw = (self.log_dir / "2026-02-02.jsonl").read_text(encoding="utf-8")
        self.assertIn("안녕 hello", raw)

    def test_write_failure_is_swallowed_and_logged(self):
        entry = LogEntry("x", (), Decision.PASS)
        with patch.object(Path, "mkdir", side_effect=PermissionError("denied")):
            with self.assertLogs("proof_engine.audit_log", level="WARNING") as captured:
                self.logger.append(entry)
        self.assertIn("Audit log write failed", captured.output[0])

    def test_log_dir_is_a_file(self):
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_text("not a dir")
        with self.assertLogs("proof_engine.audit_log", level="WARNING"):
            AuditLogger(blocker / "logs").append(LogEntry("x", (), Decision.PASS))


if __name__ == "__main__":
    unittest.main()
