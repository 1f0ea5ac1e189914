"""
tests/test_config.py

Unit tests for environment-driven settings.
"""

import os
import sys
import unittest
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from proof_engine.audit_log import default_log_dir
from proof_engine.config import Settings, load_settings


class TestLoadSettings(unittest.TestCase):

    def test_defaults(self):
        settings = load_settings({})
        self.assertTrue(settings.enabled)
        self.assertEqual(settings.provider, "agent-sdk")
        self.assertIsNone(settings.model)
        self.assertEqual(settings.log_dir, default_log_dir())
        self.assertEqual(settings.context_chars, 2000)
        self.assertEqual(settings.log_level, "WARNING")

    def test_overrides(self):
        settings = load_settings({
            "PROOFGATE_PROVIDER": "anthropic",
            "PROOFGATE_MODEL": "claude-sonnet-4-6",
            "PROOFGATE_LOG_DIR": "/tmp/proofgate-logs",
            "PROOFGATE_CONTEXT_CHARS": "500",
            "PROOFGATE_LOG_LEVEL": "debug",
        })
        self.assertEqual(settings.provider, "anthropic")
        self.assertEqual(settings.model, "claude-sonnet-4-6")
        self.assertEqual(settings.log_dir, Path("/tmp/proofgate-logs"))
        self.assertEqual(settings.context_chars, 500)
        self.assertEqual(settings.log_level, "DEBUG")

    def test_disabled_values(self):
        for value in ("0", "false", "No", "OFF"):
            with self.subTest(value=value):
                self.assertFalse(load_settings({"PROOFGATE_ENABLED": value}).enabled)
        self.assertTrue(load_settings({"PROOFGATE_ENABLED": "1"}).enabled)

    def test_invalid_context_chars_falls_back(self):
        with self.assertLogs("proof_engine.config", level="WARNING"):
            settings = load_settings({"PROOFGATE_CONTEXT_CHARS": "lots"})
        self.assertEqual(settings.context_chars, 2000)

    def test_non_positive_context_chars_falls_back(self):
        with self.assertLogs("proof_engine.config", level="WARNING"):
            settings = load_settings({"PROOFGATE_CONTEXT_CHARS": "0"})
        self.assertEqual(settings.context_chars, 2000)


class TestAdapterKwargs(unittest.TestCase):

    def test_mock_provider_gets_samples_dir(self):
        settings = Settings(provider="mock", mock_samples_dir="/tmp/samples")
        self.assertEqual(settings.adapter_kwargs(), {"samples_dir": "/tmp/samples"})

    def test_other_providers_get_nothing(self):
        self.assertEqual(Settings(provider="openai").adapter_kwargs(), {})


if __name__ == "__main__":
    unittest.main()
