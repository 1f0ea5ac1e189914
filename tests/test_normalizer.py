"""
tests/test_normalizer.py

Unit tests for TokenNormalizer.
───────────────────────────────
Covers the leading slash-command pass, quoted and bare @-mentions, the
"ambiguous mention is preserved" rule and whitespace collapsing.

Run with:
    python -m pytest tests/test_normalizer.py -v
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from proof_engine.normalizer import TokenNormalizer, normalize


# ─────────────────────────────────────────────────────────────────────────────
# Slash-commands
# ─────────────────────────────────────────────────────────────────────────────

class TestLeadingCommand(unittest.TestCase):

    def test_strips_leading_command(self):
        self.assertEqual(normalize("/cmd rest"), "rest")

    def test_command_only_yields_empty(self):
        self.assertEqual(normalize("/cmd"), "")

    def test_command_with_trailing_space_yields_empty(self):
        self.assertEqual(normalize("/clear   "), "")

    def test_namespaced_command(self):
        self.assertEqual(normalize("/plugin:review check this code"), "check this code")

    def test_only_first_command_stripped(self):
        self.assertEqual(normalize("/a /b text"), "/b text")

    def test_slash_in_middle_untouched(self):
        self.assertEqual(normalize("use and/or here"), "use and/or here")

    def test_command_must_be_at_start(self):
        self.assertEqual(normalize("please /commit now"), "please /commit now")


# ─────────────────────────────────────────────────────────────────────────────
# Quoted mentions
# ─────────────────────────────────────────────────────────────────────────────

class TestQuotedMentions(unittest.TestCase):

    def test_file_mention_kept_as_bare_path(self):
        self.assertEqual(normalize('@"notes.md" text'), "notes.md text")

    def test_file_mention_with_spaces(self):
        self.assertEqual(
            normalize('please read @"my notes.txt" first'),
            "please read my notes.txt first",
        )

    def test_agent_mention_removed(self):
        self.assertEqual(normalize('@"helper-agent" text'), "text")

    def test_persona_mention_without_agent_word_removed(self):
        self.assertEqual(normalize('ask @"code reviewer" to check it'), "ask to check it")

    def test_quoted_replacement_not_rescanned(self):
        # The bare-mention rule must not strip the "@" that came from inside quotes.
        self.assertEqual(normalize('open @"@config.json" now'), "open @config.json now")

    def test_mention_after_punctuation(self):
        self.assertEqual(normalize('check it (@"helper-agent") now'), "check it () now")


# ─────────────────────────────────────────────────────────────────────────────
# Bare mentions
# ─────────────────────────────────────────────────────────────────────────────

class TestBareMentions(unittest.TestCase):

    def test_ambiguous_mention_preserved(self):
        self.assertEqual(normalize("@utils text"), "@utils text")

    def test_file_mention_drops_at(self):
        self.assertEqual(normalize("fix @src/app.py please"), "fix src/app.py please")

    def test_agent_mention_removed(self):
        self.assertEqual(normalize("ask @review-agent about it"), "ask about it")

    def test_email_address_untouched(self):
        self.assertEqual(normalize("mail user@example.com today"), "mail user@example.com today")

    def test_address_after_digit_or_underscore_untouched(self):
        self.assertEqual(normalize("ping admin_1@host.org now"), "ping admin_1@host.org now")

    def test_agent_mention_after_colon_removed(self):
        self.assertEqual(normalize("see:@review-agent please"), "see: please")

    def test_file_mention_in_parentheses(self):
        self.assertEqual(normalize("fix (@src/app.py) now"), "fix (src/app.py) now")

    def test_multiple_mentions(self):
        self.assertEqual(
            normalize("@planner-agent compare @a.py and @b.py with @utils"),
            "compare a.py and b.py with @utils",
        )


# ─────────────────────────────────────────────────────────────────────────────
# Combined behaviour
# ─────────────────────────────────────────────────────────────────────────────

class TestCombined(unittest.TestCase):

    def test_command_and_mentions(self):
        self.assertEqual(
            normalize('/review @"main.py" @"helper-agent" is it good'),
            "main.py is it good",
        )

    def test_whitespace_collapsed_and_trimmed(self):
        self.assertEqual(normalize("  hello \n\n  world  "), "hello world")

    def test_plain_text_unchanged(self):
        self.assertEqual(normalize("I have went to the store"), "I have went to the store")

    def test_idempotent(self):
        text = '/do @"plan.md" and @"x-agent" then @utils'
        once = normalize(text)
        self.assertEqual(normalize(once), once)

    def test_class_and_function_agree(self):
        text = '@"notes.md" check @writer-agent'
        self.assertEqual(TokenNormalizer().normalize(text), normalize(text))


if __name__ == "__main__":
    unittest.main()
