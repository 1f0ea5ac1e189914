"""
proof_engine/normalizer.py

TokenNormalizer — strips prompt protocol tokens before review.
──────────────────────────────────────────────────────────────
Slash-commands and @-mentions are not prose and must not be graded as such.
The normaliser removes them in three ordered passes:

    1. Leading slash-command     "/commit fix the bug"   → "fix the bug"
    2. Quoted mentions           @"notes.md"             → notes.md
                                 @"code-reviewer"        → (removed)
    3. Bare mentions             @src/app.py             → src/app.py
                                 @review-agent           → (removed)
                                 @utils                  → @utils (kept)

Design notes:
    • A mention with a file extension is kept as its bare path: the path is
      part of what the user is saying ("update notes.md").
    • A quoted mention without an extension, or a bare one containing
      "agent", is a persona reference and is dropped.
    • Anything else is ambiguous and left untouched. Deleting a real word is
      worse than grading a stray handle.
    • Passes 2 and 3 run as a single left-to-right scan, so the output of a
      quoted-mention replacement is never rescanned as a bare mention.
    • Only one leading command is recognised. "/a /b text" keeps "/b".
"""

import logging
import re

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Patterns
# ─────────────────────────────────────────────────────────────────────────────

# "/cmd " at the very start of the prompt, or a prompt that is only "/cmd".
_LEADING_COMMAND = re.compile(r"^/\S+(?:\s+|$)")

# @"quoted content" or @bare-token. The "@" must not follow a word character,
# so e-mail addresses are not treated as mentions.
_MENTION = re.compile(
    r"""
    (?<!\w)@
    (?:
        "(?P<quoted>[^"]*)"     # @"anything but a quote"
      | (?P<bare>\S+)           # @token
    )
    """,
    re.VERBOSE,
)

# A period followed by word characters: the file-path heuristic.
_FILE_EXTENSION = re.compile(r"\.\w+")

_WHITESPACE = re.compile(r"\s+")

_AGENT_CUE = "agent"


class TokenNormalizer:
    """
    Removes slash-commands and @-mentions from a raw prompt.

    Stateless; instantiate once and call `normalize(text)` per prompt.
    """

    def normalize(self, text: str) -> str:
        """
        Return `text` with protocol tokens resolved and whitespace collapsed.

        May return an empty string, e.g. for a bare "/clear".
        """
        stripped = _LEADING_COMMAND.sub("", text, count=1)
        resolved = _MENTION.sub(self._resolve_mention, stripped)
        result = _WHITESPACE.sub(" ", resolved).strip()

        if result != text:
            logger.debug("Normalised prompt | before=%r after=%r", text, result)
        return result

    # ── Private helpers ───────────────────────────────────────────────────────

    @staticmethod
    def _resolve_mention(match: re.Match) -> str:
        quoted = match.group("quoted")
        if quoted is not None:
            return quoted if _FILE_EXTENSION.search(quoted) else ""

        token = match.group("bare")
        if _FILE_EXTENSION.search(token):
            return token
        if _AGENT_CUE in token:
            return ""
        return match.group(0)


_default_normalizer = TokenNormalizer()


def normalize(text: str) -> str:
    """Module-level shortcut for `TokenNormalizer().normalize(text)`."""
    return _default_normalizer.normalize(text)
