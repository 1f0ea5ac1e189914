"""
proof_engine/transcript.py

Context reconstruction from the session transcript.
───────────────────────────────────────────────────
A short reply such as "yes" or "the second one" only reads as correct
English next to the assistant message it answers. This module finds that
message in the append-only JSONL transcript without loading the whole file:

    ReverseLineReader         reads fixed-size chunks from the end backward
                              and yields complete lines, newest first
    last_assistant_message()  returns the text of the newest assistant record
    bound_context()           keeps only the tail of an over-long message

A missing, empty or assistant-free transcript is the normal first-turn case
and yields None, never an exception.
"""

import json
import logging
import os
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024
DEFAULT_CONTEXT_CHARS = 2000
ELLIPSIS = "..."


class ReverseLineReader:
    """
    Yields the lines of a file from last to first using bounded memory.

    State:
        _position : byte offset of the start of the data read so far.
        _pending  : leftmost, possibly incomplete line of the last chunk.
                    It is prefixed onto the next chunk and only yielded once
                    a newline before it is seen or the file start is reached.

    Lines are yielded as raw bytes without the trailing newline. Splitting on
    b"\\n" is safe for UTF-8 because no multi-byte sequence contains 0x0A.
    """

    def __init__(self, path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._path = path
        self._chunk_size = chunk_size
        self._position = 0
        self._pending = b""

    def __iter__(self) -> Iterator[bytes]:
        with open(self._path, "rb") as fh:
            fh.seek(0, os.SEEK_END)
            self._position = fh.tell()
            self._pending = b""

            while self._position > 0:
                read_size = min(self._chunk_size, self._position)
                self._position -= read_size
                fh.seek(self._position)
                buffer = fh.read(read_size) + self._pending

                lines = buffer.split(b"\n")
                self._pending = lines[0]
                for line in reversed(lines[1:]):
                    yield line

            # Start of file reached: the pending piece is the first line.
            yield self._pending


def extract_text(record: dict) -> str:
    """
    Return the prose of a transcript record.

    String content is returned as-is. Block-list content is the in-order
    concatenation of every "text" block; tool_use, tool_result and other
    block kinds are skipped. Both the flat shape {"content": ...} and the
    nested shape {"message": {"content": ...}} are accepted.
    """
    if "content" in record:
        content = record.get("content")
    else:
        message = record.get("message")
        content = message.get("content") if isinstance(message, dict) else None

    if isinstance(content, str):
        return content
    if not isinstance(content, list):
        return ""

    text = ""
    for block in content:
        if isinstance(block, dict) and block.get("type") == "text":
            block_text = block.get("text")
            if isinstance(block_text, str):
                text += block_text
    return text


def last_assistant_message(
    transcript_path: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Optional[str]:
    """
    Return the text of the most recent assistant record, or None.

    Scans the transcript backward and stops at the first line that parses
    as a JSON object with type "assistant". Blank lines and lines that are
    not valid UTF-8 JSON objects are skipped.
    """
    if not transcript_path:
        return None

    try:
        for raw_line in ReverseLineReader(transcript_path, chunk_size):
            line = raw_line.strip()
            if not line:
                continue
            try:
                record = json.loads(line.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError):
                logger.debug("Skipping malformed transcript line (%d bytes)", len(line))
                continue

            if isinstance(record, dict) and record.get("type") == "assistant":
                return extract_text(record)

    except FileNotFoundError:
        logger.debug("Transcript not found: %s", transcript_path)
    except OSError as exc:
        logger.info("Transcript unreadable (%s): %s", exc, transcript_path)

    return None


def bound_context(text: str, limit: int = DEFAULT_CONTEXT_CHARS) -> str:
    """
    Cap `text` at `limit` characters, keeping the tail.

    The end of the previous answer is what a short reply refers to, so the
    front is dropped and marked with an ellipsis.
    """
    if len(text) <= limit:
        return text
    return ELLIPSIS + text[len(text) - limit:]
