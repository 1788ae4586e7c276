"""
CodeEditor: span splicing, per-file locking and guarded writes.
"""

import weakref
from pathlib import Path
from threading import Lock

from scout.exceptions import StorageError
from scout.logging_config import logger
from scout.schemas import Span
from scout.storage import FileStore, content_hash


class CodeEditor:
    """
    Perform span replacements on raw file bytes.

    Features:
    - Byte-exact splicing (bytes outside the span never change)
    - Line ending preservation (LF/CRLF) for the inserted text
    - One lock per canonical path for read-validate-write sequences
    - Optimistic check: the write is refused if the file changed since it was read
    """

    # Entries vanish once no caller references the lock
    _locks: "weakref.WeakValueDictionary[str, Lock]" = weakref.WeakValueDictionary()
    _locks_guard = Lock()

    def __init__(self, store: FileStore, log=None):
        self.store = store
        self.logger = log or logger.bind(component="editor")

    @classmethod
    def lock_for(cls, path: Path) -> Lock:
        """Lock shared by every editor for the same canonical path."""
        key = str(path)
        with cls._locks_guard:
            lock = cls._locks.get(key)
            if lock is None:
                lock = Lock()
                cls._locks[key] = lock
            return lock

    def splice(self, original: bytes, span: Span, replacement: str) -> bytes:
        """
        Build `original[:start] + replacement + original[end:]`.

        Raises:
            ValueError: span does not fit inside original.
        """
        if not 0 <= span.start_offset <= span.end_offset <= len(original):
            raise ValueError(
                f"span {span.start_offset}:{span.end_offset} outside source of {len(original)} bytes"
            )
        line_ending = self._detect_line_ending(original)
        text = self._normalize_line_endings(replacement, line_ending)
        return original[:span.start_offset] + text.encode("utf-8") + original[span.end_offset:]

    def write_if_unchanged(self, path: Path, content: bytes, expected_hash: str) -> int:
        """
        Write content unless the file on disk no longer matches expected_hash.

        Raises:
            StorageError: the file changed after it was read, or the write failed.
        """
        current = self.store.read_file(path)
        if content_hash(current) != expected_hash:
            self.logger.error(f"File modified externally, refusing to overwrite: {path}")
            raise StorageError(str(path), f"file changed on disk since it was read: {path}")
        written = self.store.write_file(path, content)
        self.logger.info(f"Wrote {written} bytes to {path}")
        return written

    def _detect_line_ending(self, content: bytes) -> str:
        if b"\r\n" in content:
            return "\r\n"
        return "\n"

    def _normalize_line_endings(self, content: str, line_ending: str) -> str:
        content = content.replace("\r\n", "\n")
        if line_ending == "\r\n":
            content = content.replace("\n", "\r\n")
        return content
