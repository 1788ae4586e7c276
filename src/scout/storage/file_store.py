"""
FileStore: allow-listed file access with atomic writes.
"""

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from scout.exceptions import AccessDeniedError, StorageError
from scout.logging_config import logger

PathLike = Union[str, Path]

DEFAULT_MAX_FILE_SIZE = 1_000_000


def content_hash(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


class FileStore:
    """
    Read and write files that live under a set of allowed roots.

    Paths are canonicalised (user expansion + symlink resolution) before the
    allow-list check, so `..` segments and symlinks cannot escape a root.
    """

    def __init__(
        self,
        allowed_paths: Optional[Iterable[PathLike]] = None,
        max_file_size: Optional[int] = DEFAULT_MAX_FILE_SIZE,
    ):
        roots = list(allowed_paths) if allowed_paths else [Path.cwd()]
        self.allowed_paths: List[Path] = [self.canonical(p) for p in roots]
        self.max_file_size = max_file_size
        self.logger = logger.bind(component="file_store")

    @staticmethod
    def canonical(path: PathLike) -> Path:
        return Path(path).expanduser().resolve()

    def is_allowed_path(self, path: PathLike) -> bool:
        target = self.canonical(path)
        for root in self.allowed_paths:
            if target == root or root in target.parents:
                return True
        return False

    def resolve(self, path: PathLike) -> Path:
        """
        Canonicalise a path and check it against the allow-list.

        Raises:
            AccessDeniedError: path is outside every allowed root.
        """
        target = self.canonical(path)
        if not self.is_allowed_path(target):
            self.logger.warning(f"Access denied: {path}")
            raise AccessDeniedError(str(path))
        return target

    def read_file(self, path: PathLike) -> bytes:
        """
        Read a file's raw bytes.

        Raises:
            AccessDeniedError: path is not allowed.
            StorageError: file is missing, too large or unreadable.
        """
        target = self.resolve(path)
        if not target.is_file():
            raise StorageError(str(path), f"file not found: {path}")

        size = target.stat().st_size
        if self.max_file_size is not None and size > self.max_file_size:
            raise StorageError(
                str(path),
                f"file too large: {path} ({size} bytes, limit {self.max_file_size})",
            )

        try:
            return target.read_bytes()
        except OSError as e:
            raise StorageError(str(path), f"failed to read {path}: {e}") from e

    def write_file(self, path: PathLike, content: bytes) -> int:
        """
        Replace a file's content atomically (temp file + rename).

        The temp file is created in the target's directory so the rename stays
        on one filesystem. The original file mode is kept.

        Returns:
            Number of bytes written.
        """
        target = self.resolve(path)
        mode = None
        if target.exists():
            mode = target.stat().st_mode & 0o7777

        try:
            fd, temp_path = tempfile.mkstemp(
                dir=str(target.parent),
                prefix=f".{target.name}.",
                suffix=".tmp",
            )
        except OSError as e:
            raise StorageError(str(path), f"failed to create temp file for {path}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            if mode is not None:
                os.chmod(temp_path, mode)
            os.replace(temp_path, str(target))
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                self.logger.debug(f"Temp file already gone: {temp_path}")
            raise StorageError(str(path), f"failed to write {path}: {e}") from e

        self.logger.debug(f"Atomic write completed: {target}")
        return len(content)
