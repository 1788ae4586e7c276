"""
Storage layer for Scout.

Filesystem access goes through FileStore so every read and write is checked
against the allowed roots.
"""

from .file_store import FileStore, content_hash

__all__ = ["FileStore", "content_hash"]
