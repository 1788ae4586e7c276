"""
Declaration indexer interface and language registry.

Each grammar provides one DeclarationIndexer; the registry maps a language
identifier to a shared instance so callers never construct parsers directly.
"""

from abc import ABC, abstractmethod
from threading import Lock
from typing import Dict, List, Optional, Tuple

from scout.exceptions import SourceSyntaxError, UnsupportedCapabilityError
from scout.schemas import Declaration


class DeclarationIndexer(ABC):
    """
    Parses source bytes into top-level declarations.

    Implementations must either return the complete declaration list for the
    source or raise SourceSyntaxError; partial indexes are never returned.
    """

    language: str = ""
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def parse(self, source: bytes) -> List[Declaration]:
        """Index every top-level declaration in source order."""

    def validate_syntax(self, source: bytes) -> Optional[SourceSyntaxError]:
        """
        Check source without keeping the index.

        Returns:
            None when the source parses, otherwise the syntax error.
        """
        try:
            self.parse(source)
        except SourceSyntaxError as e:
            return e
        return None


_registry: Dict[str, DeclarationIndexer] = {}
_registry_lock = Lock()


def register_indexer(indexer: DeclarationIndexer) -> DeclarationIndexer:
    """Register an indexer under its language identifier."""
    with _registry_lock:
        _registry[indexer.language] = indexer
    return indexer


def get_indexer(language: str) -> DeclarationIndexer:
    """
    Look up the indexer for a language.

    Raises:
        UnsupportedCapabilityError: no grammar is registered for the language.
    """
    indexer = _registry.get(language)
    if indexer is None:
        raise UnsupportedCapabilityError(
            f"language '{language}' not supported. Valid languages: {get_languages()}",
            language=language,
        )
    return indexer


def get_languages() -> List[str]:
    return sorted(_registry)
