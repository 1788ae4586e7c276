"""
This facade exposes the public API for the parser module.
"""
from .base import DeclarationIndexer, get_indexer, get_languages, register_indexer
from .config import SUPPORTED_LANGUAGES, language_for_extension
from .go_parser import GoIndexer

__all__ = [
    "DeclarationIndexer",
    "GoIndexer",
    "SUPPORTED_LANGUAGES",
    "get_indexer",
    "get_languages",
    "language_for_extension",
    "register_indexer",
]
