"""
Mutation package: locate top-level constructs by kind and name and replace
them span-exactly, writing only when the result still parses.
"""

from .facade import MutationFacade
from .locator import ConstructLocator
from .editor import CodeEditor
from .validator import CodeValidator
from .capabilities import (
    CAPABILITIES,
    ContentRule,
    PartCapability,
    get_capability,
    supported_languages,
    supported_part_types,
)

__all__ = [
    # Main facade
    "MutationFacade",

    # Components
    "ConstructLocator",
    "CodeEditor",
    "CodeValidator",

    # Capability table
    "CAPABILITIES",
    "ContentRule",
    "PartCapability",
    "get_capability",
    "supported_languages",
    "supported_part_types",
]
