"""
Scout - Structural Source Analysis and Mutation Engine

MCP-based interface for locating, replacing and documentation-checking
top-level declarations in source files.
"""

__version__ = "0.1.0"

# Core exports
from scout.parser import get_indexer
from scout.mutation import MutationFacade, supported_part_types
from scout.docs import ConformanceScanner, IssueAggregator
from scout.storage import FileStore
from scout.schemas import Declaration, IssueReport, PartInfo

__all__ = [
    "__version__",
    "get_indexer",
    "MutationFacade",
    "supported_part_types",
    "ConformanceScanner",
    "IssueAggregator",
    "FileStore",
    "Declaration",
    "IssueReport",
    "PartInfo",
]
