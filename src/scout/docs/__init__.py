"""
This facade exposes the public API for the docs module: the conformance
scanner and the size-bounded issue report.
"""
from .config import DEFAULT_EXCLUDE_PATTERNS, TARGET_CHAR_LIMIT
from .report import IssueAggregator, issue_severity, sort_issues_by_priority
from .scanner import ConformanceScanner

__all__ = [
    "ConformanceScanner",
    "DEFAULT_EXCLUDE_PATTERNS",
    "IssueAggregator",
    "TARGET_CHAR_LIMIT",
    "issue_severity",
    "sort_issues_by_priority",
]
