"""
IssueAggregator: prioritise conformance issues and bound the report size.

The serialized report must fit a character budget. The number of included
issues is chosen by bisection: every candidate count is serialized and
measured, and only a measured in-budget count is ever returned. When not even
one issue fits, exactly one issue is returned so callers always make progress.
"""

from pathlib import Path
from typing import List, Optional

from scout.logging_config import logger
from scout.schemas import (
    ConformanceIssue,
    FileIssues,
    FileScanError,
    IssueReport,
    ReportIssue,
)

from .config import DEFAULT_SEVERITY, ISSUE_SEVERITY, TARGET_CHAR_LIMIT

# Fixed-point iterations for response_size_chars; it only changes digit counts
_MAX_SIZE_PASSES = 8


def issue_severity(issue: ConformanceIssue) -> int:
    return ISSUE_SEVERITY.get(issue.type, DEFAULT_SEVERITY)


def sort_issues_by_priority(issues: List[ConformanceIssue]) -> List[ConformanceIssue]:
    """Severity class first, then file path, then line."""
    return sorted(issues, key=lambda i: (issue_severity(i), i.file, i.line))


def relative_to_base(file_path: str, base_path: str) -> str:
    """Path relative to base_path when it lies under it, unchanged otherwise."""
    if base_path and Path(file_path).is_relative_to(base_path):
        return Path(file_path).relative_to(base_path).as_posix()
    return file_path


class IssueAggregator:
    """
    Build size-bounded IssueReports.

    Args:
        budget: Maximum serialized size of a report, in characters
    """

    def __init__(self, budget: int = TARGET_CHAR_LIMIT, log=None):
        self.budget = budget
        self.logger = log or logger.bind(component="docs_report")

    def build(
        self,
        path: str,
        issues: List[ConformanceIssue],
        base_path: str = "",
        offset: int = 0,
        errors: Optional[List[FileScanError]] = None,
    ) -> IssueReport:
        """
        Sort, paginate and size-bound issues.

        Args:
            path: Path echoed back in the report
            issues: Raw, unsorted issues
            base_path: Issue file paths are reported relative to this
            offset: Number of highest-priority issues to skip
            errors: Per-file scan failures to attach
        """
        offset = max(0, offset)
        total = len(issues)
        ordered = sort_issues_by_priority(issues)
        window = ordered[offset:]
        scan_errors = [
            FileScanError(file=relative_to_base(e.file, base_path), error=e.error)
            for e in errors or []
        ]

        def measure(count: int) -> IssueReport:
            return self._measured(path, window, count, total, offset, base_path, scan_errors)

        report = measure(len(window))
        if not window or report.response_size_chars <= self.budget:
            return report

        best = None
        low, high = 1, len(window) - 1
        while low <= high:
            mid = (low + high) // 2
            candidate = measure(mid)
            if candidate.response_size_chars <= self.budget:
                best = candidate
                low = mid + 1
            else:
                high = mid - 1

        if best is None:
            self.logger.warning(f"Single issue exceeds budget of {self.budget} chars")
            best = measure(1)

        self.logger.debug(
            f"Report limited to {best.returned_count}/{total} issues "
            f"({best.response_size_chars} chars, budget {self.budget})"
        )
        return best

    def _measured(
        self,
        path: str,
        window: List[ConformanceIssue],
        count: int,
        total: int,
        offset: int,
        base_path: str,
        errors: List[FileScanError],
    ) -> IssueReport:
        included = window[:count]
        size_limited = count < len(window)
        report = IssueReport(
            path=path,
            issues_by_file=self._group_by_file(included, base_path),
            returned_count=count,
            total_count=total,
            remaining_count=max(0, total - offset - count),
            size_limited=size_limited,
            errors=errors or None,
        )
        report.summary = self._summary(report, offset)

        # response_size_chars is part of the payload it measures
        size = 0
        for _ in range(_MAX_SIZE_PASSES):
            report.response_size_chars = size
            report.message = self._message(report, offset) if size_limited else None
            measured = len(report.model_dump_json(exclude_none=True))
            if measured == size:
                break
            size = measured
        return report

    def _group_by_file(self, issues: List[ConformanceIssue], base_path: str) -> List[FileIssues]:
        groups = {}
        for issue in issues:
            file = relative_to_base(issue.file, base_path)
            group = groups.get(file)
            if group is None:
                group = groups[file] = FileIssues(file=file, issue_count=0)
            group.issues.append(ReportIssue(
                file=file,
                line=issue.line,
                end_line=issue.end_line,
                issue=issue.description,
                element=issue.element,
                multi_line=issue.multi_line,
            ))
            group.issue_count += 1
        return list(groups.values())

    def _summary(self, report: IssueReport, offset: int) -> str:
        if report.total_count == 0:
            return "No documentation issues found"
        summary = (
            f"{report.returned_count} of {report.total_count} documentation issues "
            f"in {len(report.issues_by_file)} files"
        )
        if offset:
            summary += f" (starting at offset {offset})"
        return summary

    def _message(self, report: IssueReport, offset: int) -> str:
        return (
            f"Response limited to {report.returned_count} of {report.total_count} total issues "
            f"due to size constraints ({report.response_size_chars} chars). "
            f"Showing highest priority issues first. {report.remaining_count} issues remaining. "
            f"Run again with offset={offset + report.returned_count} or after fixing current issues."
        )
