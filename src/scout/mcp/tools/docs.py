"""Documentation conformance tool."""
from loguru import logger

from scout.exceptions import ScoutError

from ..service_manager import get_service_manager
from .errors import error_response


def register(mcp):
    @mcp.tool()
    def check_docs(
        path: str,
        language: str = "go",
        recursive: bool = True,
        offset: int = 0,
    ) -> dict:
        """
        Report missing documentation, highest priority first.

        Checks file headers ("Package <name> ..."), doc comments on funcs,
        methods and types (must start with the identifier), const/var
        declarations and groups, and README.md in subdirectories.

        The response is bounded in size. When size_limited is true, call again
        with offset=returned_count (plus any previous offset) for the next page,
        or fix the reported issues and re-run.

        Args:
            path: File or directory; a trailing "..." also means recursive
            language: Language identifier ("go")
            recursive: Descend into subdirectories
            offset: Number of highest-priority issues to skip

        Returns:
            path, issues_by_file, summary, returned_count, total_count,
            remaining_count, size_limited, response_size_chars, message?, errors?
        """
        logger.info(f"Tool called: check_docs path={path} recursive={recursive} offset={offset}")
        manager = get_service_manager()
        try:
            scan = manager.scanner(language).scan(path, recursive=recursive)
        except ScoutError as e:
            logger.warning(f"check_docs failed: {e}")
            return error_response(e)

        report = manager.aggregator().build(
            path,
            scan.issues,
            base_path=scan.base_path,
            offset=offset,
            errors=scan.errors,
        )

        logger.info(
            f"Tool completed: check_docs total_issues={report.total_count} "
            f"returned_issues={report.returned_count} size_limited={report.size_limited} "
            f"response_size={report.response_size_chars}"
        )
        return report.to_payload()
