"""Syntax validation tool."""
from typing import List, Optional

from loguru import logger

from ..service_manager import get_service_manager


def register(mcp):
    @mcp.tool()
    def validate_files(files: List[str], language: Optional[str] = None) -> dict:
        """
        Check that files parse under their language's grammar.

        Args:
            files: Paths of files to check
            language: Override language detection (by default from the extension)

        Returns:
            results (file, language, valid, error?), total_files,
            valid_count, invalid_count, overall_valid
        """
        logger.info(f"Tool called: validate_files count={len(files)}")
        validator = get_service_manager().validator()
        results = [validator.validate_file(f, language) for f in files]

        valid_count = sum(1 for r in results if r["valid"])
        logger.info(f"Tool completed: validate_files valid={valid_count}/{len(results)}")
        return {
            "results": results,
            "total_files": len(results),
            "valid_count": valid_count,
            "invalid_count": len(results) - valid_count,
            "overall_valid": valid_count == len(results),
        }
