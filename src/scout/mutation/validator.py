"""
CodeValidator: grammar-level syntax checks for whole files.
"""

from pathlib import Path
from typing import List, Optional, Tuple

from scout.exceptions import ScoutError
from scout.logging_config import logger
from scout.parser import get_indexer, language_for_extension
from scout.storage import FileStore


class CodeValidator:
    """
    Validate that source parses cleanly under its language's grammar.
    """

    def __init__(self, store: Optional[FileStore] = None, log=None):
        self.store = store or FileStore()
        self.logger = log or logger.bind(component="validator")

    def validate_syntax(self, code: bytes, language: str) -> Tuple[bool, List[str]]:
        """
        Parse code and collect syntax errors.

        Returns:
            (is_valid, error_messages)
        """
        error = get_indexer(language).validate_syntax(code)
        if error is None:
            return True, []
        return False, [str(error)]

    def validate_file(self, file_path: str, language: Optional[str] = None) -> dict:
        """
        Validate one file. Failures are reported in the result, never raised.

        Args:
            file_path: Path to the file
            language: Language identifier; detected from the extension when omitted
        """
        language = language or language_for_extension(Path(file_path).suffix)
        result = {"file": file_path, "language": language, "valid": False}

        if language is None:
            result["error"] = f"cannot detect language for {file_path}"
            return result

        try:
            source = self.store.read_file(file_path)
            valid, errors = self.validate_syntax(source, language)
        except ScoutError as e:
            result["error"] = str(e)
            return result

        result["valid"] = valid
        if errors:
            result["error"] = errors[0]
        self.logger.debug(f"Validated {file_path}: valid={valid}")
        return result
