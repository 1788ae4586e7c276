# Custom exceptions for Scout
from typing import List, Optional


class ScoutError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigError(ScoutError):
    """Raised for configuration-related problems."""
    pass


class UnsupportedCapabilityError(ScoutError):
    """Raised when a language or part type has no registered capability."""

    def __init__(self, message: str, language: str, part_type: Optional[str] = None,
                 valid: Optional[List[str]] = None):
        self.language = language
        self.part_type = part_type
        self.valid = valid or []
        super().__init__(message)


class PartNotFoundError(ScoutError):
    """Raised when the requested construct does not exist in the source."""

    def __init__(self, part_type: str, part_name: str):
        self.part_type = part_type
        self.part_name = part_name
        super().__init__(f"{part_type} '{part_name}' not found in file")


class MalformedContentError(ScoutError):
    """Raised when replacement content fails the pre-validation heuristic."""
    pass


class SourceSyntaxError(ScoutError):
    """Raised when source text cannot be parsed by the language's grammar."""

    def __init__(self, line: int, column: int, detail: str, file_path: Optional[str] = None):
        self.line = line
        self.column = column
        self.detail = detail
        self.file_path = file_path
        location = f"{line}:{column}"
        if file_path:
            location = f"{file_path}:{location}"
        super().__init__(f"{location}: {detail}")


class PostMutationInvalidError(ScoutError):
    """Raised when a replacement would leave the file syntactically invalid."""

    def __init__(self, language: str, cause: SourceSyntaxError):
        self.language = language
        self.cause = cause
        super().__init__(f"replacement resulted in invalid {language} syntax: {cause}")


class StorageError(ScoutError):
    """Raised when reading or writing a file fails."""

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        self.message = message
        super().__init__(message)


class AccessDeniedError(StorageError):
    """Raised when a path falls outside the allowed roots."""

    def __init__(self, file_path: str):
        super().__init__(file_path, f"access denied: path not allowed: {file_path}")
