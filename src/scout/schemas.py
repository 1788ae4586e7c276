from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class DeclarationKind(str, Enum):
    """Category of a top-level declaration."""
    PACKAGE = "package"
    IMPORT = "import"
    CONST = "const"
    VAR = "var"
    TYPE = "type"
    FUNCTION = "function"
    METHOD = "method"


class PartType(str, Enum):
    """Part types a caller can address by name."""
    FUNC = "func"
    TYPE = "type"
    CONST = "const"
    VAR = "var"
    IMPORT = "import"
    PACKAGE = "package"


class Span(BaseModel):
    """
    Contiguous region of a source file.

    Lines are 1-based and inclusive. Offsets are 0-based byte offsets into the
    UTF-8 encoded source; end_offset is exclusive.
    """
    start_line: int
    end_line: int
    start_offset: int
    end_offset: int


class DeclarationMember(BaseModel):
    """
    One name bound inside a declaration: a const/var name, a type spec or an
    import spec.
    """
    name: str
    span: Span
    name_line: int
    doc: Optional[str] = None  # Comment group directly above the member (grouped declarations only)
    has_trailing_comment: bool = False
    multi_name: bool = False  # Spec binds more than one name (e.g. `a, b = 1, 2`)
    spec_name: str = ""  # First name bound by the same spec


class Declaration(BaseModel):
    """
    A top-level construct extracted from one parse of a source file.
    """
    kind: DeclarationKind
    name: str
    span: Span
    name_line: int
    receiver_type: Optional[str] = None  # Methods only, e.g. "*Config"
    grouped: bool = False  # Parenthesised block: const (...), var (...), type (...), import (...)
    has_leading_comment: bool = False
    doc: Optional[str] = None
    members: List[DeclarationMember] = Field(default_factory=list)

    @property
    def qualified_name(self) -> str:
        """Externally visible address: `ReceiverType.Name` for methods."""
        if self.kind == DeclarationKind.METHOD and self.receiver_type:
            return f"{self.receiver_type}.{self.name}"
        return self.name


class PartInfo(BaseModel):
    """
    Location and content of a located construct.
    """
    found: bool = False
    start_line: int = 0
    end_line: int = 0
    start_offset: int = 0
    end_offset: int = 0
    content: str = ""

    @property
    def span(self) -> Span:
        return Span(
            start_line=self.start_line,
            end_line=self.end_line,
            start_offset=self.start_offset,
            end_offset=self.end_offset,
        )


class ReplaceResult(BaseModel):
    """
    Outcome of a successful part replacement.
    """
    file_path: str
    language: str
    part_type: str
    part_name: str
    previous: PartInfo
    bytes_written: int


# Documentation conformance schemas

class IssueType(str, Enum):
    """Types of documentation issues the conformance scanner reports."""
    FILE_COMMENT = "file-comment"
    FUNC_COMMENT = "func-comment"
    TYPE_COMMENT = "type-comment"
    CONST_COMMENT = "const-comment"
    VAR_COMMENT = "var-comment"
    GROUP_COMMENT = "group-comment"
    README_MISSING = "readme-missing"


class ConformanceIssue(BaseModel):
    """
    One documentation-rule violation.

    `file` is absolute while scanning; reports relativise it against the
    scanned path.
    """
    file: str
    line: int
    type: IssueType
    end_line: Optional[int] = None
    element: str = ""
    multi_line: bool = False
    group_of: Optional[DeclarationKind] = None  # const or var, for group-comment issues

    @property
    def description(self) -> str:
        if self.type == IssueType.README_MISSING:
            return "Missing README.md file"
        if self.type == IssueType.GROUP_COMMENT:
            if self.group_of is not None:
                return f"Missing {self.group_of.value} group comment"
            return "Missing group comment"
        return f"Missing {self.type.value.split('-')[0]} comment"


class FileScanError(BaseModel):
    """A file that could not be scanned (typically a parse failure)."""
    file: str
    error: str


class ScanResult(BaseModel):
    """
    Raw output of a conformance scan, before prioritisation.
    """
    path: str
    base_path: str
    files_scanned: int = 0
    issues: List[ConformanceIssue] = Field(default_factory=list)
    errors: List[FileScanError] = Field(default_factory=list)


class ReportIssue(BaseModel):
    """Serialised form of a ConformanceIssue inside an IssueReport."""
    file: str
    line: int
    end_line: Optional[int] = None
    issue: str
    element: str = ""
    multi_line: bool = False


class FileIssues(BaseModel):
    """Issues of one file, in priority order."""
    file: str
    issue_count: int
    issues: List[ReportIssue] = Field(default_factory=list)


class IssueReport(BaseModel):
    """
    Prioritised, size-bounded documentation report.
    """
    path: str
    issues_by_file: List[FileIssues] = Field(default_factory=list)
    summary: str = ""
    returned_count: int = 0
    total_count: int = 0
    remaining_count: int = 0
    size_limited: bool = False
    response_size_chars: int = 0
    message: Optional[str] = None
    errors: Optional[List[FileScanError]] = None

    def to_payload(self) -> dict:
        """JSON-ready dict; optional fields are dropped when unset."""
        return self.model_dump(mode="json", exclude_none=True)
