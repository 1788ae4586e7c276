"""
ConformanceScanner: find undocumented declarations across a file tree.
"""

import os
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from scout.exceptions import SourceSyntaxError, StorageError
from scout.logging_config import logger
from scout.parser import get_indexer
from scout.schemas import (
    ConformanceIssue,
    Declaration,
    DeclarationKind,
    FileScanError,
    IssueType,
    ScanResult,
)
from scout.storage import FileStore

from .config import DEFAULT_EXCLUDE_PATTERNS

RECURSIVE_SUFFIX = "..."

_VALUE_ISSUES = {
    DeclarationKind.CONST: IssueType.CONST_COMMENT,
    DeclarationKind.VAR: IssueType.VAR_COMMENT,
}


def _first_line(text: Optional[str]) -> str:
    if not text:
        return ""
    return text.strip().split("\n", 1)[0]


def has_identifier_prefix(doc: Optional[str], name: str) -> bool:
    """True when the doc's first line starts with `name` followed by a space, tab or `(`."""
    first = _first_line(doc)
    return first.startswith((name + " ", name + "\t", name + "("))


def has_nonempty_first_line(doc: Optional[str]) -> bool:
    return _first_line(doc).strip() != ""


class ConformanceScanner:
    """
    Walk a path and report documentation-rule violations.

    A file that cannot be read or parsed is recorded as a FileScanError and
    the scan continues with the next file.
    """

    def __init__(
        self,
        store: Optional[FileStore] = None,
        exclude: Optional[Iterable[str]] = None,
        language: str = "go",
        log=None,
    ):
        self.store = store or FileStore()
        self.exclude = list(exclude) if exclude is not None else list(DEFAULT_EXCLUDE_PATTERNS)
        self.indexer = get_indexer(language)
        self.logger = log or logger.bind(component="docs_scanner")

    def scan(self, path: str, recursive: bool = True) -> ScanResult:
        """
        Scan a file or directory.

        Args:
            path: File or directory; a trailing "..." forces recursion
            recursive: Descend into subdirectories (ignored for files)

        Raises:
            AccessDeniedError: path is outside the allowed roots.
            StorageError: path does not exist.
        """
        raw = path
        if raw.endswith(RECURSIVE_SUFFIX):
            raw = raw[:-len(RECURSIVE_SUFFIX)] or "."
            recursive = True

        target = self.store.resolve(raw)
        self.logger.info(f"Starting docs scan on '{target}' (recursive={recursive})")

        if target.is_file():
            result = ScanResult(path=path, base_path=str(target.parent))
            self._scan_file(target, result)
        elif target.is_dir():
            result = ScanResult(path=path, base_path=str(target))
            self._scan_directory(target, recursive, result)
        else:
            raise StorageError(raw, f"invalid path: {path}")

        self.logger.info(
            f"Docs scan finished: {result.files_scanned} files, "
            f"{len(result.issues)} issues, {len(result.errors)} errors"
        )
        return result

    def _scan_directory(self, directory: Path, recursive: bool, result: ScanResult) -> None:
        spec = pathspec.PathSpec.from_lines("gitignore", self.exclude)
        extensions = set(self.indexer.extensions)

        for root, dirs, files in os.walk(directory):
            root_path = Path(root)
            rel_root = root_path.relative_to(directory)

            # Prune ignored directories in place so os.walk never enters them
            kept = []
            for d in sorted(dirs):
                rel_dir = rel_root / d
                if spec.match_file(f"{rel_dir.as_posix()}/"):
                    self.logger.debug(f"Ignoring directory '{rel_dir}' due to exclude rules")
                else:
                    kept.append(d)
            dirs[:] = kept if recursive else []

            source_files = []
            for file_name in sorted(files):
                if Path(file_name).suffix.lower() not in extensions:
                    continue
                if spec.match_file((rel_root / file_name).as_posix()):
                    continue
                source_files.append(root_path / file_name)

            # Every traversed subdirectory needs a README, Go files or not
            if root_path != directory and not any(f.upper() == "README.MD" for f in files):
                result.issues.append(ConformanceIssue(
                    file=str(root_path / "README.md"),
                    line=0,
                    type=IssueType.README_MISSING,
                ))

            for file_path in source_files:
                self._scan_file(file_path, result)

    def _scan_file(self, file_path: Path, result: ScanResult) -> None:
        try:
            source = self.store.read_file(file_path)
            declarations = self.indexer.parse(source)
        except SourceSyntaxError as e:
            self.logger.warning(f"Could not parse {file_path}: {e}")
            result.errors.append(FileScanError(file=str(file_path), error=str(e)))
            return
        except StorageError as e:
            self.logger.warning(f"Could not read {file_path}: {e}")
            result.errors.append(FileScanError(file=str(file_path), error=str(e)))
            return

        result.files_scanned += 1
        result.issues.extend(self.check_declarations(str(file_path), declarations))

    def check_declarations(self, file_path: str, declarations: List[Declaration]) -> List[ConformanceIssue]:
        """Apply the documentation rules to one file's declarations."""
        issues: List[ConformanceIssue] = []

        for decl in declarations:
            if decl.kind == DeclarationKind.PACKAGE:
                if not _first_line(decl.doc).startswith(f"Package {decl.name}"):
                    issues.append(ConformanceIssue(
                        file=file_path,
                        line=decl.span.start_line,
                        type=IssueType.FILE_COMMENT,
                    ))

            elif decl.kind in (DeclarationKind.FUNCTION, DeclarationKind.METHOD):
                if not has_identifier_prefix(decl.doc, decl.name):
                    issues.append(ConformanceIssue(
                        file=file_path,
                        line=decl.name_line,
                        type=IssueType.FUNC_COMMENT,
                        element=decl.qualified_name,
                    ))

            elif decl.kind == DeclarationKind.TYPE:
                for member in decl.members:
                    if has_identifier_prefix(member.doc, member.name):
                        continue
                    if has_identifier_prefix(decl.doc, member.name):
                        continue
                    issues.append(ConformanceIssue(
                        file=file_path,
                        line=member.name_line,
                        type=IssueType.TYPE_COMMENT,
                        element=member.name,
                    ))

            elif decl.kind in _VALUE_ISSUES:
                issues.extend(self._value_issues(file_path, decl))

        return issues

    def _value_issues(self, file_path: str, decl: Declaration) -> List[ConformanceIssue]:
        issue_type = _VALUE_ISSUES[decl.kind]

        if not decl.grouped:
            if has_nonempty_first_line(decl.doc) or not decl.members:
                return []
            first = decl.members[0]
            return [ConformanceIssue(
                file=file_path,
                line=first.name_line,
                type=issue_type,
                element=first.spec_name,
                multi_line=first.multi_name,
            )]

        # An undocumented group is reported once as a whole
        if not has_nonempty_first_line(decl.doc):
            return [ConformanceIssue(
                file=file_path,
                line=decl.span.start_line,
                end_line=decl.span.end_line,
                type=IssueType.GROUP_COMMENT,
                multi_line=decl.span.end_line > decl.span.start_line,
                group_of=decl.kind,
            )]

        # A documented group still needs an end-of-line comment on every name
        return [
            ConformanceIssue(
                file=file_path,
                line=member.name_line,
                type=issue_type,
                element=member.spec_name,
                multi_line=member.multi_name,
            )
            for member in decl.members
            if not member.has_trailing_comment
        ]
