"""
MutationFacade: Orchestrate find and replace operations on file parts.
"""

from typing import Optional

from scout.exceptions import PartNotFoundError, PostMutationInvalidError
from scout.logging_config import logger
from scout.parser import get_indexer
from scout.schemas import PartInfo, ReplaceResult
from scout.storage import FileStore, content_hash

from .capabilities import get_capability
from .editor import CodeEditor
from .locator import ConstructLocator
from .validator import CodeValidator


class MutationFacade:
    """
    Main facade for part-level operations.

    Replace pipeline:
    1. Resolve capability (fails before any I/O)
    2. Pre-validate replacement content
    3. Lock the file, read it, index it
    4. Locate the part (ConstructLocator)
    5. Splice the replacement into the span (CodeEditor)
    6. Re-parse the candidate; refuse the write if it is invalid
    7. Write atomically if the file is unchanged since step 3
    """

    def __init__(self, store: Optional[FileStore] = None):
        self.store = store or FileStore()
        self.locator = ConstructLocator()
        self.editor = CodeEditor(self.store)
        self.validator = CodeValidator(self.store)
        self.logger = logger.bind(component="mutation")

    def find_part(self, file_path: str, language: str, part_type: str, part_name: str) -> PartInfo:
        """
        Locate a part in a file.

        Raises:
            UnsupportedCapabilityError: unknown language/part type (no I/O performed).
            StorageError: the file cannot be read.
            SourceSyntaxError: the file does not parse.
        """
        capability = get_capability(language, part_type)
        source = self.store.read_file(file_path)
        declarations = get_indexer(language).parse(source)
        return self.locator.find_in(capability, declarations, part_name, source)

    def replace_part(
        self,
        file_path: str,
        language: str,
        part_type: str,
        part_name: str,
        new_content: str,
    ) -> ReplaceResult:
        """
        Replace a part with new content.

        The file is written only if the spliced result still parses; on any
        failure it is left byte-for-byte unchanged.

        Raises:
            UnsupportedCapabilityError: unknown language/part type (no I/O performed).
            MalformedContentError: replacement fails the pre-validation check.
            PartNotFoundError: no part with that name.
            PostMutationInvalidError: result would not parse.
            StorageError: read or write failed, or the file changed concurrently.
        """
        capability = get_capability(language, part_type)
        capability.content.validate(part_type, new_content)

        self.logger.info(f"Replacing {part_type} '{part_name}' in {file_path}")
        path = self.store.resolve(file_path)
        indexer = get_indexer(language)

        with self.editor.lock_for(path):
            original = self.store.read_file(path)
            expected_hash = content_hash(original)

            declarations = indexer.parse(original)
            info = self.locator.find_in(capability, declarations, part_name, original)
            if not info.found:
                raise PartNotFoundError(part_type, part_name)

            candidate = self.editor.splice(original, info.span, new_content)
            error = indexer.validate_syntax(candidate)
            if error is not None:
                self.logger.warning(f"Rejected replacement of {part_type} '{part_name}': {error}")
                raise PostMutationInvalidError(language, error)

            written = self.editor.write_if_unchanged(path, candidate, expected_hash)

        return ReplaceResult(
            file_path=file_path,
            language=language,
            part_type=part_type,
            part_name=part_name,
            previous=info,
            bytes_written=written,
        )
