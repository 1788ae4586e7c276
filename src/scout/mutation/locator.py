"""
ConstructLocator: map (part_type, part_name) to an exact span of the source.
"""

from typing import List

from scout.logging_config import logger
from scout.parser import get_indexer
from scout.schemas import Declaration, PartInfo

from .capabilities import PartCapability, get_capability


class ConstructLocator:
    """
    Locate one top-level construct by kind and name.

    Matching is exact and case-sensitive; the first match in source order
    wins. Locating is a pure read: the source is never modified.
    """

    def __init__(self, log=None):
        self.logger = log or logger.bind(component="locator")

    def locate(self, language: str, part_type: str, part_name: str, source: bytes) -> PartInfo:
        """
        Find a construct in source.

        Args:
            language: Language identifier (e.g. "go")
            part_type: Part type (func, type, const, var, import, package)
            part_name: Name; methods use `ReceiverType.Name`
            source: Raw file bytes

        Returns:
            PartInfo with found=False when nothing matches.

        Raises:
            UnsupportedCapabilityError: before parsing, for unknown language/part type.
            SourceSyntaxError: the source does not parse.
        """
        capability = get_capability(language, part_type)
        declarations = get_indexer(language).parse(source)
        return self.find_in(capability, declarations, part_name, source)

    def find_in(
        self,
        capability: PartCapability,
        declarations: List[Declaration],
        part_name: str,
        source: bytes,
    ) -> PartInfo:
        """Search an existing declaration index."""
        for decl in declarations:
            span = capability.match(decl, part_name)
            if span is None:
                continue
            self.logger.debug(
                f"Located {capability.part_type.value} '{part_name}' at lines {span.start_line}-{span.end_line}"
            )
            return PartInfo(
                found=True,
                start_line=span.start_line,
                end_line=span.end_line,
                start_offset=span.start_offset,
                end_offset=span.end_offset,
                content=source[span.start_offset:span.end_offset].decode("utf-8", errors="replace"),
            )

        self.logger.debug(f"{capability.part_type.value} '{part_name}' not found")
        return PartInfo(found=False)

