"""
Capability table: which part types each language supports, how a part is
matched against the declaration index, and how replacement content is
pre-validated.

Lookups fail before any parsing or I/O, so an unsupported request never
touches the filesystem.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from scout.exceptions import MalformedContentError, UnsupportedCapabilityError
from scout.schemas import Declaration, DeclarationKind, PartType, Span

Matcher = Callable[[Declaration, str], Optional[Span]]


@dataclass(frozen=True)
class ContentRule:
    """Cheap textual check applied to replacement content before any parsing."""
    requirement: str
    accepts: Callable[[str], bool]

    def validate(self, part_type: str, content: str) -> None:
        trimmed = content.strip()
        if not self.accepts(trimmed):
            raise MalformedContentError(
                f"{part_type} replacement must {self.requirement}, got: {trimmed[:20]}"
            )


@dataclass(frozen=True)
class PartCapability:
    part_type: PartType
    match: Matcher
    content: ContentRule


def _match_func(decl: Declaration, name: str) -> Optional[Span]:
    # A bare name never selects a method; methods need `Receiver.Name`
    if decl.kind == DeclarationKind.FUNCTION and decl.name == name:
        return decl.span
    if decl.kind == DeclarationKind.METHOD and decl.qualified_name == name:
        return decl.span
    return None


def _match_any_member(kind: DeclarationKind) -> Matcher:
    def match(decl: Declaration, name: str) -> Optional[Span]:
        if decl.kind != kind:
            return None
        if any(member.name == name for member in decl.members):
            return decl.span
        return None
    return match


def _match_import(decl: Declaration, name: str) -> Optional[Span]:
    if decl.kind != DeclarationKind.IMPORT:
        return None
    for member in decl.members:
        if member.name == name or member.name.strip('"`') == name:
            return member.span
    return None


def _match_package(decl: Declaration, name: str) -> Optional[Span]:
    if decl.kind == DeclarationKind.PACKAGE and decl.name == name:
        return decl.span
    return None


GO_CAPABILITIES: Dict[str, PartCapability] = {
    PartType.FUNC.value: PartCapability(
        PartType.FUNC,
        _match_func,
        ContentRule("start with 'func '", lambda c: c.startswith("func ")),
    ),
    PartType.TYPE.value: PartCapability(
        PartType.TYPE,
        _match_any_member(DeclarationKind.TYPE),
        ContentRule("start with 'type '", lambda c: c.startswith("type ")),
    ),
    PartType.CONST.value: PartCapability(
        PartType.CONST,
        _match_any_member(DeclarationKind.CONST),
        ContentRule("contain '=' or start with 'const'", lambda c: "=" in c or c.startswith("const")),
    ),
    PartType.VAR.value: PartCapability(
        PartType.VAR,
        _match_any_member(DeclarationKind.VAR),
        ContentRule("contain '=' or start with 'var'", lambda c: "=" in c or c.startswith("var")),
    ),
    PartType.IMPORT.value: PartCapability(
        PartType.IMPORT,
        _match_import,
        ContentRule("contain 'import' or quotes", lambda c: "import" in c or '"' in c),
    ),
    PartType.PACKAGE.value: PartCapability(
        PartType.PACKAGE,
        _match_package,
        ContentRule("start with 'package '", lambda c: c.startswith("package ")),
    ),
}

CAPABILITIES: Dict[str, Dict[str, PartCapability]] = {
    "go": GO_CAPABILITIES,
}


def supported_languages() -> List[str]:
    return sorted(CAPABILITIES)


def supported_part_types(language: str) -> List[str]:
    """
    Part types addressable for a language, in declaration order.

    Raises:
        UnsupportedCapabilityError: unknown language.
    """
    table = CAPABILITIES.get(language)
    if table is None:
        raise UnsupportedCapabilityError(
            f"language '{language}' not supported. Currently supported: {', '.join(supported_languages())}",
            language=language,
        )
    return list(table)


def get_capability(language: str, part_type: str) -> PartCapability:
    """
    Resolve (language, part_type) to its capability.

    Raises:
        UnsupportedCapabilityError: unknown language or part type.
    """
    valid = supported_part_types(language)
    capability = CAPABILITIES[language].get(part_type)
    if capability is None:
        raise UnsupportedCapabilityError(
            f"part_type '{part_type}' not supported for language '{language}'. "
            f"Valid types: [{', '.join(valid)}]",
            language=language,
            part_type=part_type,
            valid=valid,
        )
    return capability
