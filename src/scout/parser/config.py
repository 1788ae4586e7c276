from typing import Dict, Optional

# Mapping of file extensions to language names used in this module
SUPPORTED_LANGUAGES: Dict[str, str] = {
    ".go": "go",
}

# Comment prefixes that carry tool directives rather than documentation
DIRECTIVE_PREFIXES = ("//go:", "//line ", "//export ", "//extern ", "//nolint")


def language_for_extension(suffix: str) -> Optional[str]:
    """Return the language registered for a file suffix (case-insensitive)."""
    return SUPPORTED_LANGUAGES.get(suffix.lower())
