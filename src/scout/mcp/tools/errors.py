"""Error dict shape shared by all tools."""
from scout.exceptions import (
    AccessDeniedError,
    ConfigError,
    MalformedContentError,
    PartNotFoundError,
    PostMutationInvalidError,
    ScoutError,
    SourceSyntaxError,
    StorageError,
    UnsupportedCapabilityError,
)

# Most specific first
ERROR_TYPES = [
    (UnsupportedCapabilityError, "unsupported_capability"),
    (PartNotFoundError, "part_not_found"),
    (MalformedContentError, "malformed_content"),
    (PostMutationInvalidError, "post_mutation_invalid"),
    (SourceSyntaxError, "syntax_error"),
    (AccessDeniedError, "access_denied"),
    (StorageError, "storage_error"),
    (ConfigError, "config_error"),
]


def error_response(exc: ScoutError) -> dict:
    error_type = "scout_error"
    for cls, name in ERROR_TYPES:
        if isinstance(exc, cls):
            error_type = name
            break
    return {
        "status": "error",
        "error_type": error_type,
        "message": str(exc),
    }
