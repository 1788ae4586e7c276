from scout.schemas import IssueType

# Directories and files skipped while walking a tree (gitignore syntax)
DEFAULT_EXCLUDE_PATTERNS = [
    ".git/",
    "node_modules/",
    ".svn/",
    ".hg/",
    ".bzr/",
    "vendor/",
    ".vscode/",
    ".idea/",
    "build/",
    "dist/",
    "target/",
    "bin/",
    "obj/",
    ".DS_Store",
    "__pycache__/",
    ".pytest_cache/",
    "coverage/",
    "tmp/",
    "temp/",
]

# Response budget for check_docs, in serialized characters
TARGET_CHAR_LIMIT = 90_000

# Lower number = higher priority; unlisted types rank last
ISSUE_SEVERITY = {
    IssueType.FUNC_COMMENT: 1,
    IssueType.TYPE_COMMENT: 1,
    IssueType.CONST_COMMENT: 1,
    IssueType.VAR_COMMENT: 1,
    IssueType.GROUP_COMMENT: 1,
    IssueType.FILE_COMMENT: 2,
    IssueType.README_MISSING: 3,
}
DEFAULT_SEVERITY = 4
