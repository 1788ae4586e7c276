"""
Scout Path Configuration

Centralized path management for Scout's local data files.
All paths are relative to the project root (current working directory).

Directory Structure:
.scout/
└── logs/                # Log files (only when file logging is enabled)
"""

from pathlib import Path
from typing import Optional


class ScoutPaths:
    """
    Centralized path configuration for Scout.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    SCOUT_DIR = ".scout"
    LOGS_DIR = "logs"

    def __init__(self, project_root: Optional[Path] = None):
        self._project_root = project_root

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def scout_dir(self) -> Path:
        """Get the .scout directory path."""
        return self.project_root / self.SCOUT_DIR

    @property
    def logs_dir(self) -> Path:
        """Get the logs directory path."""
        return self.scout_dir / self.LOGS_DIR

    def ensure_dirs(self) -> None:
        """Create all necessary directories if they don't exist."""
        self.scout_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


_default_paths: Optional[ScoutPaths] = None


def get_paths(project_root: Optional[Path] = None) -> ScoutPaths:
    """
    Get the paths configuration.

    Args:
        project_root: Optional project root. If given, a fresh instance is
            returned; otherwise the shared default instance is used.
    """
    global _default_paths

    if project_root is not None:
        return ScoutPaths(project_root)

    if _default_paths is None:
        _default_paths = ScoutPaths()
    return _default_paths
