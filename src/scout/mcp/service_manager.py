"""Service lifecycle - lazily built, config-driven shared components."""
from typing import List, Optional
import threading

from loguru import logger

from scout.docs import DEFAULT_EXCLUDE_PATTERNS, ConformanceScanner, IssueAggregator
from scout.mutation import CodeValidator, MutationFacade
from scout.storage import FileStore

from .config import get_setting


class ServiceManager:
    """
    Builds the file store and the components that share it.

    Settings are read once, on first use. Tests reset the module-level
    instance to pick up a new working directory or config.
    """

    def __init__(
        self,
        allowed_paths: Optional[List[str]] = None,
        max_file_size: Optional[int] = None,
        docs_budget: Optional[int] = None,
        docs_exclude: Optional[List[str]] = None,
    ):
        self._allowed_paths = allowed_paths
        self._max_file_size = max_file_size
        self._docs_budget = docs_budget
        self._docs_exclude = docs_exclude
        self._store: Optional[FileStore] = None
        self._mutation: Optional[MutationFacade] = None
        self._lock = threading.Lock()

    @property
    def store(self) -> FileStore:
        with self._lock:
            if self._store is None:
                allowed = self._allowed_paths or get_setting("paths.allowed") or None
                max_size = self._max_file_size or get_setting("limits.max_file_size")
                self._store = FileStore(allowed_paths=allowed, max_file_size=max_size)
                logger.debug(f"File store ready, allowed roots: {self._store.allowed_paths}")
            return self._store

    @property
    def mutation(self) -> MutationFacade:
        store = self.store
        with self._lock:
            if self._mutation is None:
                self._mutation = MutationFacade(store)
            return self._mutation

    def validator(self) -> CodeValidator:
        return CodeValidator(self.store)

    def scanner(self, language: str = "go") -> ConformanceScanner:
        extra = self._docs_exclude
        if extra is None:
            extra = get_setting("docs.exclude")
        return ConformanceScanner(
            store=self.store,
            exclude=DEFAULT_EXCLUDE_PATTERNS + list(extra),
            language=language,
        )

    def aggregator(self) -> IssueAggregator:
        budget = self._docs_budget or get_setting("limits.docs_response_chars")
        return IssueAggregator(budget=budget)


_manager: Optional[ServiceManager] = None
_manager_lock = threading.Lock()


def get_service_manager() -> ServiceManager:
    """Get the global ServiceManager instance."""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = ServiceManager()
        return _manager


def reset_service_manager() -> None:
    global _manager
    with _manager_lock:
        _manager = None
