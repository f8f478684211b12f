"""
Base storage interface for the URL shortener.

Purpose:
    Define a small, stable contract for the mapping store so the manager can
    be exercised against any backend that honours the same atomicity rules.

Atomicity contract:
    - `insert` and `increment_access` are mutually exclusive with each other
      and with every read of the same key.
    - `insert_if_url_absent` performs the dedup check and the insert inside a
      single exclusive section (test-and-set). It is the only correct way to
      create a record for a URL that may be created concurrently.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.

LLM Prompt Example:
    "Show how a narrow storage interface with a test-and-set primitive closes
    a check-then-insert race without leaking locks to the service layer."
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .models import URLMapping


class BaseStorage(ABC):
    """Abstract base class for mapping stores."""

    @abstractmethod  # pragma: no cover
    def find_by_url(self, url: str) -> Optional[URLMapping]:
        """
        Return the record whose original URL equals `url`, if any.

        At most one such record exists (dedup invariant).
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def insert(self, short_code: str, url: str) -> URLMapping:
        """
        Store a new record with access_count=0 and created_at=now.

        Raises:
            CodeCollisionError: If `short_code` is already taken.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def insert_if_url_absent(self, short_code: str, url: str) -> Tuple[URLMapping, bool]:
        """
        Atomically return the existing record for `url`, or insert a new one.

        Returns:
            Tuple[URLMapping, bool]: The record and True if it was just created.

        Raises:
            CodeCollisionError: If no record exists for `url` and `short_code`
                is already taken by another URL.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def lookup(self, short_code: str) -> Optional[URLMapping]:
        """Return the record for `short_code` or None."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def increment_access(self, short_code: str) -> Optional[URLMapping]:
        """
        Atomically add one to the access counter.

        Returns:
            Optional[URLMapping]: The updated record, or None if the code is unknown.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_all(self) -> List[URLMapping]:
        """Snapshot of every record at call time, in no particular order."""
        raise NotImplementedError
