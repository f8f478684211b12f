"""
Storage module for the URL shortener (in-memory implementation).

Responsibilities:
    - Own every URLMapping record for the lifetime of the process
    - Enforce short-code uniqueness at insert time
    - Keep at most one record per canonical URL, even under concurrent creates
    - Count accesses without lost updates

Design:
    - One `threading.Lock` per Storage instance guards both the code table and
      a secondary `url -> short_code` index. Every public method holds it for
      its whole body; private `_..._locked` helpers assume it is already held,
      so no method ever re-acquires the lock.
    - Records are frozen dataclasses. Increments replace the stored value,
      so readers only ever receive immutable snapshots.
    - Nothing is module-global: each app (and each test) builds its own Storage.

LLM Prompt Example:
    "Explain why a secondary index on long URLs plus a single lock gives
     linearizable create/resolve semantics for an in-memory URL shortener."
"""

import threading
from typing import Dict, List, Optional, Tuple

from ..errors import CodeCollisionError
from .base import BaseStorage
from .models import URLMapping, utcnow


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty storage.

        Internal schema:
            self._mappings = {short_code: URLMapping}
            self._codes_by_url = {original_url: short_code}
        """
        self._lock = threading.Lock()
        self._mappings: Dict[str, URLMapping] = {}
        self._codes_by_url: Dict[str, str] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._mappings)

    # ---------------------------------------------------------------------
    # Helpers (caller holds self._lock)
    # ---------------------------------------------------------------------
    def _find_by_url_locked(self, url: str) -> Optional[URLMapping]:
        code = self._codes_by_url.get(url)
        return self._mappings.get(code) if code is not None else None

    def _insert_locked(self, short_code: str, url: str) -> URLMapping:
        if short_code in self._mappings:
            raise CodeCollisionError(short_code)
        mapping = URLMapping(short_code=short_code, original_url=url, created_at=utcnow())
        self._mappings[short_code] = mapping
        self._codes_by_url[url] = short_code
        return mapping

    # ---------------------------------------------------------------------
    # Contract
    # ---------------------------------------------------------------------
    def find_by_url(self, url: str) -> Optional[URLMapping]:
        """
        Return the record for a canonical URL (dedupe helper).

        Returns:
            Optional[URLMapping]: The record if present, else None.
        """
        with self._lock:
            return self._find_by_url_locked(url)

    def insert(self, short_code: str, url: str) -> URLMapping:
        """
        Insert a fresh record.

        Rules:
            - A taken code is rejected with CodeCollisionError, whatever its URL.
            - The caller is responsible for dedup; use `insert_if_url_absent`
              when the same URL may be created concurrently.
        """
        with self._lock:
            return self._insert_locked(short_code, url)

    def insert_if_url_absent(self, short_code: str, url: str) -> Tuple[URLMapping, bool]:
        """
        Test-and-set create used by the manager.

        The dedup check and the insert run under one acquisition of the lock,
        so two racing creators for the same URL cannot both insert.

        Returns:
            Tuple[URLMapping, bool]: (existing, False) or (new record, True).
        """
        with self._lock:
            existing = self._find_by_url_locked(url)
            if existing is not None:
                return existing, False
            return self._insert_locked(short_code, url), True

    def lookup(self, short_code: str) -> Optional[URLMapping]:
        with self._lock:
            return self._mappings.get(short_code)

    def increment_access(self, short_code: str) -> Optional[URLMapping]:
        """
        Increment the access count for a given code.

        Returns:
            Optional[URLMapping]: The updated record, or None if not found.
        """
        with self._lock:
            current = self._mappings.get(short_code)
            if current is None:
                return None
            updated = current.with_access()
            self._mappings[short_code] = updated
            return updated

    def list_all(self) -> List[URLMapping]:
        with self._lock:
            return list(self._mappings.values())
