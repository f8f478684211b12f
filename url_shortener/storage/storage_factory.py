"""
Storage factory: pick the storage backend from config (lazy env version)
======================================================================

This module centralizes selection of the storage backend so the rest of the
app can stay ignorant of where mappings live.

- Reads environment **at call time** to avoid stale values in tests.
- Every call returns a brand-new store; there is no shared module-level table.

Environment variables
---------------------
- SHORTENER_STORAGE_BACKEND: "memory" (default and currently the only backend)
"""

import logging
import os
from typing import Optional

from url_shortener.storage.base import BaseStorage
from url_shortener.storage.storage import Storage

log = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None) -> BaseStorage:
    """
    Return a fresh storage object based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default). If omitted, reads SHORTENER_STORAGE_BACKEND.

    Returns
    -------
    BaseStorage-compatible instance

    Raises
    ------
    ValueError
        If the backend name is unknown.
    """
    be = (backend or os.getenv("SHORTENER_STORAGE_BACKEND", "memory")).strip().lower()
    log.debug("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    raise ValueError(f"Unknown storage backend: {be!r}")
