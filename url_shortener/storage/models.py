"""
Mapping record for the URL shortener.

Records are frozen: the store hands the same immutable object to every
reader, and an access-count increment swaps in a new instance instead of
mutating the old one. A reader therefore never observes a half-updated
record and never holds a writable alias into the store.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class URLMapping:
    """A short code and the canonical URL it points to."""

    short_code: str
    original_url: str
    created_at: datetime
    access_count: int = 0

    def with_access(self) -> "URLMapping":
        """Return a copy with the access counter bumped by one."""
        return replace(self, access_count=self.access_count + 1)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view used by the stats and listing endpoints."""
        return {
            "short_code": self.short_code,
            "original_url": self.original_url,
            "created_at": self.created_at.isoformat(),
            "access_count": self.access_count,
        }
