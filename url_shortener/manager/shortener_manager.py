"""
ShortenerManager module for the URL shortener.

Responsibilities:
    - Validate and canonicalize incoming URLs
    - Ensure one code per canonical URL, also under concurrent creates
    - Generate random codes and retry transparently on collisions
    - Resolve codes (counting accesses), report stats, list all mappings

Design notes:
    - Storage is an injected dependency; nothing here is module-global.
    - Creation never does "check, release, then insert". The fast-path lookup
      is only an optimisation; the authoritative dedup check is repeated by
      `insert_if_url_absent` inside the store's exclusive section.
    - Collision retries are bounded by `max_collision_retries`; exhaustion is
      reported as CodeGenerationError instead of looping forever.
    - The code strategy is pluggable: pass a BaseStrategy or a plain callable
      `(url, length) -> code`.

LLM Prompt Example:
    "Explain how a test-and-set store primitive plus a bounded retry loop
    makes URL creation idempotent and collision-safe under concurrency."
"""

import logging
from typing import Callable, List, Optional, Union

from ..config import settings
from ..errors import CodeCollisionError, CodeGenerationError, InvalidURLError, NotFoundError
from ..storage.base import BaseStorage
from ..storage.models import URLMapping
from .strategies import BaseStrategy, get_strategy_from_config
from .validators import is_valid_url, normalize_url

log = logging.getLogger(__name__)

CodeStrategy = Callable[[str, int], str]  # (url, length) -> code


class ShortenerManager:
    """
    Coordinates creation and lookup rules for short URLs.

    LLM Prompt Example:
        "Show how DI lets tests swap in a deterministic code strategy to
        force collisions without touching business logic or routes."
    """

    def __init__(
        self,
        storage: BaseStorage,
        code_strategy: Optional[Union[BaseStrategy, CodeStrategy]] = None,
        code_length: Optional[int] = None,
        max_collision_retries: Optional[int] = None,
    ):
        """
        Initialize ShortenerManager with a storage backend.

        Args:
            storage (BaseStorage): Store that owns every mapping.
            code_strategy: Code generator (defaults to the configured strategy).
            code_length (Optional[int]): Code length passed to the strategy.
            max_collision_retries (Optional[int]): Attempts before giving up.
        """
        self.storage = storage
        self.code_length = code_length or settings.CODE_LENGTH
        self.max_collision_retries = max(1, max_collision_retries or settings.MAX_COLLISION_RETRIES)

        strategy = code_strategy or get_strategy_from_config()
        if isinstance(strategy, BaseStrategy):
            self.code_strategy = lambda url, length: strategy.generate(url, length=length)
        else:
            self.code_strategy = strategy

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    def create_short_url(self, raw_url: str) -> URLMapping:
        """
        Create (or reuse) the mapping for a URL.

        Rules:
            - Invalid input -> InvalidURLError, nothing stored.
            - The canonical URL already mapped -> that record, unchanged.
            - Otherwise generate codes until the store accepts one, at most
              `max_collision_retries` times.

        Args:
            raw_url (str): URL as submitted by the caller.

        Returns:
            URLMapping: The existing or newly created record.

        Raises:
            InvalidURLError: If the URL fails validation.
            CodeGenerationError: If every attempt hit a taken code.
        """
        if not is_valid_url(raw_url):
            raise InvalidURLError(raw_url)
        url = normalize_url(raw_url)

        existing = self.storage.find_by_url(url)
        if existing is not None:
            log.debug("Reusing %s for %s", existing.short_code, url)
            return existing

        for attempt in range(1, self.max_collision_retries + 1):
            code = self.code_strategy(url, self.code_length)
            try:
                mapping, created = self.storage.insert_if_url_absent(code, url)
            except CodeCollisionError:
                log.debug("Short code collision on %s (attempt %d/%d)", code, attempt, self.max_collision_retries)
                continue
            if created:
                log.info("Created short URL: %s -> %s", mapping.short_code, url)
            else:
                # Another creator won the race for this URL
                log.debug("Reusing %s for %s", mapping.short_code, url)
            return mapping

        log.error("Gave up generating a short code for %s after %d attempts", url, self.max_collision_retries)
        raise CodeGenerationError(self.max_collision_retries)

    def resolve(self, short_code: str) -> URLMapping:
        """
        Look up a code and count the access.

        Raises:
            NotFoundError: If no mapping exists for `short_code`.
        """
        mapping = self.storage.increment_access(short_code)
        if mapping is None:
            raise NotFoundError(short_code)
        return mapping

    def get_stats(self, short_code: str) -> URLMapping:
        """Like `resolve`, but leaves the access counter untouched."""
        mapping = self.storage.lookup(short_code)
        if mapping is None:
            raise NotFoundError(short_code)
        return mapping

    def list_urls(self) -> List[URLMapping]:
        return self.storage.list_all()
