"""
Strategies for short-code generation.

Provided strategies:
- RandomStrategy: L characters drawn independently and uniformly from the
  62-symbol alphabet [a-zA-Z0-9], using the operating system CSPRNG
  (random.SystemRandom). Predictable codes would let anyone enumerate live
  mappings, so a seeded PRNG is never used here.

Strategies do not avoid collisions. The store rejects taken codes and the
manager retries with a fresh code.

Configuration (via url_shortener.config.settings):
- CODE_LENGTH: default code length (6; clamped 4..32)
"""

import random
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from url_shortener.config import settings

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
DEFAULT_LENGTH = 6


def _safe_len(length: Optional[int]) -> int:
    """Clamp a requested length to [4, 32]."""
    return max(4, min(32, int(length)))


class BaseStrategy(ABC):
    """Abstract base for code generation strategies."""

    @abstractmethod
    def generate(self, url: str, *, length: Optional[int] = None) -> str:
        """
        Generate a short code.
        - url: the canonical URL being shortened (strategies may ignore it)
        - length: desired code length; None means the strategy default
        """
        raise NotImplementedError


@dataclass(frozen=True)
class RandomStrategy(BaseStrategy):
    """Random Base62 codes; relies on store-level uniqueness plus retry."""

    length: int = DEFAULT_LENGTH

    def generate(self, url: str, *, length: Optional[int] = None) -> str:
        L = _safe_len(length if length is not None else self.length)
        rng = random.SystemRandom()
        return "".join(rng.choice(ALPHABET) for _ in range(L))


def get_strategy_from_config() -> BaseStrategy:
    """Build the code strategy described by settings."""
    return RandomStrategy(length=_safe_len(getattr(settings, "CODE_LENGTH", DEFAULT_LENGTH)))
