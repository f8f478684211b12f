"""
Error kinds raised by the URL shortener core.

The HTTP layer (main.py) is the only place these are translated into
status codes. Nothing in the core swallows them.

    InvalidURLError      -> 400
    NotFoundError        -> 404
    CodeGenerationError  -> 500
    CodeCollisionError   -> never leaves the manager (retried)
"""


class ShortenerError(Exception):
    """Base class for all URL shortener errors."""


class InvalidURLError(ShortenerError, ValueError):
    """The candidate string is not an acceptable URL."""

    def __init__(self, url: str):
        super().__init__("invalid URL provided")
        self.url = url


class NotFoundError(ShortenerError, LookupError):
    """No mapping exists for the requested short code."""

    def __init__(self, short_code: str):
        super().__init__("short URL not found")
        self.short_code = short_code


class CodeCollisionError(ShortenerError):
    """A generated short code is already taken (internal, retried)."""

    def __init__(self, short_code: str):
        super().__init__(f"short code already exists: {short_code!r}")
        self.short_code = short_code


class CodeGenerationError(ShortenerError, RuntimeError):
    """Every collision retry was used up without finding a free code."""

    def __init__(self, attempts: int):
        super().__init__(f"failed to generate a unique short code after {attempts} attempts")
        self.attempts = attempts
