"""
URL validation and canonicalization.

Both functions are pure. `normalize_url` is only meaningful after
`is_valid_url` has accepted the candidate.

Rules:
    - Accepted scheme prefixes: http://, https://, ftp://. Anything else is
      treated as scheme-less and gets http:// in front.
    - After defaulting, the string must split into a scheme and a network
      location. The host must be "localhost" or contain a dot, and the
      network location may not contain whitespace.
    - ASCII control characters are rejected anywhere in the string.
    - A port, when present, must be numeric and within 0-65535.
"""

from urllib.parse import urlsplit

SCHEME_PREFIXES = ("http://", "https://", "ftp://")
DEFAULT_PREFIX = "http://"


def normalize_url(candidate: str) -> str:
    """Prepend http:// unless an accepted scheme prefix is already present."""
    if candidate.startswith(SCHEME_PREFIXES):
        return candidate
    return DEFAULT_PREFIX + candidate


def is_valid_url(candidate: str) -> bool:
    """Return True if `candidate` is an acceptable URL."""
    if not candidate or candidate.startswith("://"):
        return False
    # urlsplit silently drops tabs and newlines; refuse control characters up front
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in candidate):
        return False

    try:
        parsed = urlsplit(normalize_url(candidate))
        host = parsed.hostname
        # reading .port validates it (digits, 0-65535)
        parsed.port
    except ValueError:
        # e.g. an unbalanced IPv6 bracket or a malformed port
        return False

    if not parsed.scheme or not parsed.netloc or not host:
        return False
    if any(ch.isspace() for ch in parsed.netloc):
        return False
    return host == "localhost" or "." in host
