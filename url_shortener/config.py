"""
Runtime configuration for the URL shortener
===========================================

Simple settings module that reads from environment variables (only here),
and exposes a stable `settings` object for the rest of the codebase.
Avoid reading env vars anywhere else; import from this module instead.

Storage
-------
- SHORTENER_STORAGE_BACKEND       : "memory" (default; the only backend)

Short-code generation
---------------------
- SHORTENER_CODE_LENGTH           : int length; default 6; clamped to [4, 32]
- SHORTENER_MAX_COLLISION_RETRIES : attempts before giving up; default 10, min 1

HTTP
----
- SHORTENER_BASE_URL              : public prefix for short URLs (e.g. "https://sho.rt");
                                    empty means "derive from the incoming request"
- SHORTENER_HOST / SHORTENER_PORT : bind address for `python main.py` (0.0.0.0 / 8080)
- SHORTENER_LOG_LEVEL             : logging level name (default "INFO")
"""

import os


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


class _Settings:
    # -------- Storage --------
    STORAGE_BACKEND: str = os.getenv("SHORTENER_STORAGE_BACKEND", "memory").strip().lower()

    # -------- Short-code generation --------
    CODE_LENGTH: int = max(4, min(32, _get_int("SHORTENER_CODE_LENGTH", 6)))
    MAX_COLLISION_RETRIES: int = max(1, _get_int("SHORTENER_MAX_COLLISION_RETRIES", 10))

    # -------- HTTP --------
    BASE_URL: str = os.getenv("SHORTENER_BASE_URL", "").rstrip("/")
    HOST: str = os.getenv("SHORTENER_HOST", "0.0.0.0")
    PORT: int = _get_int("SHORTENER_PORT", 8080)

    # -------- Logging --------
    LOG_LEVEL: str = os.getenv("SHORTENER_LOG_LEVEL", "INFO").strip().upper()


settings = _Settings()
