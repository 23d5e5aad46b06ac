"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from commtrack.domain.errors import ValidationError
from commtrack.utils.cache import DEFAULT_MAX_SIZE, DEFAULT_TTL_SECONDS

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Application settings.

    Attributes:
        database_url: SQLAlchemy URL; takes precedence over database_path
        database_path: SQLite file used when no URL is set
        cache_ttl: Seconds a computed stats result stays fresh
        cache_max_size: Maximum number of cached stats results
        log_level: Root logging level name
    """

    database_url: Optional[str] = None
    database_path: Optional[str] = None
    cache_ttl: int = DEFAULT_TTL_SECONDS
    cache_max_size: int = DEFAULT_MAX_SIZE
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from COMMTRACK_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("COMMTRACK_DATABASE_URL") or None,
            database_path=env.get("COMMTRACK_DB_PATH") or None,
            cache_ttl=_positive_int(env, "COMMTRACK_CACHE_TTL", DEFAULT_TTL_SECONDS),
            cache_max_size=_positive_int(env, "COMMTRACK_CACHE_MAX_SIZE", DEFAULT_MAX_SIZE),
            log_level=_log_level(env.get("COMMTRACK_LOG_LEVEL", "WARNING")),
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def _log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in LOG_LEVELS:
        raise ValidationError(f"Unknown log level '{raw}'. Use one of: {', '.join(LOG_LEVELS)}")
    return level
