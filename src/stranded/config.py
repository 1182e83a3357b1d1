"""Configuration for Stranded."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """Application configuration."""

    host: str = "localhost"
    port: int = 1965
    certfile: Path | None = None
    keyfile: Path | None = None
    log_level: str = "INFO"
    log_file: Path | None = None
    json_logs: bool = False
    hash_fingerprints: bool = True
    # None means the world.json shipped with the package
    world_file: Path | None = None
    history_limit: int = 50
    max_sessions: int = 1000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        certfile = os.getenv("STRANDED_CERTFILE")
        keyfile = os.getenv("STRANDED_KEYFILE")
        log_file = os.getenv("STRANDED_LOG_FILE")
        world_file = os.getenv("STRANDED_WORLD_FILE")

        return cls(
            host=os.getenv("STRANDED_HOST", cls.host),
            port=int(os.getenv("STRANDED_PORT", str(cls.port))),
            certfile=Path(certfile) if certfile else None,
            keyfile=Path(keyfile) if keyfile else None,
            log_level=os.getenv("STRANDED_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("STRANDED_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
            hash_fingerprints=os.getenv("STRANDED_HASH_FINGERPRINTS", "true").lower()
            not in ("false", "0", "no"),
            world_file=Path(world_file) if world_file else None,
            history_limit=int(
                os.getenv("STRANDED_HISTORY_LIMIT", str(cls.history_limit))
            ),
            max_sessions=int(
                os.getenv("STRANDED_MAX_SESSIONS", str(cls.max_sessions))
            ),
        )
