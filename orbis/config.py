"""Environment-level configuration for the Orbis server.

Deployment concerns (CORS origins, log level, bind address) live here,
away from the rules engine, which takes no configuration.
"""

import os
from dataclasses import dataclass, field


@dataclass
class Settings:
    """Environment / deployment settings."""

    env: str = "development"
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        return cls(
            env=os.getenv("ORBIS_ENV", "development"),
            log_level=os.getenv("ORBIS_LOG_LEVEL", "INFO").upper(),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
            host=os.getenv("ORBIS_HOST", "127.0.0.1"),
            port=int(os.getenv("ORBIS_PORT", "8000")),
        )


def get_settings() -> Settings:
    """Convenience accessor for settings."""
    return Settings.from_env()
