"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

ENV_PREFIX = "PERCH_"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(production=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Mode: redacts 5xx messages and silences failure diagnostics when True
    production: bool = False

    # Logging
    log_level: str = "info"

    # Limits
    max_body_size: int = 16 * 1024 * 1024  # 16 MB

    # JSON responses
    json_indent: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AppConfig":
        """Build a config from ``PERCH_*`` environment variables.

        Recognised variables::

            PERCH_ENV=production    # production mode
            PERCH_HOST=0.0.0.0
            PERCH_PORT=8080
            PERCH_LOG_LEVEL=debug

        Unset variables fall back to the field defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        port = env.get(f"{ENV_PREFIX}PORT")
        return cls(
            host=env.get(f"{ENV_PREFIX}HOST", defaults.host),
            port=int(port) if port else defaults.port,
            production=env.get(f"{ENV_PREFIX}ENV", "").strip().lower() == "production",
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level),
        )
