"""Dataclass-based application configuration.

Settings are grouped into frozen dataclasses so they are typed, have sensible
defaults, and cannot be mutated after startup. Override them from the
environment with ``AppConfig.from_env()``::

    config = AppConfig.from_env()
    engine = create_async_engine(config.database.url)
"""

import os
from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection settings."""

    url: str = "sqlite+aiosqlite:///./taskdesk.db"
    pool_size: int = 20
    max_overflow: int = 10
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


@dataclass(frozen=True)
class AuthConfig:
    """Session and password hashing settings."""

    session_ttl_hours: int = 720  # 30 days
    password_iterations: int = 260_000


@dataclass(frozen=True)
class NotificationConfig:
    """Toast display options used by the task client."""

    position: str = "top-right"
    auto_close_ms: int = 3000
    close_on_click: bool = True
    pause_on_hover: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    log_dir: str | None = None


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AppConfig:
    """Complete configuration for the TaskDesk service and client."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    cors_origins: tuple[str, ...] = ("http://localhost:3000",)
    otel_endpoint: str | None = None
    debug: bool = False

    @classmethod
    def default(cls) -> "AppConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "TASKDESK_") -> "AppConfig":
        """Create config from environment variables.

        Example: TASKDESK_DATABASE_URL=postgresql+asyncpg://localhost/taskdesk
        """
        def env(name: str, default=None):
            return os.getenv(f"{prefix}{name}", default)

        database = DatabaseConfig(
            url=env("DATABASE_URL", DatabaseConfig.url),
            pool_size=int(env("DB_POOL_SIZE", DatabaseConfig.pool_size)),
            max_overflow=int(env("DB_MAX_OVERFLOW", DatabaseConfig.max_overflow)),
            echo=env("DB_ECHO", "false").lower() == "true",
        )
        auth = AuthConfig(
            session_ttl_hours=int(env("SESSION_TTL_HOURS", AuthConfig.session_ttl_hours)),
            password_iterations=int(
                env("PASSWORD_ITERATIONS", AuthConfig.password_iterations)
            ),
        )
        logging_cfg = LoggingConfig(
            level=env("LOG_LEVEL", LoggingConfig.level).upper(),
            log_dir=env("LOG_DIR"),
        )

        overrides = {}
        origins = env("CORS_ORIGINS")
        if origins:
            overrides["cors_origins"] = tuple(o.strip() for o in origins.split(",") if o.strip())

        return cls(
            database=database,
            auth=auth,
            logging=logging_cfg,
            otel_endpoint=env("OTEL_ENDPOINT") or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT"),
            debug=env("DEBUG", "false").lower() == "true",
            **overrides,
        )


# Process-wide configuration, read once at import
settings = AppConfig.from_env()
