"""
Configuration management for the Courses API
"""

from urllib.parse import quote_plus

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCTION_ENVIRONMENTS = ("production", "prod")


class ConnectionConfig(BaseModel):
    """Options for the document store connection, fixed for the process lifetime."""

    model_config = ConfigDict(frozen=True)

    user: str = ""
    password: str = Field(default="", repr=False)
    host: str
    database_name: str
    scheme: str = "mongodb+srv"
    options: str = "retryWrites=true&w=majority"
    connect_timeout_ms: int = 10_000

    def _build_url(self, password: str) -> str:
        credentials = ""
        if self.user:
            credentials = quote_plus(self.user)
            if password:
                credentials += f":{password}"
            credentials += "@"
        url = f"{self.scheme}://{credentials}{self.host}/{self.database_name}"
        if self.options:
            url += f"?{self.options}"
        return url

    def url(self) -> str:
        """Connection URI with user and password escaped."""
        return self._build_url(quote_plus(self.password))

    def redacted_url(self) -> str:
        """Connection URI safe for logs."""
        return self._build_url("***" if self.password else "")

    @property
    def connect_timeout(self) -> float:
        return self.connect_timeout_ms / 1000


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    db_user: str = ""
    db_password: str = ""
    db_host: str = "cluster0.mongodb.net"
    db_name: str = "courses"
    db_scheme: str = "mongodb+srv"
    db_options: str = "retryWrites=true&w=majority"
    db_connect_timeout_ms: int = 10_000
    db_connect_on_startup: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    port: int = 3000
    graphql_path: str = "/api"
    cors_enabled: bool = True
    cors_origins: list[str] = ["*"]

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, value: str | None) -> str:
        """Strip surrounding whitespace and lower-case; empty means development."""
        value = (value or "").strip().lower()
        return value or "development"

    @property
    def is_production(self) -> bool:
        return self.environment in PRODUCTION_ENVIRONMENTS

    def connection_config(self) -> ConnectionConfig:
        """Build the connection options for the document store."""
        return ConnectionConfig(
            user=self.db_user,
            password=self.db_password,
            host=self.db_host,
            database_name=self.db_name,
            scheme=self.db_scheme,
            options=self.db_options,
            connect_timeout_ms=self.db_connect_timeout_ms,
        )


# Global settings instance
settings = Settings()

# Debug: Log settings initialization (only in debug mode)
if settings.debug:
    from .logging import get_logger

    _logger = get_logger(__name__)
    _logger.debug(
        "Settings initialized",
        environment=settings.environment,
        db_host=settings.db_host,
        db_name=settings.db_name,
    )
