from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_IP_HEADERS = [
    "x-forwarded-for",
    "x-real-ip",
    "cf-connecting-ip",
    "x-client-ip",
    "x-appwrite-client-ip",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Deezer API Proxy"
    app_version: str = "1.0.0"
    environment: str = Field(default="production", pattern=r"^(development|production|test)$")
    port: int = Field(default=8787, ge=1, le=65535)
    public_url: str = Field(default="https://deezer.songster.cloud", pattern=r"^https?://")

    deezer_api_base: str = Field(default="https://api.deezer.com", pattern=r"^https?://")
    upstream_timeout_seconds: float = Field(default=10.0, gt=0)

    rate_limit_requests: int = Field(default=100, ge=1)
    rate_limit_window_ms: int = Field(default=60_000, ge=1)
    rate_limit_cleanup_interval_ms: int = Field(default=300_000, ge=1)
    # Only list headers the fronting proxy overwrites; the rest can be spoofed.
    rate_limit_ip_headers: list[str] = Field(default_factory=lambda: list(DEFAULT_IP_HEADERS))

    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()
