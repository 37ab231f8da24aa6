"""Application configuration using pydantic-settings.

All values come from environment variables (or a local ``.env`` file).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Database
    # ======================
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/parity.db",
        description="Database connection URL (postgresql+asyncpg://... in production)",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    cors_origins: str = Field(
        default="http://localhost:3000", description="Comma-separated list of allowed origins"
    )
    public_base_url: str = Field(
        default="https://parity.app", description="Public URL used to build token metadata URIs"
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    # ======================
    # Auth
    # ======================
    auth_secret: str = Field(
        default="", description="HMAC secret for bearer tokens (empty = dev mode)"
    )

    # ======================
    # Solana
    # ======================
    solana_rpc_url: str = Field(
        default="https://api.devnet.solana.com", description="Solana RPC URL"
    )
    rpc_commitment: str = Field(default="confirmed", description="RPC commitment level")

    # ======================
    # Bonding curve
    # ======================
    curve_client: str = Field(
        default="dryrun", description="Curve client backend: dryrun or meteora"
    )
    meteora_config_address: Optional[str] = Field(
        default=None, description="Meteora DBC pool config address"
    )
    base_token_decimals: int = Field(default=6, ge=0, le=9, description="Launched token decimals")
    confirm_max_retries: int = Field(default=5, ge=1, description="Pool verification attempts")
    confirm_retry_delay: float = Field(
        default=2.0, ge=0, description="Seconds between pool verification attempts"
    )

    # ======================
    # Market data
    # ======================
    geckoterminal_api_url: str = Field(
        default="https://api.geckoterminal.com/api/v2", description="GeckoTerminal API URL"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def allowed_origins(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "database_url": self._redact_url(self.database_url),
            "auth": "***" if self.auth_secret else "(dev mode)",
            "solana": {
                "rpc": self._redact_url(self.solana_rpc_url),
                "commitment": self.rpc_commitment,
            },
            "curve": {
                "client": self.curve_client,
                "config_address": self.meteora_config_address or "(not set)",
                "token_decimals": self.base_token_decimals,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials and API keys embedded in a URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        if "api-key=" in url:
            base, _ = url.split("api-key=", 1)
            return f"{base}api-key=***"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
