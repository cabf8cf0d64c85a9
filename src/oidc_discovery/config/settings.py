"""Configuration Settings for the Discovery Service

Manages environment variables and application configuration.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    """Application settings"""

    # Service info
    service_name: str = "oidc-discovery"
    service_version: str = "1.0.0"
    environment: str = "development"

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # OpenID provider
    oidc_issuer: Optional[str] = None
    oidc_protocol: Optional[str] = None  # e.g. "https"; unset keeps the request scheme
    oidc_trust_forwarded_proto: bool = False  # follow X-Forwarded-Proto when no protocol is set
    oidc_end_session_endpoint: Optional[str] = None
    oidc_use_refresh_token: bool = False
    oidc_pkce_enabled: bool = False
    oidc_scopes: str = "openid,profile,email"  # comma separated
    oidc_claims: str = ""  # comma separated claim names, e.g. "name,email,updated_at"

    # Signing keys (comma separated, first key signs new tokens)
    oidc_signing_key_paths: str = ""
    oidc_signing_key_ids: str = ""
    oidc_signing_algorithm: Optional[str] = None
    oidc_hmac_secret: Optional[str] = None

    # OAuth2 server routes
    oauth2_path_prefix: str = "/oauth"

    # CORS configuration
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["GET", "OPTIONS"]
    cors_allow_headers: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"

    @property
    def signing_key_paths(self) -> list[str]:
        """Configured key file paths"""
        return [p.strip() for p in self.oidc_signing_key_paths.split(",") if p.strip()]

    @property
    def signing_key_ids(self) -> list[str]:
        """Configured key ids, matched to key paths by position"""
        return [k.strip() for k in self.oidc_signing_key_ids.split(",") if k.strip()]

    @property
    def scope_names(self) -> list[str]:
        return [s.strip() for s in self.oidc_scopes.split(",") if s.strip()]

    @property
    def claim_names(self) -> list[str]:
        return [c.strip() for c in self.oidc_claims.split(",") if c.strip()]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance

    Returns:
        Settings instance
    """
    return Settings()
