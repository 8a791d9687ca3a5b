"""
Configuration management for the BigCommerce variant picker backend.
"""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    bigcommerce_store_hash: Optional[str] = Field(default=None)
    bigcommerce_access_token: Optional[str] = Field(default=None)
    bigcommerce_api_base: str = Field(default="https://api.bigcommerce.com")

    # Relay for deployments that call the catalog from a browser context
    use_cors_proxy: bool = Field(default=False)
    cors_proxy_url: str = Field(default="https://corsproxy.io/?")

    page_size: int = Field(default=50)
    currency_symbol: str = Field(default="£")
    embed_uri_scheme: str = Field(default="bc-product")

    contentful_access_token: Optional[str] = Field(default=None)
    contentful_space_id: Optional[str] = Field(default=None)
    contentful_environment: str = Field(default="master")

    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        case_sensitive = False


_settings = Settings()


def validate_credentials(store_hash: Optional[str], access_token: Optional[str]) -> tuple[bool, str]:
    """
    Validate BigCommerce store credentials.

    Args:
        store_hash: Store hash from the installation parameters.
        access_token: API access token.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not store_hash or not access_token:
        return False, "Please configure BigCommerce credentials in the app configuration"

    if not isinstance(store_hash, str) or not store_hash.strip():
        return False, "Store hash is invalid"

    if "/" in store_hash:
        return False, "Store hash must not contain '/'"

    return True, ""


def get_settings() -> Settings:
    """Get application settings."""
    return _settings
