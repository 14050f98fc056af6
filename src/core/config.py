"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="restaurant-orders-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")
    supabase_signing_key_jwk: str = Field(..., description="Supabase signing key JWK (JSON string) for JWT token verification")

    # Authorization
    admin_role: str = Field(default="admin", description="Role claim value that grants admin capability")

    # Restaurant
    restaurant_name: str = Field(default="American Pizza", description="Restaurant display name")
    restaurant_address: str = Field(
        default="Bahnhof str.119, 47137 Duisburg",
        description="Restaurant pickup address shown to customers",
    )
    restaurant_lat: float = Field(default=51.4322, description="Restaurant latitude")
    restaurant_lng: float = Field(default=6.7611, description="Restaurant longitude")

    # Geocoding
    geocoding_provider: str = Field(
        default="checksum",
        description="Address resolver to use: 'checksum' (deterministic stand-in) or 'openrouteservice'",
    )
    geocoding_api_key: str = Field(default="", description="API key for the geocoding provider")
    geocoding_url: str = Field(
        default="https://api.openrouteservice.org/geocode/search",
        description="Geocoding search endpoint",
    )
    geocoding_timeout_seconds: float = Field(default=10.0, description="Geocoding request timeout")

    # Email (Resend)
    enable_email_notifications: bool = Field(default=False, description="Send pickup-ready emails")
    resend_api_key: str = Field(default="", description="Resend API key for sending emails")
    email_from_address: str = Field(
        default="American Pizza <noreply@americanpizza.de>",
        description="From address for transactional emails",
    )

    # SMS (Twilio)
    enable_sms_notifications: bool = Field(default=False, description="Send pickup-ready SMS messages")
    twilio_account_sid: str = Field(default="", description="Twilio account SID")
    twilio_auth_token: str = Field(default="", description="Twilio auth token")
    twilio_from_number: str = Field(default="", description="Twilio sender phone number")
    sms_timeout_seconds: float = Field(default=10.0, description="SMS provider request timeout")

    # Frontend
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Frontend application URL for tracking links",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def email_configured(self) -> bool:
        """Check if the mail transport has credentials."""
        return bool(self.resend_api_key and self.email_from_address)

    @property
    def sms_configured(self) -> bool:
        """Check if the SMS provider has credentials."""
        return bool(self.twilio_account_sid and self.twilio_auth_token and self.twilio_from_number)

    @property
    def tracking_base_url(self) -> str:
        """First frontend URL, used to build order tracking links."""
        return self.frontend_url.split(",")[0].strip().rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
