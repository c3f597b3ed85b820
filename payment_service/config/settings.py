"""Application settings using Pydantic for environment-based configuration."""
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_production_environment(environment: str) -> bool:
    """Check whether an environment tag names production, ignoring case."""
    return environment.strip().lower() == "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = Field(default="payment-service", description="Service name tag for audit events")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")

    # Gateway Configuration
    default_gateway: str = Field(default="stripe", description="Gateway used by the factory (stripe/paypal)")
    stripe_api_key: str = Field(
        default="sk_test_placeholder", description="Stripe secret API key (sk_test_...)"
    )
    paypal_client_id: str = Field(default="paypal-client-id", description="PayPal client ID")
    paypal_client_secret: str = Field(default="paypal-client-secret", description="PayPal client secret")

    # Fraud Detection
    fraud_velocity_window: int = Field(
        default=3600, gt=0, description="Velocity window in seconds"
    )
    fraud_max_transactions_per_window: int = Field(
        default=10, gt=0, description="Transactions allowed per velocity window"
    )
    fraud_high_risk_threshold: float = Field(
        default=0.7, description="Risk score at or above which payments are rejected"
    )

    # Notifications
    notification_retry_attempts: int = Field(
        default=3, gt=0, description="Max notification delivery attempts"
    )
    notification_retry_delay: float = Field(
        default=1.0, ge=0, description="Base delay for linear retry backoff (seconds)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("stripe_api_key")
    @classmethod
    def validate_stripe_key(cls, v: str) -> str:
        """Validate that Stripe secret key starts with sk_test_ or sk_live_."""
        if not v.startswith("sk_test_") and not v.startswith("sk_live_"):
            raise ValueError(
                "Invalid Stripe secret key format. Must start with 'sk_test_' or 'sk_live_'"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v.upper()

    @field_validator("default_gateway")
    @classmethod
    def validate_default_gateway(cls, v: str) -> str:
        """Validate gateway name."""
        if v.lower() not in ("stripe", "paypal"):
            raise ValueError("Invalid gateway. Must be one of: ['stripe', 'paypal']")
        return v.lower()

    @field_validator("fraud_high_risk_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError("Threshold must be between 0 and 1")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return is_production_environment(self.app_env)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
