"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_PAYMENT_METHODS: tuple[str, ...] = ("Net Banking", "Credit Card", "UPI Apps")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    api_base_url: str = "http://localhost:5000/api"
    privileged_identity: str = "owner.com"
    request_timeout_seconds: float = 10
    submission_timeout_seconds: float = 15
    catalog_cache_ttl_seconds: int = 300
    currency_symbol: str = "₹"
    session_cookie_name: str = "tour_booking_session"
    payment_methods: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="TOUR_BOOKING_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_payment_methods(raw: str | None) -> tuple[str, ...]:
    """Parse the payment method labels offered at review time."""
    if raw is None:
        return DEFAULT_PAYMENT_METHODS
    labels: list[str] = []
    for chunk in raw.split(","):
        label = chunk.strip()
        if label and label not in labels:
            labels.append(label)
    return tuple(labels) or DEFAULT_PAYMENT_METHODS
