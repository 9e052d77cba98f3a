"""
Runtime configuration loaded from the environment (and a local .env file).

Settings are read once into a Settings object and passed explicitly to the
components that need them.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    """Configuration for the partner matching and digest jobs."""

    supabase_url: str | None = None
    supabase_service_key: str | None = None

    # Gravity partner directory
    gravity_api_url: str = "https://api.artsy.net/api/v1"
    gravity_app_token: str | None = None
    gravity_timeout_seconds: float = Field(30.0, gt=0)
    gravity_max_retries: int = Field(3, ge=1)
    consignment_communication_id: str | None = None

    # Digest e-mail delivery
    resend_api_key: str | None = None
    notification_from_email: str = "consign@artsy.net"
    digest_send_interval_seconds: float = Field(0.1, ge=0)


def get_settings() -> Settings:
    """Build Settings from environment variables, falling back to defaults."""
    env_values = {
        "supabase_url": os.getenv("SUPABASE_URL"),
        "supabase_service_key": os.getenv("SUPABASE_SERVICE_KEY"),
        "gravity_api_url": os.getenv("GRAVITY_API_URL"),
        "gravity_app_token": os.getenv("GRAVITY_APP_TOKEN"),
        "gravity_timeout_seconds": os.getenv("GRAVITY_TIMEOUT_SECONDS"),
        "gravity_max_retries": os.getenv("GRAVITY_MAX_RETRIES"),
        "consignment_communication_id": os.getenv("CONSIGNMENT_COMMUNICATION_ID"),
        "resend_api_key": os.getenv("RESEND_API_KEY"),
        "notification_from_email": os.getenv("NOTIFICATION_FROM_EMAIL"),
        "digest_send_interval_seconds": os.getenv("DIGEST_SEND_INTERVAL_SECONDS"),
    }
    # Unset variables keep the model defaults
    return Settings(**{k: v for k, v in env_values.items() if v})
