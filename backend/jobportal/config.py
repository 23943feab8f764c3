import logging
import os
import sys
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Runtime settings read from the environment (and .env if present).

    Keyword overrides win over the environment, which is how tests build
    an isolated app.
    """

    def __init__(self, **overrides):
        self.database_url: str = os.getenv("DATABASE_URL", "sqlite:///./jobportal.db")
        self.session_secret: str = os.getenv("SESSION_SECRET", "keyboard_cat")
        self.session_max_age: int = int(os.getenv("SESSION_MAX_AGE", str(24 * 60 * 60)))
        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
            if origin.strip()
        ]
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.seed_demo_users: bool = _flag("SEED_DEMO_USERS", False)

        # AI text completion (OpenAI-compatible chat endpoint)
        self.ai_api_key: str = os.getenv("XAI_API_KEY", "")
        self.ai_base_url: str = os.getenv("AI_BASE_URL", "https://api.x.ai/v1")
        self.ai_model: str = os.getenv("AI_MODEL", "grok-2-1212")
        self.ai_timeout: float = float(os.getenv("AI_TIMEOUT", "30"))

        # Billing
        self.stripe_secret_key: str = os.getenv("STRIPE_SECRET_KEY", "")
        self.stripe_prices = {
            "basic": os.getenv("STRIPE_PRICE_BASIC", "price_basic"),
            "pro": os.getenv("STRIPE_PRICE_PRO", "price_pro"),
            "premium": os.getenv("STRIPE_PRICE_PREMIUM", "price_premium"),
        }

        # Email (Gmail API)
        self.email_enabled: bool = _flag("EMAIL_ENABLED", False)
        self.gmail_token_file: str = os.getenv("GMAIL_TOKEN_FILE", "token.json")
        self.gmail_credentials_file: str = os.getenv("GMAIL_CREDENTIALS_FILE", "credentials.json")
        self.email_sender: str = os.getenv("EMAIL_SENDER", "notifications@jobportal.com")

        # Twitter ingestion
        self.twitter_bearer_token: str = os.getenv("TWITTER_BEARER_TOKEN", "")
        self.ingestion_enabled: bool = _flag("INGESTION_ENABLED", False)
        self.ingestion_interval_seconds: float = float(os.getenv("INGESTION_INTERVAL_SECONDS", "3600"))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
