"""Application configuration loaded from the environment."""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from .cache.memory_cache import MemoryCacheConfig
from .fact_check.google_fact_check_adapter import GoogleFactCheckConfig
from .messaging.telegram_adapter import TelegramConfig
from .messaging.whatsapp_adapter import WhatsAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Top-level configuration for the bot service."""

    app_name: str = "walansi-kontonbile"
    app_version: str = "1.0.0"
    environment: str = "development"
    log_level: str = "INFO"
    default_language: str = "en"
    cache_ttl: int = 86400

    google_fact_check: GoogleFactCheckConfig = Field(default_factory=GoogleFactCheckConfig)
    cache: MemoryCacheConfig = Field(default_factory=MemoryCacheConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    whatsapp: WhatsAppConfig = Field(default_factory=WhatsAppConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create configuration from environment variables."""
        google_api_key = os.getenv("GOOGLE_FACT_CHECK_API_KEY", "")
        if not google_api_key:
            logger.warning("⚠️ GOOGLE_FACT_CHECK_API_KEY not found in environment variables")
        else:
            logger.info(f"✅ Google Fact Check API key loaded: {len(google_api_key)} chars")

        return cls(
            app_name=os.getenv("APP_NAME", "walansi-kontonbile"),
            app_version=os.getenv("APP_VERSION", "1.0.0"),
            environment=os.getenv("APP_ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            default_language=os.getenv("DEFAULT_LANGUAGE", "en"),
            cache_ttl=_int_env("FACT_CHECK_CACHE_TTL", 86400),
            google_fact_check=GoogleFactCheckConfig(
                api_key=google_api_key,
                base_url=os.getenv(
                    "GOOGLE_FACT_CHECK_API_URL",
                    "https://factchecktools.googleapis.com/v1alpha1",
                ),
            ),
            cache=MemoryCacheConfig(maxsize=_int_env("FACT_CHECK_CACHE_MAXSIZE", 10000)),
            telegram=TelegramConfig(
                bot_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
                api_url=os.getenv("TELEGRAM_API_URL", "https://api.telegram.org/bot"),
            ),
            whatsapp=WhatsAppConfig(
                api_token=os.getenv("WHATSAPP_API_TOKEN", ""),
                api_url=os.getenv("WHATSAPP_API_URL", "https://graph.facebook.com/v18.0"),
                phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID", ""),
                verify_token=os.getenv("WHATSAPP_VERIFY_TOKEN", ""),
            ),
        )


def _int_env(name: str, default: int) -> int:
    value: Optional[str] = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"⚠️ Invalid integer for {name}: {value!r}, using {default}")
        return default
