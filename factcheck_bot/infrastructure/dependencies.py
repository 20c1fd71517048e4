"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..domain.services.claim_verifier import ClaimVerifier
from ..domain.services.conversation_service import ConversationService
from ..domain.services.intent_classifier import IntentClassifier
from ..domain.services.message_router import MessageRouter
from .cache.memory_cache import MemoryVerificationCache
from .config import AppConfig
from .fact_check.google_fact_check_adapter import GoogleFactCheckAdapter
from .messaging.telegram_adapter import TelegramAdapter
from .messaging.whatsapp_adapter import WhatsAppAdapter
from .storage.memory_repository import (
    InMemoryConversationRepository,
    InMemoryFactCheckRepository,
    InMemoryUserRepository,
)

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection.

    Every component is built once, here, and handed to its consumers; the
    domain layer never reaches for globals.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """Initialize service container.

        Args:
            config: Application configuration (read from the environment if omitted)
        """
        self.config = config or AppConfig.from_env()
        self._services: Dict[str, Any] = {}
        self._setup_services()

    def _setup_services(self):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        # Infrastructure adapters
        fact_check_source = GoogleFactCheckAdapter(config=self.config.google_fact_check)
        verification_cache = MemoryVerificationCache(config=self.config.cache)
        fact_check_repository = InMemoryFactCheckRepository()
        user_repository = InMemoryUserRepository()
        conversation_repository = InMemoryConversationRepository()
        telegram = TelegramAdapter(config=self.config.telegram)
        whatsapp = WhatsAppAdapter(config=self.config.whatsapp)

        # Domain services
        classifier = IntentClassifier()
        verifier = ClaimVerifier(
            source=fact_check_source,
            cache=verification_cache,
            repository=fact_check_repository,
            cache_ttl=self.config.cache_ttl,
        )
        router = MessageRouter(
            classifier=classifier,
            verifier=verifier,
            default_language=self.config.default_language,
        )
        conversation_service = ConversationService(
            router=router,
            users=user_repository,
            conversations=conversation_repository,
            platforms={
                telegram.platform_name: telegram,
                whatsapp.platform_name: whatsapp,
            },
        )

        # Register services
        self._services = {
            'fact_check_source': fact_check_source,
            'verification_cache': verification_cache,
            'fact_check_repository': fact_check_repository,
            'user_repository': user_repository,
            'conversation_repository': conversation_repository,
            'telegram': telegram,
            'whatsapp': whatsapp,
            'intent_classifier': classifier,
            'claim_verifier': verifier,
            'message_router': router,
            'conversation_service': conversation_service,
        }

        logger.info("✅ Service container setup completed")

    async def initialize(self) -> None:
        """Open adapter clients."""
        for name in ('fact_check_source', 'telegram', 'whatsapp'):
            try:
                await self._services[name].initialize()
            except Exception as e:
                logger.warning(f"⚠️ Failed to initialize {name}: {e}")

    async def shutdown(self) -> None:
        """Close adapter clients."""
        for name in ('fact_check_source', 'telegram', 'whatsapp'):
            await self._services[name].shutdown()

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def status(self) -> Dict[str, bool]:
        """Availability of the external adapters."""
        return {
            name: bool(self._services[name].is_available)
            for name in ('fact_check_source', 'telegram', 'whatsapp')
        }


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    load_dotenv()
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_claim_verifier() -> ClaimVerifier:
    """FastAPI dependency for the claim verifier."""
    return get_service_container().get('claim_verifier')


def get_conversation_service() -> ConversationService:
    """FastAPI dependency for the conversation service."""
    return get_service_container().get('conversation_service')


def get_whatsapp_adapter() -> WhatsAppAdapter:
    """FastAPI dependency for the WhatsApp adapter."""
    return get_service_container().get('whatsapp')
