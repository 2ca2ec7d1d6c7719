"""
Dependency Injection Container
================================

Simple service locator pattern for managing infrastructure dependencies.
Implements the Dependency Inversion Principle by providing centralized access
to the hosted backend through its abstract interfaces.

Usage:
    from infrastructure.container import container

    backend = container.backend()
    auth = container.auth_provider()
    cart_service = container.cart_service()
"""

import logging
from typing import Optional

from .backend import AuthProviderInterface, BackendFactory, HostedBackendInterface

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._backend: Optional[HostedBackendInterface] = None
            self._auth_provider: Optional[AuthProviderInterface] = None

            # Domain Services
            self._catalog_service = None
            self._pricing_service = None
            self._cart_service = None
            self._checkout_service = None
            self._auth_service = None

            self._initialized = True
            logger.info("Service container initialized")

    def backend(self, backend_type: Optional[str] = None) -> HostedBackendInterface:
        """
        Get hosted data backend instance.

        Args:
            backend_type: 'postgrest' or 'memory'. If None, uses settings.

        Returns:
            HostedBackendInterface implementation (cached)
        """
        if self._backend is None or backend_type is not None:
            self._backend = BackendFactory.create(backend_type)
            logger.debug(f"Created hosted backend: {type(self._backend).__name__}")

        return self._backend

    def auth_provider(self, backend_type: Optional[str] = None) -> AuthProviderInterface:
        """
        Get hosted auth provider instance.

        Args:
            backend_type: 'postgrest' or 'memory'. If None, uses settings.

        Returns:
            AuthProviderInterface implementation (cached)
        """
        if self._auth_provider is None or backend_type is not None:
            self._auth_provider = BackendFactory.create_auth(backend_type)
            logger.debug(f"Created auth provider: {type(self._auth_provider).__name__}")

        return self._auth_provider

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from storefront.services import CatalogService

            self._catalog_service = CatalogService(backend=self.backend())
            logger.debug("Created CatalogService")
        return self._catalog_service

    def pricing_service(self):
        """Get PricingService instance."""
        if self._pricing_service is None:
            from storefront.services import PricingService

            self._pricing_service = PricingService()
            logger.debug("Created PricingService")
        return self._pricing_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from storefront.services import CartService

            # CartService depends on CatalogService and PricingService
            self._cart_service = CartService(
                backend=self.backend(),
                catalog_service=self.catalog_service(),
                pricing_service=self.pricing_service(),
            )
            logger.debug("Created CartService")
        return self._cart_service

    def checkout_service(self):
        """Get CheckoutService instance."""
        if self._checkout_service is None:
            from storefront.services import CheckoutService

            self._checkout_service = CheckoutService(
                cart_service=self.cart_service(), pricing_service=self.pricing_service()
            )
            logger.debug("Created CheckoutService")
        return self._checkout_service

    def auth_service(self):
        """Get AuthService instance."""
        if self._auth_service is None:
            from authentication.domain.services.auth_service import AuthService

            self._auth_service = AuthService(auth_provider=self.auth_provider(), backend=self.backend())
            logger.debug("Created AuthService")
        return self._auth_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._backend = None
        self._auth_provider = None
        self._catalog_service = None
        self._pricing_service = None
        self._cart_service = None
        self._checkout_service = None
        self._auth_service = None
        logger.info("Service container reset")

    def configure_for_testing(self):
        """
        Configure container with in-memory services for testing.

        Sets up:
            - In-memory hosted backend tables
            - In-memory auth provider (no email confirmation)
        """
        self.reset()
        self._backend = BackendFactory.create("memory")
        self._auth_provider = BackendFactory.create_auth("memory")
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()


# Convenience functions for quick access
def get_backend() -> HostedBackendInterface:
    """Get hosted data backend from global container."""
    return container.backend()


def get_auth_provider() -> AuthProviderInterface:
    """Get hosted auth provider from global container."""
    return container.auth_provider()
