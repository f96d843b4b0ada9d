"""
Backend Registry.

Maps config section names to backend implementations and builds
configured backend instances.
"""

import logging
from typing import Any, Dict, Type

from .base import BackendError, DNSBackend
from .cloudflare import CloudflareBackend
from .ydns import YDNSBackend

logger = logging.getLogger(__name__)


# Registry of available backend implementations, keyed by config section
BACKEND_REGISTRY: Dict[str, Type[DNSBackend]] = {
    'cloudflare': CloudflareBackend,
    'ydns': YDNSBackend,
}


def get_backend(provider_code: str, config: Dict[str, Any], **options) -> DNSBackend:
    """Get backend instance by provider code and configuration.

    Args:
        provider_code: Provider identifier (e.g., 'cloudflare', 'ydns')
        config: Provider-specific configuration dict
        **options: Passed through to the backend (transport, extractor)

    Returns:
        Configured DNSBackend instance

    Raises:
        BackendError: If provider is unknown
        ConfigurationError: If the config section is incomplete
    """
    backend_class = BACKEND_REGISTRY.get(provider_code)
    if not backend_class:
        raise BackendError(f"Unknown backend provider: {provider_code}")

    return backend_class(config, **options)


def get_available_providers() -> Dict[str, Type[DNSBackend]]:
    """Get dict of available backend providers."""
    return BACKEND_REGISTRY.copy()


def register_backend(provider_code: str, backend_class: Type[DNSBackend]) -> None:
    """Register a new backend implementation.

    Args:
        provider_code: Config section name for the provider
        backend_class: Class implementing DNSBackend interface
    """
    if not issubclass(backend_class, DNSBackend):
        raise TypeError(f"{backend_class} must be a subclass of DNSBackend")

    BACKEND_REGISTRY[provider_code] = backend_class
    logger.info(f"Registered backend provider: {provider_code}")
