"""
DNS Backend Abstraction Layer.

Each DNS provider implements the DNSBackend interface.

Supported providers:
- cloudflare: Cloudflare API v4 (zone/record lookup, then update)
- ydns: YDNS update API (single call)

Usage:
    from dnsupdate.backends import get_backend

    backend = get_backend('ydns', {'user': '...', 'password': '...', 'domains': [...]})
    with backend:
        results = backend.update('203.0.113.5')
"""

from .base import (
    BackendError,
    BackendRejection,
    DNSBackend,
    Outcome,
    TransportError,
    UpdateResult,
)
from .registry import BACKEND_REGISTRY, get_backend, register_backend
from .cloudflare import CloudflareBackend
from .ydns import YDNSBackend

__all__ = [
    'DNSBackend',
    'BackendError',
    'BackendRejection',
    'TransportError',
    'Outcome',
    'UpdateResult',
    'get_backend',
    'register_backend',
    'BACKEND_REGISTRY',
    'CloudflareBackend',
    'YDNSBackend',
]
