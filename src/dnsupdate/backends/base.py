"""
Abstract base class for DNS backends.

Every DNS provider (Cloudflare, YDNS, ...) implements this interface.
A backend owns the list of subdomains from its config section and one
authenticated HTTP client that is reused for all of them.
"""

import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import tldextract

from ..config import ConfigurationError
from ..domain import DecompositionError

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Exception raised for backend operation failures."""
    pass


class TransportError(BackendError):
    """Connection failure, or a response that could not be parsed."""
    pass


class BackendRejection(BackendError):
    """The API answered but reported that the request did not succeed."""
    pass


class Outcome(enum.Enum):
    SUCCESS = 'Success'
    FAIL = 'Fail'
    SKIPPED = 'Skipped'


@dataclass
class UpdateResult:
    """Outcome of one subdomain update."""

    backend: str
    subdomain: str
    outcome: Outcome
    detail: str = ''


ResultCallback = Callable[[UpdateResult], None]


class DNSBackend(ABC):
    """Abstract base class for DNS backends.

    Subclasses set ``tag`` (shown in progress output), ``required_keys``
    and implement ``_build_client`` and ``update_subdomain``.
    """

    tag: str = ''
    required_keys: Tuple[str, ...] = ()
    default_timeout: float = 30

    def __init__(
        self,
        config: Dict[str, Any],
        transport: Optional[httpx.BaseTransport] = None,
        extractor: Optional[tldextract.TLDExtract] = None,
    ):
        """Initialize backend with configuration.

        Args:
            config: Provider-specific configuration dict
            transport: Optional httpx transport used instead of the network
            extractor: Public suffix extractor for backends that need to
                split names into zone parts

        Raises:
            ConfigurationError: If a required key is missing or empty
        """
        missing = [key for key in self.required_keys if not config.get(key)]
        if missing:
            raise ConfigurationError(
                f"{self.tag} configuration is missing: {', '.join(missing)}"
            )

        self.config = config
        self.domains: List[str] = list(config.get('domains') or [])
        self.timeout = config.get('timeout', self.default_timeout)
        self.extractor = extractor
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize the authenticated HTTP client."""
        if self._client is None:
            self._client = self._build_client()
        return self._client

    def _client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {'timeout': self.timeout}
        if self._transport is not None:
            options['transport'] = self._transport
        return options

    @abstractmethod
    def _build_client(self) -> httpx.Client:
        """Create the authenticated client for this provider."""
        pass

    @abstractmethod
    def update_subdomain(self, subdomain: str, ip: str) -> Outcome:
        """Point the address record of one subdomain at ``ip``.

        Args:
            subdomain: Fully-qualified name from the config
            ip: Address to publish

        Returns:
            Outcome of the update

        Raises:
            BackendError: On transport failure or API rejection
            DecompositionError: If the name cannot be split into zone parts
        """
        pass

    def update(self, ip: str, on_result: Optional[ResultCallback] = None) -> List[UpdateResult]:
        """Update every configured subdomain, in order.

        Failures are contained per subdomain: the error is logged, the
        subdomain is reported as failed and the next one is attempted.

        Args:
            ip: Address to publish
            on_result: Called with each result as soon as it is known

        Returns:
            One UpdateResult per configured subdomain
        """
        results = []
        for subdomain in self.domains:
            detail = ''
            try:
                outcome = self.update_subdomain(subdomain, ip)
            except (BackendError, DecompositionError) as e:
                logger.error(f"[{self.tag}] Update of {subdomain} failed: {e}")
                outcome = Outcome.FAIL
                detail = str(e)

            result = UpdateResult(self.tag, subdomain, outcome, detail)
            results.append(result)
            if on_result is not None:
                on_result(result)
        return results

    def close(self) -> None:
        """Close the HTTP client, if one was created."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
