"""
Domain decomposition.

Splits a fully-qualified host name into the label below the registrable
domain, the registrable domain itself and its public suffix, using the
public suffix list as maintained by tldextract.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import tldextract

logger = logging.getLogger(__name__)


class DecompositionError(Exception):
    """Raised when a name has no recognized public suffix."""
    pass


@dataclass(frozen=True)
class DecomposedDomain:
    """Structural parts of a host name (e.g. home / example / co.uk)."""

    label: Optional[str]
    registrable_domain: str
    public_suffix: str

    @property
    def apex(self) -> str:
        """Zone apex, e.g. ``example.co.uk``."""
        return f"{self.registrable_domain}.{self.public_suffix}"

    @property
    def fqdn(self) -> str:
        """Full host name, e.g. ``home.example.co.uk``."""
        if self.label:
            return f"{self.label}.{self.apex}"
        return self.apex


def build_extractor(offline: bool = False) -> tldextract.TLDExtract:
    """Create a suffix extractor.

    Args:
        offline: Only use the suffix list snapshot bundled with tldextract
            instead of fetching the current list over HTTP.
    """
    if offline:
        return tldextract.TLDExtract(suffix_list_urls=())
    return tldextract.TLDExtract()


@lru_cache(maxsize=2)
def default_extractor(offline: bool = False) -> tldextract.TLDExtract:
    """Return the process-wide extractor (built once per mode)."""
    return build_extractor(offline=offline)


def decompose(subdomain: str, extractor: Optional[tldextract.TLDExtract] = None) -> DecomposedDomain:
    """Split a host name into label, registrable domain and public suffix.

    Args:
        subdomain: Fully-qualified name such as ``home.example.co.uk``
        extractor: Suffix extractor to use (default: process-wide one)

    Returns:
        DecomposedDomain for the name

    Raises:
        DecompositionError: If the suffix is unknown or nothing is left
            to register below it
    """
    if extractor is None:
        extractor = default_extractor()

    name = subdomain.strip()
    if name.endswith('.'):
        name = name[:-1]
    if not name:
        raise DecompositionError("Empty domain name")

    parts = extractor(name)
    if not parts.suffix:
        raise DecompositionError(f"Unrecognized public suffix in {subdomain!r}")
    if not parts.domain:
        raise DecompositionError(f"{subdomain!r} is a public suffix, not a registrable domain")

    result = DecomposedDomain(
        label=parts.subdomain or None,
        registrable_domain=parts.domain,
        public_suffix=parts.suffix,
    )
    logger.debug(f"Decomposed {subdomain} into {result}")
    return result
