"""
Update orchestration.

Runs every configured backend over its subdomains with one address and
prints a progress line per subdomain.
"""

import logging
import sys
from typing import Iterable, List, Optional, TextIO

from .backends.base import DNSBackend, UpdateResult

logger = logging.getLogger(__name__)


def format_result(result: UpdateResult) -> str:
    return f"[{result.backend}] Update {result.subdomain}: {result.outcome.value}"


def run_updates(ip: str, backends: Iterable[DNSBackend], stream: Optional[TextIO] = None) -> List[UpdateResult]:
    """Update all backends, one after another.

    Each backend's HTTP client is closed when it is done, whether or not
    its run completed.

    Args:
        ip: Address to publish
        backends: Configured backends, processed in the given order
        stream: Where progress lines go (default: stdout)

    Returns:
        Results of all backends, in processing order
    """
    out = stream if stream is not None else sys.stdout

    def report(result: UpdateResult) -> None:
        print(format_result(result), file=out, flush=True)

    results: List[UpdateResult] = []
    for backend in backends:
        logger.debug(f"[{backend.tag}] Updating {len(backend.domains)} subdomain(s) to {ip}")
        with backend:
            results.extend(backend.update(ip, on_result=report))
    return results
