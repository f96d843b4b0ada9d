"""
Command line entry point.

Loads the configuration, determines the public IP once and pushes it to
every configured backend.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .backends.base import Outcome
from .backends.registry import BACKEND_REGISTRY, get_backend
from .config import Config, ConfigurationError, load_config
from .domain import default_extractor
from .ipsource import IPLookupError, get_external_ip, validate_ip
from .updater import run_updates

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UPDATE_FAILED = 1
EXIT_FATAL = 2


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='dnsupdate',
        description='Point Cloudflare and YDNS address records at the current public IP.'
    )
    parser.add_argument('-c', '--config', type=Path,
                        help='Config file (default: first of .config.toml, config.toml, '
                             '/etc/dnsupdate.toml and their .yaml variants)')
    parser.add_argument('--ip', help='Publish this address instead of looking it up')
    parser.add_argument('--offline-suffix-list', action='store_true',
                        help='Use the bundled public suffix list snapshot, do not fetch it')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser.parse_args(argv)


def build_backends(config: Config, offline: bool = False):
    """Instantiate configured backends in registry order.

    Raises:
        ConfigurationError: If a backend section is incomplete
    """
    extractor = default_extractor(offline)
    return [
        get_backend(code, config.backends[code], extractor=extractor)
        for code in BACKEND_REGISTRY
        if code in config.backends
    ]


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point"""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config)
        print(f"Config file path: {config.path}", flush=True)
        backends = build_backends(config, args.offline_suffix_list or config.offline_suffix_list)
    except ConfigurationError as e:
        logger.error(f"{e}. Exiting.")
        sys.exit(EXIT_FATAL)

    try:
        ip = validate_ip(args.ip) if args.ip else get_external_ip(config.ip_url)
    except IPLookupError as e:
        logger.error(f"{e}. Exiting.")
        sys.exit(EXIT_FATAL)

    results = run_updates(ip, backends)

    failed = [r for r in results if r.outcome is Outcome.FAIL]
    if failed:
        logger.warning(f"{len(failed)} of {len(results)} update(s) failed")
        sys.exit(EXIT_UPDATE_FAILED)
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
