"""
Configuration loading.

The config file is looked up on a fixed search path (first existing file
wins) and may be TOML or YAML. It holds one section per DNS backend:

    [cloudflare]
    account_email = "me@example.com"
    api_key = "..."
    domains = ["home.example.com"]

    [ydns]
    user = "..."
    password = "..."
    domains = ["myhost.ydns.eu"]
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'DNSUPDATE_CONFIG'

CONFIG_SEARCH_PATH = (
    Path('.config.toml'),
    Path('config.toml'),
    Path('/etc/dnsupdate.toml'),
    Path('.config.yaml'),
    Path('config.yaml'),
    Path('/etc/dnsupdate.yaml'),
)

MAX_CONFIG_SIZE = 1024 * 1024

DEFAULT_IP_URL = 'https://myexternalip.com/raw'


class ConfigurationError(Exception):
    """Raised when no usable configuration can be loaded."""
    pass


@dataclass
class Config:
    """Validated configuration."""

    path: Path
    backends: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    ip_url: str = DEFAULT_IP_URL
    offline_suffix_list: bool = False


def candidate_paths() -> List[Path]:
    """Return the config search path, honouring $DNSUPDATE_CONFIG."""
    paths = list(CONFIG_SEARCH_PATH)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        paths.insert(0, Path(env_path))
    return paths


def find_config_file() -> Path:
    """Return the first existing file on the search path.

    Raises:
        ConfigurationError: If none of the candidates exists
    """
    for path in candidate_paths():
        if path.is_file():
            return path
    searched = ', '.join(str(p) for p in candidate_paths())
    raise ConfigurationError(f"Cannot find config file (searched: {searched})")


def parse_config_file(path: Path) -> Any:
    """Read and parse a TOML or YAML file, chosen by extension."""
    try:
        file_size = path.stat().st_size
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    if file_size > MAX_CONFIG_SIZE:
        raise ConfigurationError(f"Configuration file too large: {file_size} bytes")

    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.suffix in ('.yaml', '.yml'):
            return yaml.safe_load(text)
        return tomllib.loads(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to parse {path}: {e}") from e


def validate_config(data: Any, path: Path) -> Config:
    """Check the parsed document and build a Config.

    Raises:
        ConfigurationError: If the structure is invalid
    """
    # Lazy import: backends depend on this module for ConfigurationError
    from .backends.registry import BACKEND_REGISTRY

    if not isinstance(data, dict):
        raise ConfigurationError("Invalid configuration: root must be a mapping")

    config = Config(path=path)

    ip_url = data.get('ip_url', DEFAULT_IP_URL)
    if not isinstance(ip_url, str) or not ip_url.strip():
        raise ConfigurationError("Invalid configuration: ip_url must be a non-empty string")
    config.ip_url = ip_url.strip()

    offline = data.get('offline_suffix_list', False)
    if not isinstance(offline, bool):
        raise ConfigurationError("Invalid configuration: offline_suffix_list must be true or false")
    config.offline_suffix_list = offline

    for key, section in data.items():
        if key in ('ip_url', 'offline_suffix_list'):
            continue
        if key not in BACKEND_REGISTRY:
            logger.warning(f"Ignoring unknown config section: {key}")
            continue
        if not isinstance(section, dict):
            raise ConfigurationError(f"Invalid configuration: [{key}] must be a table")

        domains = section.get('domains')
        if not isinstance(domains, list):
            raise ConfigurationError(f"Invalid configuration: [{key}] domains must be a list")
        for domain in domains:
            if not isinstance(domain, str) or not domain.strip():
                raise ConfigurationError(
                    f"Invalid configuration: [{key}] domains must be non-empty strings"
                )
        config.backends[key] = section

    if not config.backends:
        known = ', '.join(sorted(BACKEND_REGISTRY))
        raise ConfigurationError(f"No backend configured (expected one of: {known})")

    return config


def load_config(path: Optional[Path] = None) -> Config:
    """Locate (unless ``path`` is given), parse and validate the config.

    Raises:
        ConfigurationError: On any failure
    """
    if path is None:
        path = find_config_file()
    elif not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    config = validate_config(parse_config_file(path), path)
    logger.info(f"Configuration loaded from {path}: {', '.join(config.backends)}")
    return config
