"""Shared fixtures for dnsupdate tests."""

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from dnsupdate.domain import build_extractor


@pytest.fixture(scope='session')
def extractor():
    """Suffix extractor that only uses the bundled public suffix snapshot."""
    return build_extractor(offline=True)
