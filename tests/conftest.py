"""
Shared fixtures for MockingBird tests.
"""

import json
from pathlib import Path

import pytest

from mockingbird.mock import set_mock_bundle, set_handle_all_requests


HTTPBIN_BUNDLE = Path(__file__).parent / 'bundles' / 'httpbin'


@pytest.fixture(autouse=True)
def reset_state():
    """Start and end every test with mocking disabled."""
    set_mock_bundle(None)
    set_handle_all_requests(False)
    yield
    set_mock_bundle(None)
    set_handle_all_requests(False)


@pytest.fixture
def httpbin_bundle_path():
    """Path to the checked-in httpbin sample bundle."""
    return str(HTTPBIN_BUNDLE)


@pytest.fixture
def make_bundle(tmp_path):
    """
    Factory writing a bundle directory.

    Usage:
        path = make_bundle([...entries...], files={'body.json': b'...'})
    """
    counter = {'n': 0}

    def _make(entries, files=None):
        counter['n'] += 1
        bundle_dir = tmp_path / f"bundle{counter['n']}"
        bundle_dir.mkdir()
        (bundle_dir / 'bundle.json').write_text(json.dumps(entries), encoding='utf-8')
        for name, content in (files or {}).items():
            target = bundle_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        return str(bundle_dir)

    return _make
