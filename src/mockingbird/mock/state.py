"""
MockingBird Process State

Process-wide active bundle and the ``handle_all_requests`` toggle.

The active bundle lives in a BundleHandle as an immutable snapshot that is
replaced with a single attribute assignment. Readers never lock; they see
either the old or the new snapshot. Installs are serialized by a lock.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, NamedTuple, Optional

from ..bundle import MockBundle, load_bundle


logger = logging.getLogger("mockingbird.mock")


class BundleSnapshot(NamedTuple):
    """Active bundle together with the install counter that produced it."""

    bundle: Optional[MockBundle]
    version: int


class BundleHandle:
    """
    Atomically replaceable reference to the active bundle.

    Example:
        handle = BundleHandle()
        handle.install("tests/bundles/httpbin")
        snapshot = handle.snapshot
        print(snapshot.version, len(snapshot.bundle))
    """

    def __init__(self):
        self._snapshot = BundleSnapshot(bundle=None, version=0)
        self._install_lock = threading.Lock()

    @property
    def snapshot(self) -> BundleSnapshot:
        return self._snapshot

    @property
    def bundle(self) -> Optional[MockBundle]:
        return self._snapshot.bundle

    def install(self, bundle_path: Optional[str]) -> Optional[MockBundle]:
        """
        Load a bundle and make it active, or clear the active bundle.

        The bundle is fully loaded before it replaces the current one, so a
        failed load leaves the previous bundle active.

        Args:
            bundle_path: Bundle directory, or None to clear

        Returns:
            The newly active bundle (None when cleared)

        Raises:
            BundleError: If the bundle cannot be loaded
        """
        with self._install_lock:
            bundle = load_bundle(bundle_path) if bundle_path is not None else None
            self._replace(bundle)
            return bundle

    def replace(self, bundle: Optional[MockBundle]):
        """Install an already loaded bundle (or None)."""
        with self._install_lock:
            self._replace(bundle)

    def _replace(self, bundle: Optional[MockBundle]):
        self._snapshot = BundleSnapshot(bundle=bundle, version=self._snapshot.version + 1)
        if bundle is None:
            logger.info("Mock bundle cleared")
        else:
            logger.info(f"Mock bundle active: {bundle.base_path} ({len(bundle)} entries)")


_handle = BundleHandle()
_handle_all_requests = False


def get_bundle_handle() -> BundleHandle:
    return _handle


def set_mock_bundle(bundle_path: Optional[str]) -> Optional[MockBundle]:
    """
    Set the mock bundle used for all intercepted requests.

    Args:
        bundle_path: Path to the bundle directory, or None to disable mocking

    Returns:
        The active bundle after the call

    Raises:
        BundleNotFoundError: If the path is missing or not a directory
        InvalidManifestError: If bundle.json is malformed
        InvalidBundleError: If the bundle cannot be read
    """
    return _handle.install(bundle_path)


def get_active_bundle() -> Optional[MockBundle]:
    return _handle.bundle


def get_bundle_version() -> int:
    """Number of bundle installs and clears since process start."""
    return _handle.snapshot.version


def set_handle_all_requests(enabled: bool):
    """
    Claim every request, answering unmatched ones with a 501.

    When off, unmatched requests pass through to the real network.
    """
    global _handle_all_requests
    _handle_all_requests = bool(enabled)


def get_handle_all_requests() -> bool:
    return _handle_all_requests


@contextmanager
def mock_bundle(bundle_path: Optional[str], handle_all_requests: Optional[bool] = None) -> Iterator[Optional[MockBundle]]:
    """
    Activate a bundle for the duration of a block.

    The previously active bundle and ``handle_all_requests`` setting are
    restored on exit.

    Args:
        bundle_path: Bundle directory, or None to disable mocking in the block
        handle_all_requests: Optional override of the toggle inside the block

    Example:
        with mock_bundle("tests/bundles/httpbin", handle_all_requests=True):
            response = session.get("http://httpbin.org/ip")
    """
    previous_bundle = _handle.bundle
    previous_flag = _handle_all_requests

    bundle = set_mock_bundle(bundle_path)
    if handle_all_requests is not None:
        set_handle_all_requests(handle_all_requests)
    try:
        yield bundle
    finally:
        _handle.replace(previous_bundle)
        set_handle_all_requests(previous_flag)
