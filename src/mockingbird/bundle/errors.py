"""
MockingBird Errors

Exception taxonomy for bundle loading and request interception.
"""

from typing import Optional


class MockingBirdError(Exception):
    """Base class for all MockingBird errors."""


class BundleError(MockingBirdError):
    """Base class for errors raised while loading a mock bundle."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class BundleNotFoundError(BundleError):
    """The bundle path does not exist or is not a directory."""


class InvalidManifestError(BundleError):
    """bundle.json is malformed or an entry is missing a required field."""


class InvalidBundleError(BundleError):
    """Any other failure while loading a bundle, e.g. an unreadable manifest."""


class NoMatchFailure(MockingBirdError):
    """
    No bundle entry matched an intercepted request.

    Only raised through the host's failure callback when
    ``handle_all_requests`` is off, telling the host to treat the request
    as failed.
    """

    domain = 'mockingbird'
    code = 1000

    def __init__(self, method: str, url: str):
        super().__init__(f"No mock bundle entry for {method} {url}")
        self.method = method
        self.url = url


class ControllerStateError(MockingBirdError):
    """An interception controller was driven out of order."""
