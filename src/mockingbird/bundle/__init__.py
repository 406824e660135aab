"""
MockingBird Bundle Module

Mock bundle model, manifest parsing and the error taxonomy.
"""

from .errors import (
    MockingBirdError,
    BundleError,
    BundleNotFoundError,
    InvalidManifestError,
    InvalidBundleError,
    NoMatchFailure,
    ControllerStateError
)
from .models import MockEntry, MockBundle
from .loader import BundleLoader, load_bundle, parse_entry, MANIFEST_NAME

__all__ = [
    'MockingBirdError',
    'BundleError',
    'BundleNotFoundError',
    'InvalidManifestError',
    'InvalidBundleError',
    'NoMatchFailure',
    'ControllerStateError',
    'MockEntry',
    'MockBundle',
    'BundleLoader',
    'load_bundle',
    'parse_entry',
    'MANIFEST_NAME',
]
