"""
MockingBird

Answers outgoing HTTP(S) requests from a declarative mock bundle instead of
the network, so client code can be tested deterministically through its real
HTTP call sites.

Example:
    import requests
    import mockingbird

    session = requests.Session()
    mockingbird.register_in_session(session)
    mockingbird.set_mock_bundle("tests/bundles/httpbin")

    response = session.get("http://httpbin.org/ip")
"""

from .bundle import (
    MockingBirdError,
    BundleError,
    BundleNotFoundError,
    InvalidManifestError,
    InvalidBundleError,
    NoMatchFailure,
    ControllerStateError,
    MockEntry,
    MockBundle,
    BundleLoader,
    load_bundle
)
from .mock import (
    RequestMatcher,
    MatchResult,
    find_match,
    ResponseGenerator,
    SynthesizedResponse,
    InterceptionController,
    ProtocolClient,
    RequestDescriptor,
    MockingBirdConfig,
    set_mock_bundle,
    get_active_bundle,
    set_handle_all_requests,
    get_handle_all_requests,
    mock_bundle
)
from .adapters import MockingBirdAdapter, MockingBirdTransport, register_in_session, create_client

__all__ = [
    # Errors
    'MockingBirdError',
    'BundleError',
    'BundleNotFoundError',
    'InvalidManifestError',
    'InvalidBundleError',
    'NoMatchFailure',
    'ControllerStateError',

    # Bundle
    'MockEntry',
    'MockBundle',
    'BundleLoader',
    'load_bundle',

    # Interception
    'RequestMatcher',
    'MatchResult',
    'find_match',
    'ResponseGenerator',
    'SynthesizedResponse',
    'InterceptionController',
    'ProtocolClient',
    'RequestDescriptor',
    'MockingBirdConfig',
    'set_mock_bundle',
    'get_active_bundle',
    'set_handle_all_requests',
    'get_handle_all_requests',
    'mock_bundle',

    # Hosts
    'MockingBirdAdapter',
    'MockingBirdTransport',
    'register_in_session',
    'create_client',
]

__version__ = '1.0.0'
