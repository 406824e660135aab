"""
MockingBird Mock Module

Request interception against the active mock bundle.

This module provides:
- Request matching engine
- Response generation from bundle entries
- Process-wide active bundle state
- Interception state machine driven by host HTTP stacks
"""

from .matcher import RequestMatcher, MatchResult, find_match, query_satisfied
from .generator import ResponseGenerator, SynthesizedResponse, NOT_IMPLEMENTED_STATUS
from .state import (
    BundleHandle,
    BundleSnapshot,
    get_bundle_handle,
    set_mock_bundle,
    get_active_bundle,
    get_bundle_version,
    set_handle_all_requests,
    get_handle_all_requests,
    mock_bundle
)
from .controller import (
    InterceptionController,
    ControllerState,
    ProtocolClient,
    RequestDescriptor
)
from .config import MockingBirdConfig

__all__ = [
    # Matcher
    'RequestMatcher',
    'MatchResult',
    'find_match',
    'query_satisfied',

    # Generator
    'ResponseGenerator',
    'SynthesizedResponse',
    'NOT_IMPLEMENTED_STATUS',

    # State
    'BundleHandle',
    'BundleSnapshot',
    'get_bundle_handle',
    'set_mock_bundle',
    'get_active_bundle',
    'get_bundle_version',
    'set_handle_all_requests',
    'get_handle_all_requests',
    'mock_bundle',

    # Controller
    'InterceptionController',
    'ControllerState',
    'ProtocolClient',
    'RequestDescriptor',

    # Config
    'MockingBirdConfig',
]
