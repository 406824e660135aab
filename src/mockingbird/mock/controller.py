"""
MockingBird Interception Controller

Per-request state machine that a host HTTP stack drives.

The host first asks ``can_intercept`` whether MockingBird wants a request.
If so it creates a controller with a ProtocolClient and calls ``start``,
which resolves the match again, builds the response and delivers exactly
one terminal outcome through the client: either
response -> (data) -> finished, or failed.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional
from dataclasses import dataclass

from ..bundle import ControllerStateError, MockBundle, NoMatchFailure
from .generator import ResponseGenerator, SynthesizedResponse, NOT_IMPLEMENTED_STATUS
from .matcher import RequestMatcher, MatchResult
from .state import get_bundle_handle, get_handle_all_requests


logger = logging.getLogger("mockingbird.mock")


@dataclass(frozen=True)
class RequestDescriptor:
    """Host-neutral view of an outgoing request."""

    url: str
    method: str = "GET"


class ControllerState(Enum):
    IDLE = "idle"
    DECIDING = "deciding"
    RESPONDING = "responding"
    DONE = "done"


class ProtocolClient(ABC):
    """Callbacks through which a controller hands its outcome to the host."""

    @abstractmethod
    def did_receive_response(self, response: SynthesizedResponse):
        """Status and headers are available."""

    @abstractmethod
    def did_load_data(self, data: bytes):
        """The response body is available."""

    @abstractmethod
    def did_finish_loading(self):
        """The response is complete."""

    @abstractmethod
    def did_fail(self, error: Exception):
        """The request failed; no response will be delivered."""


def _match(bundle: Optional[MockBundle], request: RequestDescriptor) -> MatchResult:
    if bundle is None:
        return MatchResult(matched=False, reason="No mock bundle active")
    return RequestMatcher(bundle).find_match(request.method, request.url)


class InterceptionController:
    """
    Answers one intercepted request from the active mock bundle.

    Example:
        if InterceptionController.can_intercept(request):
            controller = InterceptionController(request, client)
            controller.start()
    """

    def __init__(
        self,
        request: RequestDescriptor,
        client: ProtocolClient,
        generator: Optional[ResponseGenerator] = None
    ):
        """
        Initialize controller.

        Args:
            request: Request to answer
            client: Host callbacks receiving the outcome
            generator: Optional ResponseGenerator (will create if None)
        """
        self.request = request
        self.client = client
        self.generator = generator or ResponseGenerator()
        self.state = ControllerState.IDLE

    @classmethod
    def can_intercept(cls, request: RequestDescriptor) -> bool:
        """
        Decide whether MockingBird answers a request.

        Never intercepts without an active bundle. Otherwise intercepts when
        an entry matches, or unconditionally when ``handle_all_requests`` is on.
        """
        bundle = get_bundle_handle().bundle
        if bundle is None:
            return False

        result = _match(bundle, request)
        if result.matched:
            logger.debug(f"Intercepting {request.method} {request.url}")
            return True

        handle_all = get_handle_all_requests()
        logger.debug(f"{result.reason}; {'intercepting' if handle_all else 'passing through'}")
        return handle_all

    @classmethod
    def canonicalize(cls, request: RequestDescriptor) -> RequestDescriptor:
        return request

    @classmethod
    def is_cache_equivalent(cls, a: RequestDescriptor, b: RequestDescriptor) -> bool:
        # Mocked responses are never cacheable
        return False

    def start(self):
        """
        Build and deliver the response.

        Raises:
            ControllerStateError: If the controller was already started
        """
        if self.state is not ControllerState.IDLE:
            raise ControllerStateError(f"Controller already {self.state.value}")

        self.state = ControllerState.DECIDING
        bundle = get_bundle_handle().bundle
        result = _match(bundle, self.request)

        if result.matched:
            response = self.generator.generate(result.entry, bundle.base_path)
        elif get_handle_all_requests():
            logger.warning(f"No mock for {self.request.method} {self.request.url}, answering {NOT_IMPLEMENTED_STATUS}")
            response = self.generator.generate_not_found(bundle.base_path if bundle else None)
        else:
            self.state = ControllerState.DONE
            self.client.did_fail(NoMatchFailure(self.request.method, self.request.url))
            return

        self.state = ControllerState.RESPONDING
        self.client.did_receive_response(response)
        if response.body is not None:
            self.client.did_load_data(response.body)
        self.state = ControllerState.DONE
        self.client.did_finish_loading()

    def stop(self):
        # Responses are delivered synchronously by start(); nothing to cancel
        pass
