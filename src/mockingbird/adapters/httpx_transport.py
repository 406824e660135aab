"""
MockingBird httpx Transport

Transport that plugs MockingBird into ``httpx.Client``.
"""

import logging
from typing import Any, Optional

import httpx

from ..mock import InterceptionController, RequestDescriptor
from .requests_adapter import ResponseCollector


logger = logging.getLogger("mockingbird.adapters")


class MockingBirdTransport(httpx.BaseTransport):
    """
    httpx transport answering requests from the active mock bundle.

    Example:
        client = httpx.Client(transport=MockingBirdTransport())
        set_mock_bundle("tests/bundles/httpbin")

        response = client.get("http://httpbin.org/ip")
    """

    def __init__(self, fallback: Optional[httpx.BaseTransport] = None):
        """
        Initialize transport.

        Args:
            fallback: Transport for requests MockingBird declines (default HTTPTransport)
        """
        self.fallback = fallback or httpx.HTTPTransport()

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        descriptor = RequestDescriptor(url=str(request.url), method=request.method)

        if not InterceptionController.can_intercept(descriptor):
            return self.fallback.handle_request(request)

        collector = ResponseCollector()
        controller = InterceptionController(InterceptionController.canonicalize(descriptor), collector)
        try:
            controller.start()
        finally:
            controller.stop()

        if collector.error is not None:
            raise httpx.ConnectError(str(collector.error), request=request)

        synthesized = collector.response
        logger.debug(f"Mocked {request.method} {request.url} -> {synthesized.status_code}")
        return httpx.Response(
            status_code=synthesized.status_code,
            headers=synthesized.headers,
            content=collector.body,
            request=request
        )

    def close(self):
        self.fallback.close()


def create_client(fallback: Optional[httpx.BaseTransport] = None, **kwargs: Any) -> httpx.Client:
    """
    Create an httpx client with MockingBird installed.

    Args:
        fallback: Transport for declined requests
        **kwargs: Passed through to httpx.Client

    Returns:
        httpx.Client whose requests go through MockingBird first
    """
    return httpx.Client(transport=MockingBirdTransport(fallback=fallback), **kwargs)
