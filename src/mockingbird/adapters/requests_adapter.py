"""
MockingBird requests Adapter

Transport adapter that plugs MockingBird into ``requests`` sessions.

Requests that MockingBird declines are sent through the adapter it wraps,
so real networking keeps working for anything the bundle does not cover.
"""

import io
import logging
from http.client import responses as HTTP_REASONS
from typing import Optional

import requests
from requests.adapters import BaseAdapter, HTTPAdapter
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from ..mock import InterceptionController, ProtocolClient, RequestDescriptor, SynthesizedResponse


logger = logging.getLogger("mockingbird.adapters")


class ResponseCollector(ProtocolClient):
    """Collects the controller's outcome for one request."""

    def __init__(self):
        self.response: Optional[SynthesizedResponse] = None
        self.body = b''
        self.finished = False
        self.error: Optional[Exception] = None

    def did_receive_response(self, response: SynthesizedResponse):
        self.response = response

    def did_load_data(self, data: bytes):
        self.body += data

    def did_finish_loading(self):
        self.finished = True

    def did_fail(self, error: Exception):
        self.error = error


class MockingBirdAdapter(BaseAdapter):
    """
    requests adapter answering requests from the active mock bundle.

    Example:
        session = requests.Session()
        register_in_session(session)
        set_mock_bundle("tests/bundles/httpbin")

        response = session.get("http://httpbin.org/ip")
    """

    def __init__(self, fallback: Optional[BaseAdapter] = None):
        """
        Initialize adapter.

        Args:
            fallback: Adapter for requests MockingBird declines (default HTTPAdapter)
        """
        super().__init__()
        self.fallback = fallback or HTTPAdapter()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        descriptor = RequestDescriptor(url=request.url, method=request.method)

        if not InterceptionController.can_intercept(descriptor):
            return self.fallback.send(
                request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies
            )

        collector = ResponseCollector()
        controller = InterceptionController(InterceptionController.canonicalize(descriptor), collector)
        try:
            controller.start()
        finally:
            controller.stop()

        if collector.error is not None:
            raise requests.exceptions.ConnectionError(collector.error, request=request)

        return self.build_response(request, collector)

    def build_response(self, request: requests.PreparedRequest, collector: ResponseCollector) -> requests.Response:
        """
        Build a requests Response from the collected outcome.

        Args:
            request: The prepared request that was answered
            collector: Collector holding status, headers and body

        Returns:
            Fully loaded requests.Response
        """
        synthesized = collector.response

        response = requests.Response()
        response.status_code = synthesized.status_code
        response.reason = HTTP_REASONS.get(synthesized.status_code, '')
        response.headers = CaseInsensitiveDict(synthesized.headers)
        response.encoding = get_encoding_from_headers(response.headers)
        response.url = request.url
        response.request = request
        response.connection = self

        # Body is already in memory; mark it consumed so streaming reads it too
        response._content = collector.body
        response._content_consumed = True
        response.raw = io.BytesIO(collector.body)

        logger.debug(f"Mocked {request.method} {request.url} -> {response.status_code}")
        return response

    def close(self):
        self.fallback.close()


def register_in_session(session: requests.Session) -> requests.Session:
    """
    Register MockingBird in a requests session.

    The adapters currently mounted for ``http://`` and ``https://`` become
    fallbacks, so MockingBird is asked first for every request.

    Args:
        session: Session to mock

    Returns:
        The same session
    """
    for prefix in ('https://', 'http://'):
        current = session.get_adapter(prefix)
        if isinstance(current, MockingBirdAdapter):
            continue
        session.mount(prefix, MockingBirdAdapter(fallback=current))
    return session
