"""
Tests for the MockingBird requests adapter

Tests intercepting requests made through a real requests.Session, including
pass-through to the wrapped adapter for declined requests.
"""

import pytest
import requests
from requests.adapters import BaseAdapter, HTTPAdapter

from mockingbird.adapters import MockingBirdAdapter, register_in_session
from mockingbird.bundle import NoMatchFailure
from mockingbird.mock import InterceptionController, set_handle_all_requests, set_mock_bundle


class RecordingAdapter(BaseAdapter):
    """Stand-in for the network: records requests and answers 299."""

    def __init__(self):
        super().__init__()
        self.sent = []
        self.closed = False

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        response = requests.Response()
        response.status_code = 299
        response._content = b'network'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        self.closed = True


@pytest.fixture
def network():
    return RecordingAdapter()


@pytest.fixture
def session(network):
    session = requests.Session()
    session.mount('http://', network)
    session.mount('https://', network)
    register_in_session(session)
    return session


@pytest.fixture
def httpbin(httpbin_bundle_path):
    return set_mock_bundle(httpbin_bundle_path)


class TestRegisterInSession:
    """Test registering the adapter."""

    def test_wraps_existing_adapters(self, session, network):
        """Test MockingBird is asked first and keeps the old adapter as fallback."""
        for prefix in ('http://', 'https://'):
            adapter = session.get_adapter(prefix + 'httpbin.org/')
            assert isinstance(adapter, MockingBirdAdapter)
            assert adapter.fallback is network

    def test_registering_twice_does_not_nest(self, session, network):
        """Test a second registration is a no-op."""
        register_in_session(session)

        adapter = session.get_adapter('http://httpbin.org/')
        assert adapter.fallback is network

    def test_default_fallback(self):
        """Test a fresh session falls back to HTTPAdapter."""
        session = register_in_session(requests.Session())
        assert isinstance(session.get_adapter('https://example.com/').fallback, HTTPAdapter)

    def test_close_closes_fallback(self, network):
        """Test closing the adapter closes the wrapped one."""
        MockingBirdAdapter(fallback=network).close()
        assert network.closed is True


class TestMockedRequests:
    """Test requests answered from the bundle."""

    def test_mocked_json(self, session, httpbin, network):
        """Test a matching request is answered locally."""
        response = session.get('http://httpbin.org/ip')

        assert response.status_code == 200
        assert response.json() == {'origin': '127.0.0.1'}
        assert response.headers['content-type'] == 'application/json'
        assert response.headers['Content-Length'] == str(len(response.content))
        assert response.url == 'http://httpbin.org/ip'
        assert response.reason == 'OK'
        assert network.sent == []

    def test_query_params(self, session, httpbin):
        """Test params passed through requests are matched."""
        exact = session.get('http://httpbin.org/get', params={'arg1': 'test', 'arg2': 'test'})
        other = session.get('http://httpbin.org/get', params={'arg1': 'foobar'})

        assert exact.json()['args'] == {'arg1': 'test', 'arg2': 'test'}
        assert other.headers['X-Wildcard'] == 'arg1'

    def test_post_without_body(self, session, httpbin):
        """Test an entry without a file gives an empty body."""
        response = session.post('https://httpbin.org/post', data={'ignored': 'yes'})

        assert response.status_code == 201
        assert response.content == b''
        assert response.headers['X-Mock'] == 'created'
        assert 'Content-Length' not in response.headers

    def test_streamed_response(self, session, httpbin):
        """Test stream=True still yields the body."""
        response = session.get('http://httpbin.org/ip', stream=True)

        assert b''.join(response.iter_content(chunk_size=4)) == response.content
        assert b'127.0.0.1' in response.content


class TestUnmatchedRequests:
    """Test fallback and failure behavior."""

    def test_no_bundle_goes_to_network(self, session, network):
        """Test everything passes through when mocking is off."""
        response = session.get('http://httpbin.org/ip')

        assert response.status_code == 299
        assert len(network.sent) == 1

    def test_unmatched_goes_to_network(self, session, httpbin, network):
        """Test unmatched requests pass through by default."""
        response = session.get('http://httpbin.org/ip', params={'x': '1'})

        assert response.content == b'network'
        assert network.sent[0].url == 'http://httpbin.org/ip?x=1'

    def test_handle_all_returns_501(self, session, httpbin, network):
        """Test handle_all_requests answers unmatched requests with 501."""
        set_handle_all_requests(True)

        response = session.get('http://httpbin.org/html')

        assert response.status_code == 501
        assert response.headers['Content-Type'] == 'text/plain'
        assert httpbin.base_path in response.text
        assert network.sent == []

    def test_failure_raises_connection_error(self, httpbin, monkeypatch):
        """Test a claimed request that then fails to match surfaces as ConnectionError."""
        monkeypatch.setattr(InterceptionController, 'can_intercept', classmethod(lambda cls, request: True))
        adapter = MockingBirdAdapter(fallback=RecordingAdapter())
        request = requests.Request('GET', 'http://httpbin.org/ip?x=1').prepare()

        with pytest.raises(requests.exceptions.ConnectionError) as exc_info:
            adapter.send(request)

        assert isinstance(exc_info.value.args[0], NoMatchFailure)
        assert exc_info.value.request is request
