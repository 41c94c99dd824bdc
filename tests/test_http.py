import pytest
import requests

from poi_curation import http as http_module
from poi_curation.http import HttpClient, RequestMetrics


class FakeResponse:
    def __init__(self, status_code, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.headers = headers or {}

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class SequenceSession:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(http_module.time, "sleep", lambda s: recorded.append(s))
    return recorded


def make_client(outcomes, retry_max=3):
    client = HttpClient("dummy", timeout=1, retry_max=retry_max, backoff_base=0.0, backoff_max=2.0)
    client.session = SequenceSession(outcomes)
    return client


def test_request_metrics_inc():
    metrics = RequestMetrics()
    metrics.inc("network")
    metrics.inc("retry")
    metrics.inc("failure")
    assert (metrics.network_calls, metrics.retries, metrics.failures) == (1, 1, 1)
    with pytest.raises(ValueError):
        metrics.inc("cache")


def test_retries_on_server_error_then_succeeds(sleeps):
    client = make_client([FakeResponse(503), FakeResponse(200, {"places": []})])
    assert client.post_json("https://example.test", {}) == {"places": []}
    assert client.metrics.network_calls == 2
    assert client.metrics.retries == 1
    assert client.metrics.failures == 0
    assert len(sleeps) == 1


def test_retry_after_header_is_honoured_and_capped(sleeps):
    client = make_client(
        [FakeResponse(429, headers={"Retry-After": "30"}), FakeResponse(200, {"ok": True})]
    )
    assert client.post_json("https://example.test", {}) == {"ok": True}
    assert sleeps == [2.0]


def test_non_retryable_status_raises(sleeps):
    client = make_client([FakeResponse(400)])
    with pytest.raises(requests.HTTPError):
        client.post_json("https://example.test", {})
    assert client.metrics.failures == 1
    assert client.session.calls == 1
    assert sleeps == []


def test_request_exceptions_exhaust_retries(sleeps):
    errors = [requests.ConnectionError("boom") for _ in range(3)]
    client = make_client(errors)
    with pytest.raises(requests.ConnectionError):
        client.post_json("https://example.test", {})
    assert client.metrics.retries == 2
    assert client.metrics.failures == 1
    assert len(sleeps) == 2


def test_persistent_server_error_raises_http_error(sleeps):
    client = make_client([FakeResponse(500), FakeResponse(502)], retry_max=2)
    with pytest.raises(requests.HTTPError):
        client.post_json("https://example.test", {})
    assert client.metrics.failures == 1


def test_unexpected_success_status_raises_http_error(sleeps):
    client = make_client([FakeResponse(204)])
    with pytest.raises(requests.HTTPError):
        client.post_json("https://example.test", {})
    assert client.metrics.failures == 1
    assert client.session.calls == 1
