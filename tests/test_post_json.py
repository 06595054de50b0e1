import io
import json

import pytest
import requests
from requests.adapters import BaseAdapter

from toolkit import RemotePostError, post_json


class StubAdapter(BaseAdapter):
    """Answers every request locally with a canned response."""

    def __init__(self, status_code=200, body=b'{"ok": true}', exc=None):
        super().__init__()
        self.status_code = status_code
        self.body = body
        self.exc = exc
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append(request)
        if self.exc is not None:
            raise self.exc
        response = requests.Response()
        response.status_code = self.status_code
        response.headers["Content-Type"] = "application/json"
        response.raw = io.BytesIO(self.body)
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


def _session(adapter):
    session = requests.Session()
    session.mount("http://", adapter)
    return session


def test_post_json():
    adapter = StubAdapter(status_code=202)

    response, status_code = post_json("http://remote.test/hook", {"event": "signup", "id": 7}, _session(adapter))

    assert status_code == 202
    assert response.json() == {"ok": True}
    [sent] = adapter.sent
    assert sent.method == "POST"
    assert sent.url == "http://remote.test/hook"
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.body) == {"event": "signup", "id": 7}


def test_post_json_returns_error_statuses():
    adapter = StubAdapter(status_code=500, body=b'{"error": true}')

    _, status_code = post_json("http://remote.test/hook", [], _session(adapter))

    assert status_code == 500


def test_post_json_transport_failure():
    adapter = StubAdapter(exc=requests.ConnectionError("connection refused"))

    with pytest.raises(RemotePostError) as exc_info:
        post_json("http://remote.test/hook", {"a": 1}, _session(adapter))

    assert exc_info.value.status_code == 400
    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_post_json_unencodable_payload():
    adapter = StubAdapter()

    with pytest.raises(RemotePostError) as exc_info:
        post_json("http://remote.test/hook", {"a": object()}, _session(adapter))

    assert exc_info.value.status_code == 400
    assert adapter.sent == []


def test_post_json_default_client_bad_url():
    with pytest.raises(RemotePostError):
        post_json("not-a-url", {"a": 1})
