import json

import httpx
import pytest

from asciiviz.datawrapper import (
    publish_chart_dw,
    update_annotations_dw,
    update_data_dw,
    update_notes_dw,
)
from asciiviz.errors import AuthError, ConfigurationError, NetworkError, RemoteError


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("DATAWRAPPER_KEY", "secret")


@pytest.fixture
def recorder():
    """Transport that records requests and answers 200."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"ok": True})

    return requests, httpx.MockTransport(handler)


def test_update_data(api_key, recorder):
    requests, transport = recorder
    assert update_data_dw("abc", "a,b\n1,2\n", transport=transport) is None
    (req,) = requests
    assert req.method == "PUT"
    assert req.url.path == "/v3/charts/abc/data"
    assert req.headers["Authorization"] == "Bearer secret"
    assert req.headers["Content-Type"] == "text/csv"
    assert req.content == b"a,b\n1,2\n"


def test_update_annotations(api_key, recorder):
    requests, transport = recorder
    notes = [{"x": "2024-01-01", "y": 5, "text": "Launch"}]
    update_annotations_dw("abc", notes, transport=transport)
    (req,) = requests
    assert req.method == "PATCH"
    assert req.url.path == "/v3/charts/abc"
    assert json.loads(req.content) == {"metadata": {"visualize": {"text-annotations": notes}}}


def test_update_notes(api_key, recorder):
    requests, transport = recorder
    update_notes_dw("abc", "Source: census", transport=transport)
    assert json.loads(requests[0].content) == {"metadata": {"annotate": {"notes": "Source: census"}}}


def test_publish_returns_response_on_request(api_key, recorder):
    requests, transport = recorder
    response = publish_chart_dw("abc", return_response=True, transport=transport)
    assert requests[0].method == "POST"
    assert requests[0].url.path == "/v3/charts/abc/publish"
    assert response.json() == {"ok": True}


def test_custom_key_variable(monkeypatch, recorder):
    monkeypatch.setenv("TEAM_DW_KEY", "team")
    requests, transport = recorder
    publish_chart_dw("abc", api_key="TEAM_DW_KEY", transport=transport)
    assert requests[0].headers["Authorization"] == "Bearer team"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_missing_key(monkeypatch, recorder, value):
    if value is None:
        monkeypatch.delenv("DATAWRAPPER_KEY", raising=False)
    else:
        monkeypatch.setenv("DATAWRAPPER_KEY", value)
    requests, transport = recorder
    with pytest.raises(AuthError, match="DATAWRAPPER_KEY"):
        publish_chart_dw("abc", transport=transport)
    assert requests == []


def test_remote_error(api_key):
    transport = httpx.MockTransport(lambda request: httpx.Response(404, text="no chart"))
    with pytest.raises(RemoteError, match="404") as exc:
        update_notes_dw("missing", "x", transport=transport)
    assert exc.value.status_code == 404
    assert exc.value.response_data == "no chart"


def test_network_error(api_key):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError, match="connection refused"):
        publish_chart_dw("abc", transport=httpx.MockTransport(handler))


def test_update_data_json_object(api_key, recorder):
    requests, transport = recorder
    markers = {"markers": [{"type": "point", "coordinates": [-73.5, 45.5]}]}
    update_data_dw("map1", markers, format="json", transport=transport)
    (req,) = requests
    assert req.method == "PUT"
    assert req.url.path == "/v3/charts/map1/data"
    assert req.headers["Content-Type"] == "application/json"
    assert json.loads(req.content) == markers


def test_update_data_json_string(api_key, recorder):
    requests, transport = recorder
    update_data_dw("map1", '{"markers": []}', format="json", transport=transport)
    assert requests[0].headers["Content-Type"] == "application/json"
    assert requests[0].content == b'{"markers": []}'


def test_update_data_csv_needs_a_string(api_key, recorder):
    requests, transport = recorder
    with pytest.raises(ConfigurationError):
        update_data_dw("abc", [{"a": 1}], transport=transport)
    with pytest.raises(ConfigurationError, match="xml"):
        update_data_dw("abc", "<a/>", format="xml", transport=transport)
    assert requests == []
