from __future__ import annotations

import httpx
import pytest

from group_forge.config import HiveConfig
from group_forge.engine.fetcher import ApiClient, FetchRequest
from group_forge.errors import FetchError


def _respond(status: int = 200, **kwargs):
    def fake_request(**request_kwargs):
        request = httpx.Request(request_kwargs["method"], request_kwargs["url"])
        return httpx.Response(status, request=request, **kwargs)

    return fake_request


def test_client_sends_token_header(monkeypatch: pytest.MonkeyPatch) -> None:
    client = ApiClient(HiveConfig(timeout=7.5), api_key="secret")
    captured: dict = {}

    def fake_request(**kwargs):
        captured.update(kwargs)
        request = httpx.Request(kwargs["method"], kwargs["url"])
        return httpx.Response(200, request=request, json={"ok": True})

    monkeypatch.setattr(client._client, "request", fake_request)
    response = client.fetch(FetchRequest(url="https://api.example/items", params={"page": 0}))
    client.close()

    assert captured["headers"]["Authorization"] == "Token secret"
    assert captured["params"] == {"page": 0}
    assert captured["timeout"] == 7.5
    assert response.status_code == 200
    assert response.payload == {"ok": True}


def test_client_reads_key_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUSTOM_HIVE_KEY", "from-env")
    client = ApiClient(HiveConfig(api_key_env="CUSTOM_HIVE_KEY"))
    captured: dict = {}

    def fake_request(**kwargs):
        captured.update(kwargs)
        return httpx.Response(200, request=httpx.Request("GET", kwargs["url"]), json=[])

    monkeypatch.setattr(client._client, "request", fake_request)
    assert client.get_json("https://api.example/") == []
    client.close()
    assert captured["headers"]["Authorization"] == "Token from-env"


def test_missing_key_omits_header(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HIVE_API_KEY", raising=False)
    client = ApiClient(HiveConfig())
    captured: dict = {}

    def fake_request(**kwargs):
        captured.update(kwargs)
        return httpx.Response(200, request=httpx.Request("GET", kwargs["url"]), json={})

    monkeypatch.setattr(client._client, "request", fake_request)
    client.get_json("https://api.example/")
    client.close()
    assert "Authorization" not in captured["headers"]


@pytest.mark.parametrize("status", [401, 404, 500])
def test_error_status_raises_fetch_error(monkeypatch: pytest.MonkeyPatch, status: int) -> None:
    client = ApiClient(HiveConfig(), api_key="k")
    monkeypatch.setattr(client._client, "request", _respond(status, json={"detail": "nope"}))
    with pytest.raises(FetchError) as excinfo:
        client.get_json("https://api.example/fail")
    client.close()
    assert excinfo.value.status_code == status
    assert excinfo.value.url == "https://api.example/fail"


def test_transport_error_raises_fetch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    client = ApiClient(HiveConfig(), api_key="k")

    def boom(**_kwargs):
        raise httpx.ConnectError("unreachable")

    monkeypatch.setattr(client._client, "request", boom)
    with pytest.raises(FetchError):
        client.get_json("https://api.example/")
    client.close()


def test_non_json_body_raises_fetch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    client = ApiClient(HiveConfig(), api_key="k")
    monkeypatch.setattr(client._client, "request", _respond(200, text="<html>not json</html>"))
    with pytest.raises(FetchError):
        client.get_json("https://api.example/")
    client.close()


def test_fetcher_failure_classification() -> None:
    class Dummy:
        def __init__(self, status_code):
            self.status_code = status_code

    assert ApiClient._is_failure(Dummy(500))
    assert ApiClient._is_failure(Dummy(401))
    assert not ApiClient._is_failure(Dummy(200))
