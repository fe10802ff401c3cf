"""HTTP JSON client for the ranked influencer API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict

import httpx
import structlog

from ..config import HiveConfig
from ..errors import FetchError


@dataclass(slots=True)
class FetchRequest:
    """Input for the client."""

    url: str
    method: str = "GET"
    params: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    timeout: float | None = None


@dataclass(slots=True)
class FetchResponse:
    """Standardised response wrapper."""

    url: str
    status_code: int
    payload: Any
    headers: Dict[str, str]
    raw: httpx.Response | None = field(repr=False, default=None)


class ApiClient:
    """Issue authenticated JSON requests; any failure raises ``FetchError``."""

    def __init__(
        self,
        config: HiveConfig,
        logger: structlog.BoundLogger | None = None,
        api_key: str | None = None,
    ) -> None:
        self.config = config
        self.logger = logger or structlog.get_logger("group_forge.fetcher")
        self._api_key = api_key if api_key is not None else os.environ.get(config.api_key_env)
        if not self._api_key:
            self.logger.warning("api_key_missing", env=config.api_key_env)
        self._client = httpx.Client(follow_redirects=True, timeout=config.timeout)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def close(self) -> None:
        self._client.close()

    def fetch(self, request: FetchRequest) -> FetchResponse:
        headers = dict(request.headers or {})
        if self._api_key:
            headers.setdefault("Authorization", f"Token {self._api_key}")
        try:
            response = self._client.request(
                method=request.method,
                url=request.url,
                params=request.params,
                headers=headers,
                timeout=request.timeout or self.config.timeout,
            )
        except httpx.HTTPError as exc:
            self.logger.warning("fetch_error", url=request.url, error=str(exc))
            raise FetchError(f"Request failed: {request.url}", url=request.url) from exc
        if self._is_failure(response):
            self.logger.warning("fetch_error", url=request.url, status=response.status_code)
            raise FetchError(
                f"Unexpected status {response.status_code}: {request.url}",
                url=request.url,
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"Response is not JSON: {request.url}", url=request.url) from exc
        return FetchResponse(
            url=str(response.url),
            status_code=response.status_code,
            payload=payload,
            headers=dict(response.headers),
            raw=response,
        )

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return self.fetch(FetchRequest(url=url, params=params)).payload

    @staticmethod
    def _is_failure(response: Any) -> bool:
        status_code = getattr(response, "status_code", 0)
        return status_code >= 400


__all__ = ["ApiClient", "FetchRequest", "FetchResponse"]
