from __future__ import annotations

import time
from typing import Any

import httpx

from lms_admin.clients.lms_client_sdk.config import SDKConfig
from lms_admin.clients.lms_client_sdk.errors import ApiError

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class HttpClient:
    def __init__(
        self,
        config: SDKConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or SDKConfig()
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )
        self._retry_max_attempts = max(1, self.config.retry_max_attempts)
        self._retry_backoff_ms = max(0, self.config.retry_backoff_ms)

    def request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json_body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        request_headers = {**NO_CACHE_HEADERS, **(headers or {})}
        if token:
            request_headers["Authorization"] = f"Bearer {token}"

        # base_url keeps its trailing slash, paths stay relative to it
        normalized_path = path.lstrip("/")
        allow_retry = method.upper() == "GET"

        for attempt in range(1, self._retry_max_attempts + 1):
            try:
                response = self._client.request(
                    method=method,
                    url=normalized_path,
                    json=json_body,
                    headers=request_headers,
                    params=params,
                )
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if (not allow_retry) or attempt >= self._retry_max_attempts:
                    raise ApiError(
                        code="NETWORK_ERROR",
                        message="Network error while calling the LMS API",
                        details=str(exc),
                    ) from exc
                self._backoff(attempt)
                continue

            if response.status_code >= 400:
                error = ApiError.from_http_response(response)
                if allow_retry and self._is_retryable_status(error.status_code) and attempt < self._retry_max_attempts:
                    self._backoff(attempt)
                    continue
                raise error

            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                return None

        raise ApiError(code="NETWORK_ERROR", message="Network error while calling the LMS API", details="retry exhausted")

    def close(self) -> None:
        self._client.close()

    def _backoff(self, attempt: int) -> None:
        time.sleep((self._retry_backoff_ms * attempt) / 1000)

    @staticmethod
    def _is_retryable_status(status_code: int | None) -> bool:
        return bool(status_code and 500 <= status_code <= 599)
