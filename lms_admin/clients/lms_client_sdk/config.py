from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://nafzill-001-site1.ltempurl.com/api/"


@dataclass(frozen=True)
class SDKConfig:
    """Connection settings for the LMS REST API.

    Loading from the environment lives in the application layer
    (``lms_admin.app.config.AppConfig``); the SDK only needs the values.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 250

    def validate(self) -> None:
        if not self.base_url.endswith("/"):
            raise ValueError("base_url must end with '/' so endpoint paths stay relative to /api/")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be greater than 0")
        if self.retry_max_attempts < 1:
            raise ValueError("retry_max_attempts must be >= 1")
        if self.retry_backoff_ms < 0:
            raise ValueError("retry_backoff_ms must be >= 0")


def normalize_base_url(value: str | None) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return DEFAULT_BASE_URL
    return normalized if normalized.endswith("/") else f"{normalized}/"
