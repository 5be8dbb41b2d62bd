from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lms_admin.clients.lms_client_sdk.config import SDKConfig, normalize_base_url

ENV_PREFIX = "LMS_"
TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def read_env(env_file: str = ".env") -> dict[str, str]:
    """Collect ``LMS_*`` settings; the process environment wins over the file.

    The file is read as plain ``KEY=value`` lines (an ``export`` prefix and
    surrounding quotes are accepted). ``os.environ`` is left untouched.
    """
    values: dict[str, str] = {}
    path = Path(env_file)
    if path.is_file():
        for raw_line in path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip().removeprefix("export ").strip()
            key, sep, value = line.partition("=")
            key = key.strip()
            if not sep or not key.startswith(ENV_PREFIX):
                continue
            values[key] = value.strip().strip("'\"")
    values.update({key: value for key, value in os.environ.items() if key.startswith(ENV_PREFIX)})
    return values


def _flag(values: Mapping[str, str], key: str, default: bool) -> bool:
    raw = values.get(key)
    if raw is None or not raw.strip():
        return default
    normalized = raw.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{key} must be one of {sorted(TRUE_VALUES | FALSE_VALUES)}, got {raw!r}")


def _number(values: Mapping[str, str], key: str, default: Any, cast: Callable[[str], Any] = int) -> Any:
    raw = values.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class TableConfig:
    items_per_page: int = 10
    page_window: int = 5
    show_checkboxes: bool = True
    cache_ttl_seconds: float = 20.0

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "TableConfig":
        return cls.from_values(read_env(env_file))

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "TableConfig":
        config = cls(
            items_per_page=_number(values, "LMS_TABLE_ITEMS_PER_PAGE", 10),
            page_window=_number(values, "LMS_TABLE_PAGE_WINDOW", 5),
            show_checkboxes=_flag(values, "LMS_TABLE_SHOW_CHECKBOXES", True),
            cache_ttl_seconds=_number(values, "LMS_LISTING_CACHE_TTL_SECONDS", 20.0, float),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.items_per_page < 1:
            raise ValueError("LMS_TABLE_ITEMS_PER_PAGE must be >= 1")
        if self.page_window < 1:
            raise ValueError("LMS_TABLE_PAGE_WINDOW must be >= 1")
        if self.cache_ttl_seconds <= 0:
            raise ValueError("LMS_LISTING_CACHE_TTL_SECONDS must be greater than 0")


@dataclass(frozen=True)
class AppConfig:
    table: TableConfig = field(default_factory=TableConfig)
    api: SDKConfig = field(default_factory=SDKConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "AppConfig":
        values = read_env(env_file)
        api = SDKConfig(
            base_url=normalize_base_url(values.get("LMS_BASE_URL")),
            timeout_seconds=_number(values, "LMS_TIMEOUT_SECONDS", 30.0, float),
            verify_ssl=_flag(values, "LMS_VERIFY_SSL", True),
            retry_max_attempts=_number(values, "LMS_RETRY_MAX_ATTEMPTS", 3),
            retry_backoff_ms=_number(values, "LMS_RETRY_BACKOFF_MS", 250),
        )
        api.validate()
        config = cls(
            table=TableConfig.from_values(values),
            api=api,
            log_level=values.get("LMS_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LMS_LOG_LEVEL must be a logging level name, got {self.log_level!r}")
