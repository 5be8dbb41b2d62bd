from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from lms_admin.app.infrastructure.logging.logger import get_logger, log_event
from lms_admin.app.listing.data_provider import PageRequest, PageResult, page_rows
from lms_admin.app.listing_cache import ListingCache
from lms_admin.app.ui.columns import ColumnDef
from lms_admin.clients.lms_client_sdk.resources_client import ResourcesClient


class ApiDataProvider:
    """Pages a whole API collection in memory; the endpoints are not paged server side.

    With ``parent=("courses", course_id)`` the rows come from the matching
    ``ByCourse``-style listing and are cached under that parent id.
    """

    def __init__(
        self,
        resources_client: ResourcesClient,
        resource: str,
        *,
        parent: tuple[str, str] | None = None,
        access_token: str | None = None,
        cache: ListingCache[dict[str, Any]] | None = None,
        search_keys: Sequence[str] | None = None,
        columns: Sequence[ColumnDef] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.resources_client = resources_client
        self.resource = resource
        self.parent = parent
        self.access_token = access_token
        self.cache: ListingCache[dict[str, Any]] = cache or ListingCache()
        self.search_keys = list(search_keys) if search_keys else None
        self.columns = list(columns or [])
        self._logger = logger or get_logger("lms_admin.listing")

    @property
    def scope(self) -> str | None:
        return f"{self.parent[0]}:{self.parent[1]}" if self.parent else None

    def rows(self) -> list[dict[str, Any]]:
        return self.cache.get_or_load(self.resource, self._load, scope=self.scope)

    def fetch_page(self, request: PageRequest) -> PageResult:
        return page_rows(self.rows(), request, self.search_keys, self.columns)

    def refresh(self) -> None:
        self.cache.invalidate(self.resource, scope=self.scope)

    def _load(self) -> list[dict[str, Any]]:
        if self.parent:
            parent, parent_id = self.parent
            rows = self.resources_client.list_by_parent(
                self.resource, parent, parent_id, access_token=self.access_token
            )
        else:
            rows = self.resources_client.list_resource(self.resource, access_token=self.access_token)
        log_event(
            self._logger,
            "listing",
            "collection_loaded",
            "success",
            resource=self.resource,
            scope=self.scope,
            count=len(rows),
        )
        return rows
