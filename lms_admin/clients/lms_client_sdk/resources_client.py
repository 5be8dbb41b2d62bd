from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from lms_admin.clients.lms_client_sdk.http_client import HttpClient
from lms_admin.clients.lms_client_sdk.normalizers import normalize_collection, normalize_record

RESOURCE_PATHS = {
    "students": "Students",
    "courses": "Courses",
    "instructors": "Instructors",
    "modules": "Modules",
    "lectures": "Lectures",
    "exams": "Exams",
    "questions": "Questions",
    "answers": "Answers",
    "enrollments": "Enrollments",
}

# child resource -> parent resource -> path segment of the "by parent" listing
PARENT_LISTINGS = {
    "modules": {"courses": "ByCourse"},
    "lectures": {"modules": "ByModule"},
    "answers": {"questions": "ByQuestion"},
    "exams": {"courses": "ByCourse"},
}


class ResourcesClient:
    """Read-only access to the collection endpoints feeding the admin tables."""

    def __init__(self, http_client: HttpClient, clock: Callable[[], float] | None = None) -> None:
        self.http_client = http_client
        self._clock = clock or time.time

    def list_resource(self, resource: str, access_token: str | None = None) -> list[dict[str, Any]]:
        payload = self.http_client.request(
            "GET",
            resource_path(resource),
            token=access_token,
            params=self._cache_buster(),
        )
        return normalize_collection(payload)

    def get_resource(self, resource: str, resource_id: str, access_token: str | None = None) -> dict[str, Any] | None:
        payload = self.http_client.request(
            "GET",
            f"{resource_path(resource)}/{resource_id}",
            token=access_token,
            params=self._cache_buster(),
        )
        return normalize_record(payload)

    def list_by_parent(
        self,
        resource: str,
        parent: str,
        parent_id: str,
        access_token: str | None = None,
    ) -> list[dict[str, Any]]:
        segment = PARENT_LISTINGS.get(resource, {}).get(parent)
        if segment is None:
            raise ValueError(f"{resource} cannot be listed by {parent}")
        payload = self.http_client.request(
            "GET",
            f"{resource_path(resource)}/{segment}/{parent_id}",
            token=access_token,
            params=self._cache_buster(),
        )
        return normalize_collection(payload)

    def _cache_buster(self) -> dict[str, Any]:
        return {"_t": int(self._clock() * 1000)}


def resource_path(resource: str) -> str:
    try:
        return RESOURCE_PATHS[resource]
    except KeyError:
        raise ValueError(f"Unknown resource: {resource}") from None
