import httpx
import pytest

from lms_admin.app.listing.api_provider import ApiDataProvider
from lms_admin.app.listing.data_provider import InMemoryDataProvider, PageRequest, PageResult
from lms_admin.app.listing.listing_controller import ListingController
from lms_admin.app.listing_cache import ListingCache
from lms_admin.app.screens import SCREENS
from lms_admin.app.ui.columns import ColumnDef
from lms_admin.app.ui.sorting import SortDirection
from lms_admin.app.ui.table import DataTable
from lms_admin.clients.lms_client_sdk.config import SDKConfig
from lms_admin.clients.lms_client_sdk.errors import ApiError
from lms_admin.clients.lms_client_sdk.http_client import HttpClient
from lms_admin.clients.lms_client_sdk.resources_client import ResourcesClient

BASE_URL = "https://lms.test/api/"
COLUMNS = [ColumnDef("id", "ID", sortable=True), ColumnDef("title", "Title", sortable=True)]


def _courses(count: int) -> list[dict]:
    return [{"id": idx, "title": f"course {idx:02d}"} for idx in range(1, count + 1)]


def _resources_client(handler) -> ResourcesClient:
    config = SDKConfig(base_url=BASE_URL, timeout_seconds=5, verify_ssl=True, retry_max_attempts=1, retry_backoff_ms=0)
    http_client = HttpClient(config=config, client=httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler)))
    return ResourcesClient(http_client, clock=lambda: 1.0)


def test_controller_answers_intents_with_provider_pages() -> None:
    table = DataTable(columns=COLUMNS, items_per_page=10)
    controller = ListingController(table, InMemoryDataProvider(_courses(23), search_keys=["title"]))

    controller.load()
    assert table.total_pages == 3
    assert [row["id"] for row in table.paginated_data] == list(range(1, 11))

    assert table.go_to_page(3) is True
    assert [row["id"] for row in table.paginated_data] == [21, 22, 23]
    assert (table.display_start, table.display_end, table.display_total) == (21, 23, 23)

    table.request_sort(COLUMNS[0])
    table.request_sort(COLUMNS[0])
    assert table.sort_direction is SortDirection.DESC
    assert [row["id"] for row in table.paginated_data] == [3, 2, 1]

    table.on_search_change("course 1")
    assert table.current_page == 1
    assert table.display_total == 10
    assert [row["id"] for row in table.paginated_data] == list(range(19, 9, -1))


def test_selection_with_key_identity_survives_refetch() -> None:
    table = DataTable(columns=COLUMNS, identity=lambda row: row["id"])
    controller = ListingController(table, InMemoryDataProvider(_courses(5)))
    controller.load()
    table.toggle_row_selection(table.paginated_data[0])

    table.request_sort(COLUMNS[1])

    assert table.is_row_selected({"id": 1, "title": "course 01"}) is True


class FailingProvider:
    def fetch_page(self, request: PageRequest) -> PageResult:
        raise ApiError(code="NETWORK_ERROR", message="down")


def test_provider_errors_propagate_and_keep_previous_data() -> None:
    table = DataTable(columns=COLUMNS, data=[{"id": 1, "title": "kept"}])
    controller = ListingController(table, FailingProvider())

    with pytest.raises(ApiError):
        controller.load()

    assert table.data == [{"id": 1, "title": "kept"}]


class SwitchableProvider(InMemoryDataProvider):
    def __init__(self, rows: list[dict]) -> None:
        super().__init__(rows, search_keys=["title"])
        self.failing = False

    def fetch_page(self, request: PageRequest) -> PageResult:
        if self.failing:
            raise ApiError(code="NETWORK_ERROR", message="down")
        return super().fetch_page(request)


def _loaded_table(provider: SwitchableProvider) -> DataTable:
    table = DataTable(columns=COLUMNS, items_per_page=10)
    ListingController(table, provider).load()
    provider.failing = True
    return table


def test_failed_page_fetch_keeps_page_and_counters() -> None:
    provider = SwitchableProvider(_courses(23))
    table = _loaded_table(provider)

    with pytest.raises(ApiError):
        table.go_to_page(3)

    assert table.current_page == 1
    assert [row["id"] for row in table.paginated_data] == list(range(1, 11))
    assert (table.display_start, table.display_end, table.display_total) == (1, 10, 23)
    assert table.page_numbers == [1, 2, 3]


def test_failed_search_restores_term_and_page() -> None:
    provider = SwitchableProvider(_courses(23))
    table = DataTable(columns=COLUMNS, items_per_page=10)
    ListingController(table, provider).load()
    table.go_to_page(2)
    provider.failing = True

    with pytest.raises(ApiError):
        table.on_search_change("course 0")

    assert table.search_term == ""
    assert table.current_page == 2
    assert (table.display_start, table.display_end) == (11, 20)


def test_failed_sort_restores_previous_sort() -> None:
    provider = SwitchableProvider(_courses(5))
    table = _loaded_table(provider)

    with pytest.raises(ApiError):
        table.request_sort(COLUMNS[1])

    assert table.sort_intent is None

    provider.failing = False
    table.request_sort(COLUMNS[1])
    assert table.sort_column == "title"
    assert table.sort_direction is SortDirection.ASC


def test_detach_stops_listening() -> None:
    table = DataTable(columns=COLUMNS)
    provider = InMemoryDataProvider(_courses(3))
    controller = ListingController(table, provider)
    controller.load()
    controller.detach()

    provider.replace([])
    table.on_search_change("x")

    assert len(table.data) == 3


def test_api_provider_loads_once_and_pages_from_cache() -> None:
    requests: list[httpx.Request] = []
    students = [
        {"id": f"s-{idx}", "firstName": name, "lastName": "Test", "email": f"{name}@lms.test", "phoneNumber": "05"}
        for idx, name in enumerate(["omar", "layla", "ahmed", "sara"], start=1)
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"isSuccess": True, "value": students})

    screen = SCREENS["students"]
    table = DataTable(columns=screen.columns, items_per_page=2, identity=lambda row: row["id"])
    provider = ApiDataProvider(
        _resources_client(handler),
        screen.resource,
        access_token="tkn",
        cache=ListingCache(ttl_seconds=60),
        search_keys=screen.search_keys,
        columns=screen.columns,
    )
    controller = ListingController(table, provider)

    controller.load()
    name_column = next(column for column in table.columns if column.key == "name")
    table.request_sort(name_column)
    table.go_to_page(2)

    assert len(requests) == 1
    assert requests[0].url.path == "/api/Students"
    assert requests[0].headers["Authorization"] == "Bearer tkn"
    assert [table.get_cell_value(row, name_column) for row in table.paginated_data] == ["omar Test", "sara Test"]

    provider.refresh()
    table.on_search_change("LAYLA")

    assert len(requests) == 2
    assert [row["id"] for row in table.paginated_data] == ["s-2"]


def test_api_provider_scopes_parent_listings_in_the_cache() -> None:
    paths: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        course_id = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(200, json=[{"id": f"{course_id}-m1", "title": "intro"}])

    client = _resources_client(handler)
    cache: ListingCache = ListingCache(ttl_seconds=60)
    first = ApiDataProvider(client, "modules", parent=("courses", "c-1"), cache=cache)
    second = ApiDataProvider(client, "modules", parent=("courses", "c-2"), cache=cache)

    assert [row["id"] for row in first.rows()] == ["c-1-m1"]
    assert [row["id"] for row in second.rows()] == ["c-2-m1"]
    first.rows()
    first.refresh()
    first.rows()

    assert paths == [
        "/api/Modules/ByCourse/c-1",
        "/api/Modules/ByCourse/c-2",
        "/api/Modules/ByCourse/c-1",
    ]
    assert cache.rows("modules", scope="courses:c-2") == [{"id": "c-2-m1", "title": "intro"}]
