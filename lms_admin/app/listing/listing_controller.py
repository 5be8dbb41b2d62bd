from __future__ import annotations

import logging
from collections.abc import Callable

from lms_admin.app.infrastructure.logging.logger import get_logger, log_event
from lms_admin.app.listing.data_provider import DataProvider, PageRequest, PageResult
from lms_admin.app.ui.sorting import SortIntent
from lms_admin.app.ui.table import DataTable


class ListingController:
    """Answers a table's search/sort/page intents with data from a provider.

    The table is switched to provider-driven paging: every fetch returns one
    page of rows and the provider's total drives the page window. A failed
    fetch re-raises after putting the table back on the page, search term and
    sort it last showed.
    """

    def __init__(self, table: DataTable, provider: DataProvider, *, logger: logging.Logger | None = None) -> None:
        self.table = table
        self.provider = provider
        self.table.paginate_locally = False
        self.last_result: PageResult | None = None
        self._applied = self._request()
        self._logger = logger or get_logger("lms_admin.listing")
        self._unsubscribe: list[Callable[[], None]] = [
            table.search_change.subscribe(self._on_search),
            table.sort_change.subscribe(self._on_sort),
            table.page_change.subscribe(self._on_page),
        ]

    def load(self) -> PageResult:
        return self._fetch(reason="load")

    def detach(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    def _on_search(self, _term: str) -> None:
        self.table.current_page = 1
        self._fetch(reason="search")

    def _on_sort(self, _intent: SortIntent) -> None:
        self._fetch(reason="sort")

    def _on_page(self, _page: int) -> None:
        self._fetch(reason="page")

    def _request(self) -> PageRequest:
        return PageRequest(
            page=self.table.current_page,
            page_size=self.table.items_per_page,
            sort=self.table.sort_intent,
            search=self.table.search_term,
        )

    def _rollback(self) -> None:
        # the table moved its page/search/sort before emitting; put back what is on screen
        self.table.current_page = self._applied.page
        self.table.search_term = self._applied.search
        self.table.restore_sort(self._applied.sort)

    def _fetch(self, reason: str) -> PageResult:
        request = self._request()
        try:
            result = self.provider.fetch_page(request)
        except Exception as error:
            log_event(
                self._logger,
                "listing",
                reason,
                "error",
                level=logging.ERROR,
                page=request.page,
                error=type(error).__name__,
            )
            self._rollback()
            raise
        self.table.set_data(result.rows, total_items=result.total)
        self.last_result = result
        self._applied = request
        log_event(self._logger, "listing", reason, "success", page=request.page, rows=len(result.rows), total=result.total)
        return result
