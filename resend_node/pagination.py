"""
Cursor pagination for Resend list endpoints.

Two modes:
- Bounded: one request, result truncated client side to ``limit``.
- Exhaustive: pages are requested sequentially, each cursor taken from the
  last record of the previous page, and accumulated into one page-shaped
  response with ``has_more`` cleared.

Cursor direction is a one-way latch: a fetch that starts with ``before``
keeps paging backwards, any other fetch pages forward with ``after`` and
never switches back.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union

from .base import ListOptions
from .schemas import ListResponse, parse_list_response, record_id

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50
MAX_PAGES = 100


class JsonTransport(Protocol):
    """The slice of the HTTP client the fetcher depends on."""

    def build_url(self, path: str) -> str:
        ...

    async def get_json(
        self,
        url: str,
        api_key: str,
        params: Optional[Dict[str, Union[str, int]]] = None,
    ) -> Any:
        ...


class CursorMode(str, Enum):
    """Which query parameter carries the cursor."""
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class CursorState:
    """Cursor for the next page request. ``mode`` is None before any cursor exists."""
    mode: Optional[CursorMode] = None
    cursor: Optional[str] = None

    @classmethod
    def initial(cls, options: ListOptions) -> "CursorState":
        if options.before:
            return cls(CursorMode.BEFORE, options.before)
        if options.after:
            return cls(CursorMode.AFTER, options.after)
        return cls()

    def to_query(self, page_size: int) -> Dict[str, Union[str, int]]:
        query: Dict[str, Union[str, int]] = {"limit": page_size}
        if self.mode is not None and self.cursor:
            query[self.mode.value] = self.cursor
        return query


def advance(state: CursorState, last_id: str) -> CursorState:
    """
    Move the cursor to the last record of the page just fetched.

    Backward pagination stays backward; everything else latches to AFTER.
    """
    if state.mode is CursorMode.BEFORE:
        return CursorState(CursorMode.BEFORE, last_id)
    return CursorState(CursorMode.AFTER, last_id)


def resolve_page_size(return_all: bool, limit: Optional[int] = None) -> int:
    if return_all:
        return MAX_PAGE_SIZE
    if limit is not None and limit > 0:
        return limit
    return DEFAULT_PAGE_SIZE


async def fetch_collection(
    client: JsonTransport,
    url: str,
    options: ListOptions,
    api_key: str,
    return_all: bool,
    limit: Optional[int] = None,
    item_index: int = 0,
    max_pages: int = MAX_PAGES,
) -> ListResponse:
    """
    Fetch a Resend collection, either one bounded page or every page.

    Args:
        client: Transport issuing the GET requests
        url: Absolute list endpoint URL
        options: Caller cursor constraint (after/before)
        api_key: Bearer token
        return_all: Keep paging until the collection is exhausted
        limit: Maximum number of records when not returning all
        item_index: Input item the call belongs to, reported on validation errors
        max_pages: Page cap for exhaustive fetches

    Returns:
        ListResponse shaped like a single page

    Raises:
        ValidationError: If both ``after`` and ``before`` are given
        TransportError: If any page request fails; partial results are dropped
    """
    options.validate(item_index)

    page_size = resolve_page_size(return_all, limit)
    state = CursorState.initial(options)

    if not return_all:
        response = parse_list_response(
            await client.get_json(url, api_key, params=state.to_query(page_size))
        )
        if limit is not None and limit > 0 and response.data is not None:
            if len(response.data) > limit:
                response.data = response.data[:limit]
        return response

    all_items: List[Any] = []
    last_response: Optional[ListResponse] = None
    page_count = 0

    while True:
        last_response = parse_list_response(
            await client.get_json(url, api_key, params=state.to_query(page_size))
        )
        page_items = last_response.items
        all_items.extend(page_items)
        page_count += 1
        logger.debug(
            f"Fetched page {page_count} from {url}: {len(page_items)} items, "
            f"has_more={last_response.has_more}"
        )

        if not last_response.has_more or not page_items or page_count >= max_pages:
            break

        last_id = record_id(page_items[-1])
        if last_id is None:
            logger.debug(f"Last record on page {page_count} has no id, stopping")
            break

        state = advance(state, last_id)

    logger.info(f"Fetched {len(all_items)} items from {url} in {page_count} pages")

    if last_response is not None and last_response.data is not None:
        reshaped = last_response.to_dict()
        reshaped["data"] = all_items
        reshaped["has_more"] = False
        return parse_list_response(reshaped)

    return ListResponse(object="list", data=all_items, has_more=False)
