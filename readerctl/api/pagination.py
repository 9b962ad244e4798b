"""Lazy iteration over paginated /list results.

A listing runs as a generator: it issues one request, yields the page and
only fetches the next one when the consumer asks for it. A rate-limited
request is retried with the same cursor after waiting exactly the number of
seconds the server asked for. There is no retry budget; the only way out of
a rate-limit wait is cancellation, which is also checked before every
request for a following page.
"""
import threading
from dataclasses import replace
from typing import Iterator, Optional

from ..exceptions import ListCancelledError, RateLimitedError
from ..models.page import ListFilter, Page
from ..utils.logger import logger


def paginate(client, params: ListFilter, cancel: Optional[threading.Event] = None) -> Iterator[Page]:
    """Yield pages from client.list, following nextPageCursor until it is empty.

    Args:
        client: Anything with a list(ListFilter) -> ListResponse method
        params: Filters for the listing; page_cursor is the starting position
        cancel: Event checked before every further request and during every
            rate-limit wait. Any object with is_set() and wait(timeout) -> bool
            works.

    Raises:
        ListCancelledError: cancel was set before the listing finished
    """
    if cancel is None:
        cancel = threading.Event()

    cursor = params.page_cursor
    page_count = 0

    while True:
        try:
            response = client.list(replace(params, page_cursor=cursor))
        except RateLimitedError as e:
            if cancel.is_set():
                raise ListCancelledError() from e

            logger.warning(f"Rate limited, retrying page {page_count + 1} in {e.retry_after}s")
            if cancel.wait(e.retry_after):
                raise ListCancelledError() from e
            continue

        page_count += 1
        logger.debug(f"Fetched page {page_count}: {len(response.page.results)} of {response.page.count} documents")
        yield response.page

        if not response.next_page_cursor:
            return

        if cancel.is_set():
            raise ListCancelledError()

        cursor = response.next_page_cursor
