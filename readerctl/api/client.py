import time
from typing import Optional, Iterator

import requests

from ..exceptions import (
    DocumentNotFoundError,
    MalformedRateLimitHeaderError,
    RateLimitedError,
    UnexpectedStatusError,
)
from ..models.document import Document
from ..models.page import ListFilter, ListResponse, Page, SaveParams
from ..utils.logger import logger
from .pagination import paginate
from .transport import build_session

DEFAULT_BASE_URL = "https://readwise.io/api/v3"
DEFAULT_TIMEOUT = 30


class ReaderClient:
    """Client for the Readwise Reader API.

    The session may be shared between clients and between concurrent
    listings; the client keeps no per-listing state.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or build_session(token, debug=debug)
        self.request_count = 0

    def make_request(self, method: str, path: str, **kwargs) -> requests.Response:
        """Make a request to the Reader API, buffering the whole response body"""
        self.request_count += 1
        request_number = self.request_count
        logger.info(f"Making Reader API request #{request_number}: {method} {path}")

        start_time = time.time()
        with self.session.request(
            method,
            f"{self.base_url}{path}",
            timeout=self.timeout,
            stream=False,
            **kwargs,
        ) as response:
            # Read the body before the connection is released
            response.content

        elapsed_time = time.time() - start_time
        logger.info(f"Received response #{request_number}: status={response.status_code}, time={elapsed_time:.2f}s")
        return response

    def check_if_rate_limited(self, response: requests.Response) -> None:
        """Raise RateLimitedError if the response is a 429"""
        if response.status_code != 429:
            return

        retry_after = response.headers.get('Retry-After')
        try:
            seconds = int(retry_after)
        except (TypeError, ValueError):
            raise MalformedRateLimitHeaderError(retry_after)

        raise RateLimitedError(seconds)

    def list(self, params: ListFilter) -> ListResponse:
        """Fetch a single page of documents.

        Raises RateLimitedError on HTTP 429; callers that want transparent
        backoff should use list_paginate instead.
        """
        response = self.make_request('GET', '/list/', params=params.to_params())

        self.check_if_rate_limited(response)
        if response.status_code != 200:
            raise UnexpectedStatusError(response.status_code)

        return ListResponse.from_api_response(response.json())

    def list_paginate(self, params: Optional[ListFilter] = None, cancel=None) -> Iterator[Page]:
        """Iterate over pages of documents, following cursors until the last page.

        Args:
            params: Filters for the listing; page_cursor is the starting position
            cancel: threading.Event that stops the listing before the next page or during a rate-limit wait
        """
        return paginate(self, params or ListFilter(), cancel=cancel)

    def save(self, params: SaveParams) -> Document:
        """Save a document by URL and return it"""
        response = self.make_request('POST', '/save/', json=params.to_payload())
        if not response.ok:
            raise UnexpectedStatusError(response.status_code)

        document = Document.from_api_response(response.json())
        logger.info(f"Saved document {document.id}: {document.url}")
        return document

    def delete(self, document_id: str, missing_ok: bool = False) -> None:
        """Delete a document by ID.

        A 404 raises DocumentNotFoundError unless missing_ok is set.
        """
        response = self.make_request('DELETE', f'/delete/{document_id}/')
        if response.status_code == 404:
            if missing_ok:
                logger.info(f"Document {document_id} already deleted")
                return
            raise DocumentNotFoundError(document_id)
        if not response.ok:
            raise UnexpectedStatusError(response.status_code)

        logger.info(f"Deleted document {document_id}")
