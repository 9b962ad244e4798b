from typing import Optional


class ReaderError(Exception):
    """Base exception for readerctl errors."""
    pass


class ConfigError(ReaderError):
    """Configuration is missing or invalid."""
    pass


class ReaderAPIError(ReaderError):
    """API returned an error response."""
    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        self.message = message or f"unexpected status code: {status_code}"
        super().__init__(self.message)


class UnexpectedStatusError(ReaderAPIError):
    """API returned a status code the client does not handle."""
    pass


class DocumentNotFoundError(UnexpectedStatusError):
    """Document to delete does not exist (HTTP 404)."""
    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(404, f"document not found: {document_id}")


class RateLimitedError(ReaderError):
    """API asked us to back off (HTTP 429).

    Used as a control signal by the paginator, which waits ``retry_after``
    seconds and retries the same page.
    """
    def __init__(self, retry_after: int):
        self.retry_after = retry_after
        super().__init__(f"rate limited, retry after: {retry_after}s")


class MalformedRateLimitHeaderError(ReaderError):
    """Retry-After header on a 429 response is not an integer."""
    def __init__(self, raw_value: Optional[str]):
        self.raw_value = raw_value
        super().__init__(f"invalid retry-after header: {raw_value!r}")


class ListCancelledError(ReaderError):
    """Listing was cancelled while backing off from a rate limit."""
    def __init__(self, message: str = "listing cancelled"):
        super().__init__(message)
