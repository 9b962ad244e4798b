"""Shared fixtures for the readerctl test suite.

No test touches the network: HTTP is mocked with ``responses`` and
rate-limit waits go through a recording stand-in for threading.Event.
"""

import pytest

from readerctl.api.client import ReaderClient

BASE_URL = "https://reader.test/api/v3"
TOKEN = "test-token-12345"


class RecordingEvent:
    """threading.Event stand-in that records waits instead of sleeping.

    cancel_on_wait sets the event during the n-th wait (1-based), the way a
    signal handler would while the real wait is blocked.
    """

    def __init__(self, cancelled=False, cancel_on_wait=None):
        self.cancelled = cancelled
        self.cancel_on_wait = cancel_on_wait
        self.waits = []

    def is_set(self):
        return self.cancelled

    def set(self):
        self.cancelled = True

    def wait(self, timeout=None):
        self.waits.append(timeout)
        if self.cancel_on_wait is not None and len(self.waits) >= self.cancel_on_wait:
            self.cancelled = True
        return self.cancelled


def make_document(doc_id="doc-1", **overrides):
    """Minimal document object as returned by the Reader API"""
    data = {
        "id": doc_id,
        "url": f"https://read.readwise.io/read/{doc_id}",
        "source_url": f"https://example.com/{doc_id}",
        "title": f"Title {doc_id}",
        "author": "Jane Doe",
        "source": "Reader RSS",
        "category": "article",
        "location": "later",
        "tags": {},
        "site_name": "Example",
        "word_count": 1200,
        "created_at": "2024-01-02T10:00:00.000000+00:00",
        "updated_at": "2024-01-03T10:00:00.000000+00:00",
        "published_date": 1704067200000,
        "summary": "A summary",
        "image_url": None,
        "notes": "",
        "parent_id": None,
        "reading_progress": 0.25,
        "first_opened_at": None,
        "last_opened_at": None,
        "saved_at": "2024-01-02T10:00:00.000000+00:00",
        "last_moved_at": "2024-01-02T10:00:00.000000+00:00",
    }
    data.update(overrides)
    return data


def make_list_body(doc_ids, next_page_cursor="", count=None):
    return {
        "count": len(doc_ids) if count is None else count,
        "nextPageCursor": next_page_cursor,
        "results": [make_document(doc_id) for doc_id in doc_ids],
    }


@pytest.fixture
def client():
    return ReaderClient(TOKEN, base_url=BASE_URL)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("READERCTL_API_TOKEN", "READERCTL_DEBUG", "READERCTL_BASE_URL", "READERCTL_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
