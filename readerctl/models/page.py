from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any

from .document import Document, Location, Category


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class ListFilter:
    """Query parameters for one /list request. Fields left at their zero value are not sent."""
    id: str = ""
    updated_after: Optional[datetime] = None
    location: Optional[Location] = None
    category: Optional[Category] = None
    page_cursor: str = ""
    with_html_content: bool = False

    def to_params(self) -> Dict[str, str]:
        params = {}
        if self.id:
            params['id'] = self.id
        if self.updated_after:
            params['updatedAfter'] = as_utc(self.updated_after).isoformat()
        if self.location:
            params['location'] = Location(self.location).value
        if self.category:
            params['category'] = Category(self.category).value
        if self.page_cursor:
            params['pageCursor'] = self.page_cursor
        if self.with_html_content:
            params['withHTMLContent'] = 'true'
        return params


@dataclass(frozen=True)
class Page:
    # Total number of documents, may exceed len(results)
    count: int
    results: List[Document]


@dataclass(frozen=True)
class ListResponse:
    page: Page
    # Empty string when there are no more pages
    next_page_cursor: str

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "ListResponse":
        return cls(
            page=Page(
                count=data.get('count') or 0,
                results=[Document.from_api_response(result) for result in data.get('results') or []],
            ),
            next_page_cursor=data.get('nextPageCursor') or '',
        )


@dataclass(frozen=True)
class SaveParams:
    """Body of a /save request. Only url is required."""
    url: str
    html: Optional[str] = None
    should_clean_html: Optional[bool] = None
    title: Optional[str] = None
    author: Optional[str] = None
    summary: Optional[str] = None
    published_date: Optional[datetime] = None
    image_url: Optional[str] = None
    location: Optional[Location] = None
    category: Optional[Category] = None
    saved_using: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    notes: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {'url': self.url}
        for name in ('html', 'should_clean_html', 'title', 'author', 'summary',
                     'image_url', 'saved_using', 'notes'):
            value = getattr(self, name)
            if value is not None:
                payload[name] = value
        if self.published_date:
            payload['published_date'] = as_utc(self.published_date).isoformat()
        if self.location:
            payload['location'] = Location(self.location).value
        if self.category:
            payload['category'] = Category(self.category).value
        if self.tags:
            payload['tags'] = list(self.tags)
        return payload
