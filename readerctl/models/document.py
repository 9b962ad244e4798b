from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, Any, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Location(str, Enum):
    NEW = "new"
    LATER = "later"
    SHORTLIST = "shortlist"
    ARCHIVE = "archive"
    FEED = "feed"


class Category(str, Enum):
    ARTICLE = "article"
    EMAIL = "email"
    RSS = "rss"
    HIGHLIGHT = "highlight"
    NOTE = "note"
    PDF = "pdf"
    EPUB = "epub"
    TWEET = "tweet"
    VIDEO = "video"


def parse_published_date(value: Union[int, float, str, None]) -> Optional[datetime]:
    """Decode the published_date field.

    The API sends either epoch milliseconds, a "YYYY-MM-DD" string or null.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid published_date type: {type(value).__name__}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValueError(f"published_date out of range: {value}")
    if isinstance(value, str):
        return datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    raise ValueError(f"invalid published_date type: {type(value).__name__}")


class Document(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    url: str = ""
    source_url: Optional[str] = None
    parent_id: Optional[str] = None

    title: Optional[str] = None
    author: Optional[str] = None
    source: Optional[str] = None
    site_name: Optional[str] = None
    summary: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None

    category: Optional[Category] = None
    location: Optional[Location] = None

    word_count: Optional[int] = None
    reading_progress: float = 0.0
    # Documented as a list of strings, but the API returns an object keyed by tag name
    tags: Dict[str, Any] = Field(default_factory=dict)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    published_date: Optional[datetime] = None
    first_opened_at: Optional[datetime] = None
    last_opened_at: Optional[datetime] = None
    saved_at: Optional[datetime] = None
    last_moved_at: Optional[datetime] = None

    html_content: Optional[str] = None

    @field_validator("published_date", mode="before")
    @classmethod
    def _published_date(cls, value: Any) -> Optional[datetime]:
        if isinstance(value, datetime):
            return value
        return parse_published_date(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("reading_progress", mode="before")
    @classmethod
    def _reading_progress(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> "Document":
        """Create from a Reader API document object"""
        return cls.model_validate(data)
