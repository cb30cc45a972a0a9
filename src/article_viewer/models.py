from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Generic, Mapping, Optional, TypeVar

from .errors import ServerFailure

T = TypeVar("T")


class ArticleStatus(str, Enum):
    ORIGINAL = "original"
    AI_UPDATED = "ai_updated"


def _require_str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ServerFailure(f"article field '{key}' must be a string")
    return value


def _optional_str(payload: Mapping[str, Any], key: str, default: Optional[str] = None) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ServerFailure(f"article field '{key}' must be a string")
    return value


def _parse_datetime(value: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_published_date(value: object) -> Optional[date]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ServerFailure("article field 'published_date' must be a string")
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return _parse_datetime(text).date()
    except ValueError as exc:
        raise ServerFailure(f"invalid published_date: {value!r}") from exc


def _parse_updated_at(value: object) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ServerFailure("article field 'updatedAt' must be a string")
    try:
        return _parse_datetime(value)
    except ValueError as exc:
        raise ServerFailure(f"invalid updatedAt: {value!r}") from exc


@dataclass(frozen=True)
class Article:
    article_id: str
    title: str
    excerpt: str
    content: str
    status: ArticleStatus
    published_date: Optional[date] = None
    updated_at: Optional[datetime] = None
    references: tuple[str, ...] = ()
    source: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: object) -> "Article":
        """Build an Article from one JSON object, raising ServerFailure on any shape mismatch."""
        if not isinstance(payload, dict):
            raise ServerFailure("article payload must be an object")

        raw_id = payload.get("_id")
        if raw_id is None:
            raw_id = payload.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
            raise ServerFailure("article payload is missing an identifier")
        article_id = str(raw_id).strip()
        if not article_id:
            raise ServerFailure("article payload has an empty identifier")

        raw_status = _require_str(payload, "status")
        try:
            status = ArticleStatus(raw_status)
        except ValueError as exc:
            raise ServerFailure(f"unknown article status: {raw_status!r}") from exc

        raw_references = payload.get("references")
        if raw_references is None:
            references: tuple[str, ...] = ()
        elif isinstance(raw_references, list) and all(isinstance(ref, str) for ref in raw_references):
            references = tuple(raw_references)
        else:
            raise ServerFailure("article field 'references' must be a list of strings")

        return cls(
            article_id=article_id,
            title=_require_str(payload, "title"),
            excerpt=_optional_str(payload, "excerpt", "") or "",
            content=_optional_str(payload, "content", "") or "",
            status=status,
            published_date=_parse_published_date(payload.get("published_date")),
            updated_at=_parse_updated_at(payload.get("updatedAt")),
            references=references,
            source=_optional_str(payload, "source"),
        )


@dataclass(frozen=True)
class ArticlePage:
    articles: tuple[Article, ...]
    page: int
    total_pages: int

    @classmethod
    def from_payload(cls, payload: object, *, page: int) -> "ArticlePage":
        if not isinstance(payload, dict):
            raise ServerFailure("list response must be an object")
        data = payload.get("data")
        if not isinstance(data, dict):
            raise ServerFailure("list response is missing 'data'")

        items = data.get("articles")
        if not isinstance(items, list):
            raise ServerFailure("list response is missing 'data.articles'")

        pagination = data.get("pagination")
        if not isinstance(pagination, dict):
            raise ServerFailure("list response is missing 'data.pagination'")
        total_pages = pagination.get("totalPages")
        if isinstance(total_pages, bool) or not isinstance(total_pages, int) or total_pages < 0:
            raise ServerFailure("'data.pagination.totalPages' must be a non-negative integer")

        return cls(
            articles=tuple(Article.from_payload(item) for item in items),
            page=page,
            total_pages=total_pages,
        )


@dataclass(frozen=True)
class FilterCriteria:
    search_term: str = ""
    status: str = ""

    def matches(self, article: Article) -> bool:
        if self.search_term and self.search_term.lower() not in article.title.lower():
            return False
        if self.status and article.status.value != self.status:
            return False
        return True


def filter_articles(articles: tuple[Article, ...], criteria: FilterCriteria) -> tuple[Article, ...]:
    return tuple(article for article in articles if criteria.matches(article))


class FetchStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class FetchState(Generic[T]):
    status: FetchStatus
    payload: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "FetchState[T]":
        return cls(status=FetchStatus.IDLE)

    @classmethod
    def loading(cls) -> "FetchState[T]":
        return cls(status=FetchStatus.LOADING)

    @classmethod
    def success(cls, payload: T) -> "FetchState[T]":
        return cls(status=FetchStatus.SUCCESS, payload=payload)

    @classmethod
    def error(cls, message: str) -> "FetchState[T]":
        return cls(status=FetchStatus.ERROR, message=message)

    @property
    def is_loading(self) -> bool:
        return self.status is FetchStatus.LOADING

    @property
    def is_error(self) -> bool:
        return self.status is FetchStatus.ERROR


@dataclass(frozen=True)
class ListSnapshot:
    state: FetchState[ArticlePage]
    articles: tuple[Article, ...]
    page: int
    total_pages: int
    criteria: FilterCriteria = field(default_factory=FilterCriteria)

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


@dataclass(frozen=True)
class DetailSnapshot:
    state: FetchState[Article]
    article: Optional[Article]
    article_id: Optional[str]
