from datetime import date, datetime, timezone

import pytest

from article_viewer.errors import ServerFailure
from article_viewer.models import Article, ArticlePage, ArticleStatus, FetchState, FetchStatus


def _payload(**overrides) -> dict:
    body = {
        "_id": "65a1f0c2",
        "title": "Chatbots in Support",
        "excerpt": "How teams use chatbots.",
        "content": "Line one\nLine two",
        "status": "ai_updated",
        "published_date": "2024-01-12",
        "updatedAt": "2024-02-01T10:30:00.000Z",
        "references": ["https://example.com/a", "https://example.com/b"],
        "source": "beyondchats.com",
    }
    body.update(overrides)
    return body


def test_article_from_payload_maps_wire_fields() -> None:
    article = Article.from_payload(_payload())

    assert article.article_id == "65a1f0c2"
    assert article.status is ArticleStatus.AI_UPDATED
    assert article.published_date == date(2024, 1, 12)
    assert article.updated_at == datetime(2024, 2, 1, 10, 30, tzinfo=timezone.utc)
    assert article.references == ("https://example.com/a", "https://example.com/b")
    assert article.content == "Line one\nLine two"
    assert article.source == "beyondchats.com"


def test_article_from_payload_accepts_plain_id_and_missing_optionals() -> None:
    article = Article.from_payload(
        {"id": 42, "title": "Bare", "status": "original"},
    )

    assert article.article_id == "42"
    assert article.excerpt == ""
    assert article.content == ""
    assert article.published_date is None
    assert article.updated_at is None
    assert article.references == ()
    assert article.source is None


def test_article_from_payload_reads_datetime_published_date() -> None:
    article = Article.from_payload(_payload(published_date="2024-01-12T08:00:00Z"))
    assert article.published_date == date(2024, 1, 12)


def test_article_from_payload_treats_null_references_as_empty() -> None:
    article = Article.from_payload(_payload(references=None))
    assert article.references == ()


@pytest.mark.parametrize(
    "overrides",
    [
        {"status": "draft"},
        {"title": None},
        {"_id": None},
        {"_id": ""},
        {"references": "https://example.com"},
        {"references": ["ok", 3]},
        {"published_date": "yesterday"},
        {"updatedAt": 1700000000},
        {"content": ["not", "text"]},
    ],
)
def test_article_from_payload_rejects_shape_mismatch(overrides: dict) -> None:
    with pytest.raises(ServerFailure):
        Article.from_payload(_payload(**overrides))


def test_article_from_payload_rejects_non_object() -> None:
    with pytest.raises(ServerFailure):
        Article.from_payload(["not", "an", "object"])


def test_article_page_from_payload_keeps_order_and_total_pages() -> None:
    body = {
        "data": {
            "articles": [_payload(_id="a", title="First"), _payload(_id="b", title="Second")],
            "pagination": {"currentPage": 2, "totalPages": 4, "totalArticles": 20},
        }
    }

    page = ArticlePage.from_payload(body, page=2)

    assert [article.article_id for article in page.articles] == ["a", "b"]
    assert page.page == 2
    assert page.total_pages == 4


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"data": []},
        {"data": {"articles": [], "pagination": {}}},
        {"data": {"articles": [], "pagination": {"totalPages": "3"}}},
        {"data": {"articles": [], "pagination": {"totalPages": -1}}},
        {"data": {"articles": None, "pagination": {"totalPages": 1}}},
        {"data": {"articles": [{"_id": "x"}], "pagination": {"totalPages": 1}}},
    ],
)
def test_article_page_from_payload_rejects_shape_mismatch(body: dict) -> None:
    with pytest.raises(ServerFailure):
        ArticlePage.from_payload(body, page=1)


def test_fetch_state_constructors() -> None:
    assert FetchState.idle().status is FetchStatus.IDLE
    assert FetchState.loading().is_loading is True
    assert FetchState.success("payload").payload == "payload"

    failed = FetchState.error("boom")
    assert failed.is_error is True
    assert failed.message == "boom"
    assert failed.payload is None


def test_article_from_payload_falls_back_to_id_when_underscore_id_is_null() -> None:
    article = Article.from_payload(_payload(_id=None, id="fallback-1"))
    assert article.article_id == "fallback-1"
