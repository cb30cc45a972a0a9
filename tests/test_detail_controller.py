from __future__ import annotations

import asyncio

import pytest

from article_viewer.api_client import ArticleApiClient
from article_viewer.controllers import DETAIL_ERROR_MESSAGE, ArticleDetailController
from article_viewer.models import FetchStatus
from article_viewer.navigation import NavigationBoundary

from fakes import FakeArticleApi, FakeResponse, FakeSession, GatedRunner, immediate, make_article


def test_load_missing_article_reports_error_and_holds_nothing() -> None:
    session = FakeSession(FakeResponse({"message": "Article not found"}, status_code=404))
    api = ArticleApiClient(base_url="http://localhost:3000", timeout_sec=5, session=session)

    async def scenario() -> ArticleDetailController:
        controller = ArticleDetailController(api, NavigationBoundary())
        await controller.load("abc123")
        return controller

    controller = asyncio.run(scenario())

    assert session.calls[0]["url"] == "http://localhost:3000/api/articles/abc123"
    assert controller.state.status is FetchStatus.ERROR
    assert controller.state.message == DETAIL_ERROR_MESSAGE
    assert controller.article is None


def test_load_holds_full_article_with_references() -> None:
    article = make_article("abc123", "AI Update", references=("https://example.com/ref",))
    api = FakeArticleApi(articles={"abc123": article})

    async def scenario() -> ArticleDetailController:
        controller = ArticleDetailController(api, NavigationBoundary(), runner=immediate)
        await controller.load("abc123")
        return controller

    controller = asyncio.run(scenario())

    assert controller.article == article
    assert controller.state.payload == article
    assert controller.snapshot().article_id == "abc123"


def test_load_discards_previous_article_immediately() -> None:
    api = FakeArticleApi(articles={"a": make_article("a", "First"), "b": make_article("b", "Second")})
    runner = GatedRunner()

    async def scenario() -> None:
        controller = ArticleDetailController(api, NavigationBoundary(), runner=runner)
        await controller.load("a")
        gate = runner.hold("b")
        task = controller.load("b")
        assert controller.article is None
        assert controller.state.is_loading is True
        gate.set()
        await task
        assert controller.article is not None
        assert controller.article.title == "Second"

    asyncio.run(scenario())


def test_response_for_replaced_id_is_never_shown() -> None:
    api = FakeArticleApi(articles={"a": make_article("a", "First"), "b": make_article("b", "Second")})
    runner = GatedRunner()

    async def scenario() -> ArticleDetailController:
        controller = ArticleDetailController(api, NavigationBoundary(), runner=runner)
        gate = runner.hold("a")
        stale = controller.load("a")
        await controller.load("b")
        gate.set()
        await stale
        return controller

    controller = asyncio.run(scenario())

    assert controller.article_id == "b"
    assert controller.article is not None
    assert controller.article.title == "Second"


def test_sync_with_route_reloads_only_when_id_changes() -> None:
    navigation = NavigationBoundary("/article/a")
    api = FakeArticleApi(articles={"a": make_article("a", "First"), "b": make_article("b", "Second")})

    async def scenario() -> tuple[ArticleDetailController, object]:
        controller = ArticleDetailController(api, navigation, runner=immediate)
        await controller.sync_with_route()
        repeat = controller.sync_with_route()
        navigation.navigate("/article/b")
        await controller.sync_with_route()
        return controller, repeat

    controller, repeat = asyncio.run(scenario())

    assert repeat is None
    assert api.get_calls == ["a", "b"]
    assert controller.article is not None
    assert controller.article.title == "Second"


def test_error_then_success_clears_error() -> None:
    api = FakeArticleApi()

    async def scenario() -> ArticleDetailController:
        controller = ArticleDetailController(api, NavigationBoundary(), runner=immediate)
        await controller.load("late")
        assert controller.state.is_error
        api.articles["late"] = make_article("late", "Arrived")
        await controller.load("late")
        return controller

    controller = asyncio.run(scenario())

    assert controller.state.status is FetchStatus.SUCCESS
    assert controller.article is not None


def test_load_requires_identifier() -> None:
    controller = ArticleDetailController(FakeArticleApi(), NavigationBoundary(), runner=immediate)
    with pytest.raises(ValueError):
        controller.load("  ")


def test_back_to_list_navigates_home() -> None:
    navigation = NavigationBoundary("/article/a")
    controller = ArticleDetailController(FakeArticleApi(), navigation, runner=immediate)

    controller.back_to_list()

    assert navigation.current_route is not None
    assert navigation.current_route.name == "list"
