from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..models import Article, ArticlePage, FetchState, FilterCriteria, ListSnapshot, filter_articles
from ..navigation import NavigationBoundary, article_path
from .base import ArticleSource, FetchController, Runner

PAGE_SIZE = 6
LIST_ERROR_MESSAGE = "Failed to load articles. Check if backend is running."


def _validate_page(page: object) -> int:
    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError(f"page must be a positive integer, got {page!r}")
    return page


class ArticleListController(FetchController):
    """Current page of articles plus the client-side filter over it.

    Page fetches are neither coalesced nor cancelled. Without ``sequence_guard``
    whichever response resolves last overwrites the held page, even when it
    answers an older request. With ``sequence_guard`` only the response to the
    most recently issued request is applied.
    """

    def __init__(
        self,
        api: ArticleSource,
        navigation: NavigationBoundary,
        page_size: int = PAGE_SIZE,
        sequence_guard: bool = False,
        logger: Optional[logging.Logger] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(api, navigation, logger=logger or logging.getLogger(__name__), runner=runner)
        if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
            raise ValueError(f"page_size must be a positive integer, got {page_size!r}")
        self.page_size = page_size
        self.sequence_guard = sequence_guard
        self.page = 1
        self.total_pages = 1
        self.criteria = FilterCriteria()
        self.state: FetchState[ArticlePage] = FetchState.idle()
        self._articles: tuple[Article, ...] = ()
        self._visible: tuple[Article, ...] = ()
        self._issued = 0

    @property
    def articles(self) -> tuple[Article, ...]:
        return self._articles

    @property
    def visible_articles(self) -> tuple[Article, ...]:
        return self._visible

    def start(self) -> asyncio.Task:
        raw_page = self.navigation.route_param("page")
        initial = self.page
        if raw_page and raw_page.isdecimal() and int(raw_page) >= 1:
            initial = int(raw_page)
        return self.set_page(initial)

    def set_page(self, page: int) -> asyncio.Task:
        self.page = _validate_page(page)
        self.state = FetchState.loading()
        self._issued += 1
        return self._schedule(self._load_page(page, self._issued))

    def next_page(self) -> Optional[asyncio.Task]:
        if self.page >= self.total_pages:
            return None
        return self.set_page(self.page + 1)

    def prev_page(self) -> Optional[asyncio.Task]:
        if self.page <= 1:
            return None
        return self.set_page(self.page - 1)

    def set_filter(self, criteria: FilterCriteria) -> tuple[Article, ...]:
        self.criteria = criteria
        self._refresh_visible()
        return self._visible

    def set_search_term(self, search_term: str) -> tuple[Article, ...]:
        return self.set_filter(FilterCriteria(search_term=search_term, status=self.criteria.status))

    def set_status_filter(self, status: str) -> tuple[Article, ...]:
        return self.set_filter(FilterCriteria(search_term=self.criteria.search_term, status=status))

    def open_article(self, article_id: str) -> None:
        self.navigation.navigate(article_path(article_id))

    def snapshot(self) -> ListSnapshot:
        return ListSnapshot(
            state=self.state,
            articles=self._visible,
            page=self.page,
            total_pages=self.total_pages,
            criteria=self.criteria,
        )

    def _refresh_visible(self) -> None:
        self._visible = filter_articles(self._articles, self.criteria)

    async def _load_page(self, page: int, sequence: int) -> None:
        result, error = await self._request(self.api.list_articles, page, self.page_size)

        if self.sequence_guard and sequence != self._issued:
            self.logger.info("dropping stale page response: page=%s request=%s latest=%s", page, sequence, self._issued)
            return

        if error is not None or result is None:
            self.state = FetchState.error(LIST_ERROR_MESSAGE)
            return

        self._articles = result.articles
        self.page = result.page
        self.total_pages = result.total_pages
        self.state = FetchState.success(result)
        self._refresh_visible()
        self.logger.info(
            "page loaded: page=%s total_pages=%s items=%s visible=%s",
            result.page,
            result.total_pages,
            len(result.articles),
            len(self._visible),
        )
