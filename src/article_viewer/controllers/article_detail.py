from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..models import Article, DetailSnapshot, FetchState
from ..navigation import NavigationBoundary
from .base import ArticleSource, FetchController, Runner

DETAIL_ERROR_MESSAGE = "Failed to load article."


class ArticleDetailController(FetchController):
    def __init__(
        self,
        api: ArticleSource,
        navigation: NavigationBoundary,
        logger: Optional[logging.Logger] = None,
        runner: Optional[Runner] = None,
    ):
        super().__init__(api, navigation, logger=logger or logging.getLogger(__name__), runner=runner)
        self.article_id: Optional[str] = None
        self.article: Optional[Article] = None
        self.state: FetchState[Article] = FetchState.idle()

    def sync_with_route(self) -> Optional[asyncio.Task]:
        """Reload when the route's ``id`` differs from the article currently held."""
        article_id = self.navigation.route_param("id")
        if not article_id or article_id == self.article_id:
            return None
        return self.load(article_id)

    def load(self, article_id: str) -> asyncio.Task:
        normalized = (article_id or "").strip()
        if not normalized:
            raise ValueError("article_id is required")

        self.article_id = normalized
        self.article = None
        self.state = FetchState.loading()
        return self._schedule(self._load(normalized))

    def back_to_list(self) -> None:
        self.navigation.navigate("/")

    def snapshot(self) -> DetailSnapshot:
        return DetailSnapshot(state=self.state, article=self.article, article_id=self.article_id)

    async def _load(self, article_id: str) -> None:
        result, error = await self._request(self.api.get_article, article_id)

        # Another id was loaded meanwhile; never show this article under it.
        if article_id != self.article_id:
            self.logger.info("dropping response for replaced article: id=%s current=%s", article_id, self.article_id)
            return

        if error is not None or result is None:
            self.article = None
            self.state = FetchState.error(DETAIL_ERROR_MESSAGE)
            return

        self.article = result
        self.state = FetchState.success(result)
        self.logger.info("article loaded: id=%s references=%s", article_id, len(result.references))
