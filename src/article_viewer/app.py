from __future__ import annotations

import asyncio
import logging
from typing import Optional, Union

from .controllers import ArticleDetailController, ArticleListController
from .controllers.article_list import PAGE_SIZE
from .controllers.base import ArticleSource, Runner
from .navigation import DETAIL_ROUTE, LIST_ROUTE, NavigationBoundary, Route

Controller = Union[ArticleListController, ArticleDetailController]


class ArticleViewerApp:
    """Mounts a controller for whatever route the navigation boundary reports.

    The list route always gets a fresh controller. Moving between two detail
    routes keeps the detail controller and lets it reload for the new id.
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
        self.api = api
        self.navigation = navigation
        self.page_size = page_size
        self.sequence_guard = sequence_guard
        self.logger = logger or logging.getLogger(__name__)
        self.runner = runner
        self.controller: Optional[Controller] = None
        self.pending: Optional[asyncio.Task] = None
        self._unsubscribe = None

    def mount(self) -> Optional[asyncio.Task]:
        if self._unsubscribe is None:
            self._unsubscribe = self.navigation.subscribe(self._on_route)
        self._on_route(self.navigation.current_route)
        return self.pending

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller = None
        self.pending = None

    def _on_route(self, route: Optional[Route]) -> None:
        if route is None:
            self.controller = None
            self.pending = None
            return

        if route.name == LIST_ROUTE:
            controller = ArticleListController(
                self.api,
                self.navigation,
                page_size=self.page_size,
                sequence_guard=self.sequence_guard,
                logger=self.logger.getChild("list"),
                runner=self.runner,
            )
            self.controller = controller
            self.pending = controller.start()
            return

        if route.name == DETAIL_ROUTE:
            if not isinstance(self.controller, ArticleDetailController):
                self.controller = ArticleDetailController(
                    self.api,
                    self.navigation,
                    logger=self.logger.getChild("detail"),
                    runner=self.runner,
                )
            self.pending = self.controller.sync_with_route()
            return

        self.logger.warning("route has no controller: name=%s", route.name)
        self.controller = None
        self.pending = None
