from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any, Optional, Protocol, TypeVar

from ..errors import FetchError
from ..models import Article, ArticlePage
from ..navigation import NavigationBoundary

T = TypeVar("T")

Runner = Callable[..., Awaitable[Any]]


class ArticleSource(Protocol):
    def list_articles(self, page: int, limit: int) -> ArticlePage: ...

    def get_article(self, article_id: str) -> Article: ...


class FetchController(ABC):
    """Owns one FetchState; blocking client calls run through ``runner`` off the event loop.

    Fetch tasks never raise: every failure is logged and reported back to the
    subclass as the second element of ``_request``'s result.
    """

    def __init__(
        self,
        api: ArticleSource,
        navigation: NavigationBoundary,
        logger: Optional[logging.Logger] = None,
        runner: Optional[Runner] = None,
    ):
        self.api = api
        self.navigation = navigation
        self.logger = logger or logging.getLogger(__name__)
        self._runner: Runner = runner or asyncio.to_thread

    @abstractmethod
    def snapshot(self) -> Any:
        raise NotImplementedError

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        return asyncio.get_running_loop().create_task(coro)

    async def _request(
        self,
        call: Callable[..., T],
        *args: Any,
    ) -> tuple[Optional[T], Optional[Exception]]:
        try:
            return await self._runner(call, *args), None
        except FetchError as exc:
            self.logger.warning("fetch failed: call=%s args=%s error=%s", call.__name__, args, exc)
            return None, exc
        except Exception as exc:
            self.logger.exception("fetch crashed: call=%s args=%s", call.__name__, args)
            return None, exc
