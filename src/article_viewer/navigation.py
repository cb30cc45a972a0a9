"""Route table and the navigation capability handed to controllers."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import parse_qsl, quote, unquote, urlparse

LIST_ROUTE = "list"
DETAIL_ROUTE = "detail"

ROUTE_TABLE: tuple[tuple[str, re.Pattern[str]], ...] = (
    (LIST_ROUTE, re.compile(r"^/$")),
    (DETAIL_ROUTE, re.compile(r"^/article/(?P<id>[^/]+)/?$")),
)


def article_path(article_id: str) -> str:
    return f"/article/{quote(article_id, safe='')}"


@dataclass(frozen=True)
class Route:
    name: str
    path: str
    params: Mapping[str, str] = field(default_factory=dict)


def match_route(path: str) -> Optional[Route]:
    parsed = urlparse(path)
    clean_path = parsed.path or "/"
    for name, pattern in ROUTE_TABLE:
        match = pattern.match(clean_path)
        if match:
            params = dict(parse_qsl(parsed.query))
            params.update({key: unquote(value) for key, value in match.groupdict().items()})
            return Route(name=name, path=clean_path, params=params)
    return None


RouteListener = Callable[[Optional[Route]], None]


class NavigationBoundary:
    def __init__(self, initial_path: str = "/", logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._listeners: list[RouteListener] = []
        self._route = self._resolve(initial_path)

    @property
    def current_route(self) -> Optional[Route]:
        return self._route

    def route_param(self, name: str) -> Optional[str]:
        if self._route is None:
            return None
        return self._route.params.get(name)

    def navigate(self, path: str) -> Optional[Route]:
        self._route = self._resolve(path)
        for listener in list(self._listeners):
            listener(self._route)
        return self._route

    def subscribe(self, listener: RouteListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _resolve(self, path: str) -> Optional[Route]:
        route = match_route(path)
        if route is None:
            self.logger.warning("no route matches path=%s", path)
        return route
