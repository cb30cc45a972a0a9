from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from .errors import NetworkFailure, ServerFailure
from .models import Article, ArticlePage

LIST_PATH = "/api/articles"


class ArticleApiClient:
    def __init__(
        self,
        base_url: str,
        timeout_sec: float,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        base = (base_url or "").strip().rstrip("/")
        if not base:
            raise ValueError("ARTICLE_API_URL is required for the article client")
        self.base_url = base
        self.timeout_sec = timeout_sec
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers.update({"User-Agent": user_agent})
        self.logger = logger or logging.getLogger(__name__)

    def list_articles(self, page: int, limit: int) -> ArticlePage:
        body = self._get_json(LIST_PATH, params={"page": page, "limit": limit})
        result = ArticlePage.from_payload(body, page=page)
        self.logger.debug(
            "fetched article page: page=%s items=%s total_pages=%s",
            page,
            len(result.articles),
            result.total_pages,
        )
        return result

    def get_article(self, article_id: str) -> Article:
        path = f"{LIST_PATH}/{quote(article_id, safe='')}"
        return Article.from_payload(self._get_json(path))

    def _get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout_sec)
        except requests.RequestException as exc:
            raise NetworkFailure(f"GET {url} failed: {exc}") from exc

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise ServerFailure(
                f"GET {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            ) from exc

        try:
            return response.json()
        except ValueError as exc:
            raise ServerFailure(
                f"GET {url} returned a non-JSON body",
                status_code=response.status_code,
            ) from exc
