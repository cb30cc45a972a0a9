"""View-state controllers for the article list and the article detail routes."""

from .article_detail import DETAIL_ERROR_MESSAGE, ArticleDetailController
from .article_list import LIST_ERROR_MESSAGE, PAGE_SIZE, ArticleListController

__all__ = [
    "ArticleDetailController",
    "ArticleListController",
    "DETAIL_ERROR_MESSAGE",
    "LIST_ERROR_MESSAGE",
    "PAGE_SIZE",
]
