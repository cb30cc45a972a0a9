from __future__ import annotations

import re
from collections.abc import Sequence

from bs4 import BeautifulSoup

from .models import Article, ArticleStatus, DetailSnapshot, ListSnapshot

LIST_HEADING = "BeyondChats Articles"
LOADING_TEXT = "Loading..."
BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)

_LIST_STATUS_LABELS = {
    ArticleStatus.ORIGINAL: "Original",
    ArticleStatus.AI_UPDATED: "AI-Updated",
}
_DETAIL_STATUS_LABELS = {
    ArticleStatus.ORIGINAL: "Original",
    ArticleStatus.AI_UPDATED: "AI-Generated",
}


def _clean_text(value: str) -> str:
    text = BeautifulSoup(value or "", "html.parser").get_text(" ", strip=True)
    return " ".join(text.split())


def _content_text(value: str) -> str:
    # Line breaks are meaningful; only markup is dropped.
    markup = BR_RE.sub("\n", value or "")
    text = BeautifulSoup(markup, "html.parser").get_text()
    return "\n".join(line.rstrip() for line in text.splitlines()).strip("\n")


def _article_card(index: int, article: Article) -> list[str]:
    lines = [f"[{index}] {_clean_text(article.title)}"]
    excerpt = _clean_text(article.excerpt)
    if excerpt:
        lines.append(f"    {excerpt}")
    lines.append(f"    Status: {_LIST_STATUS_LABELS[article.status]}")
    lines.append(f"    Publish Date: {article.published_date.isoformat() if article.published_date else '-'}")
    lines.append(f"    Source: {article.source or '-'}")
    lines.append(f"    id: {article.article_id}")
    return lines


def render_list(snapshot: ListSnapshot) -> str:
    lines = [LIST_HEADING, "=" * len(LIST_HEADING)]
    if snapshot.state.is_error and snapshot.state.message:
        lines.append(f"! {snapshot.state.message}")

    criteria = snapshot.criteria
    if criteria.search_term or criteria.status:
        lines.append(f"Filter: search={criteria.search_term!r} status={criteria.status or 'all'}")
    lines.append("")

    if snapshot.state.is_loading:
        lines.append(LOADING_TEXT)
    elif not snapshot.articles:
        lines.append("No articles.")
    else:
        for index, article in enumerate(snapshot.articles, start=1):
            lines.extend(_article_card(index, article))
            lines.append("")

    prev_marker = "< Prev" if snapshot.has_prev else "  ----"
    next_marker = "Next >" if snapshot.has_next else "----  "
    lines.append(f"{prev_marker}  Page {snapshot.page} of {snapshot.total_pages}  {next_marker}")
    return "\n".join(lines)


def render_references(references: Sequence[str]) -> list[str]:
    if not references:
        return []
    return ["", "References", "----------", *(f"- {ref}" for ref in references)]


def render_detail(snapshot: DetailSnapshot) -> str:
    if snapshot.state.is_error:
        return snapshot.state.message or "Failed to load article."
    article = snapshot.article
    if article is None:
        return LOADING_TEXT

    title = _clean_text(article.title)
    lines = [title, "=" * len(title)]
    lines.append(f"Publish Date: {article.published_date.isoformat() if article.published_date else '-'}")
    lines.append(f"Type: {_DETAIL_STATUS_LABELS[article.status]}")
    lines.append(f"Last Updated: {article.updated_at.date().isoformat() if article.updated_at else '-'}")
    lines.append("")
    lines.append(_content_text(article.content))
    lines.extend(render_references(article.references))
    return "\n".join(lines)
