from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from .api_client import ArticleApiClient
from .app import ArticleViewerApp
from .config import Settings
from .controllers import ArticleDetailController, ArticleListController
from .models import ArticleStatus, FilterCriteria
from .navigation import NavigationBoundary, article_path
from .views import render_detail, render_list

STATUS_CHOICES = tuple(status.value for status in ArticleStatus)

HELP_TEXT = """commands:
  n            next page
  p            previous page
  g N          go to page N
  s TEXT       search titles (empty clears)
  f STATUS     filter by status: original, ai_updated (empty clears)
  o N|ID       open the N-th visible article, or an article id
  b            back to list
  r            reload
  q            quit"""


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("page must be an integer") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("page must be >= 1")
    return number


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse articles served by the articles API")
    parser.add_argument("--config-file", default="config.ini", help="Path to config.ini file")
    parser.add_argument("--env-file", default=".env", help="Path to .env file")
    parser.add_argument("--api-url", default=None, help="Override ARTICLE_API_URL")
    parser.add_argument("--page", type=_positive_int, default=1, help="Page to open in the list view")
    parser.add_argument("--search", default="", help="Only show articles whose title contains this text")
    parser.add_argument(
        "--status",
        choices=STATUS_CHOICES,
        default="",
        help="Only show articles with this status",
    )
    parser.add_argument("--article", default=None, metavar="ID", help="Show a single article instead of the list")
    parser.add_argument("--interactive", action="store_true", help="Start an interactive browse session")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser.parse_args(argv)


def _initial_path(args: argparse.Namespace) -> str:
    if args.article:
        return article_path(args.article)
    return f"/?page={args.page}"


def render_current(app: ArticleViewerApp) -> str:
    controller = app.controller
    if isinstance(controller, ArticleListController):
        return render_list(controller.snapshot())
    if isinstance(controller, ArticleDetailController):
        return render_detail(controller.snapshot())
    return "Nothing to show."


async def _settle(app: ArticleViewerApp, task: Optional[asyncio.Task] = None) -> None:
    # Navigation may swap controllers and issue a new fetch; wait for both.
    if task is not None:
        await task
    if app.pending is not None and app.pending is not task:
        await app.pending


def _open_target(controller: ArticleListController, target: str) -> None:
    if target.isdecimal():
        index = int(target)
        visible = controller.visible_articles
        if 1 <= index <= len(visible):
            controller.open_article(visible[index - 1].article_id)
            return
    controller.open_article(target)


async def handle_command(app: ArticleViewerApp, line: str) -> bool:
    """Apply one interactive command; returns False when the session should end."""
    command, _, argument = line.strip().partition(" ")
    argument = argument.strip()
    controller = app.controller
    task: Optional[asyncio.Task] = None

    if command == "q":
        return False
    if command in {"h", "?"}:
        print(HELP_TEXT)
        return True
    if command == "b":
        app.navigation.navigate("/")
    elif command == "o" and argument and isinstance(controller, ArticleListController):
        _open_target(controller, argument)
    elif command == "r" and isinstance(controller, ArticleListController):
        task = controller.set_page(controller.page)
    elif command == "r" and isinstance(controller, ArticleDetailController) and controller.article_id:
        task = controller.load(controller.article_id)
    elif isinstance(controller, ArticleListController) and command in {"n", "p", "g", "s", "f"}:
        if command == "n":
            task = controller.next_page()
        elif command == "p":
            task = controller.prev_page()
        elif command == "g":
            if not argument.isdecimal() or int(argument) < 1:
                print("usage: g N (N >= 1)")
                return True
            task = controller.set_page(int(argument))
        elif command == "s":
            controller.set_search_term(argument)
        else:
            if argument and argument not in STATUS_CHOICES:
                print(f"status must be one of: {', '.join(STATUS_CHOICES)}")
                return True
            controller.set_status_filter(argument)
    else:
        print(f"unknown command: {line.strip()!r} (h for help)")
        return True

    await _settle(app, task)
    print(render_current(app))
    return True


async def _interactive(app: ArticleViewerApp) -> None:
    print(render_current(app))
    print(HELP_TEXT)
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break
        if not line.strip():
            continue
        if not await handle_command(app, line):
            break


async def run(args: argparse.Namespace, settings: Settings, api: ArticleApiClient) -> int:
    navigation = NavigationBoundary(_initial_path(args), logger=logging.getLogger("article_viewer.navigation"))
    app = ArticleViewerApp(
        api,
        navigation,
        page_size=settings.page_size,
        sequence_guard=settings.sequence_guard,
        logger=logging.getLogger("article_viewer"),
    )
    await _settle(app, app.mount())

    if isinstance(app.controller, ArticleListController) and (args.search or args.status):
        app.controller.set_filter(FilterCriteria(search_term=args.search, status=args.status))

    if args.interactive:
        await _interactive(app)
        app.unmount()
        return 0

    print(render_current(app))
    controller = app.controller
    app.unmount()
    if controller is None or controller.state.is_error:
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = Settings.from_files(
        config_file=Path(args.config_file),
        env_file=Path(args.env_file),
    )
    if args.api_url:
        settings.api_base_url = args.api_url.strip().rstrip("/")

    api = ArticleApiClient(
        base_url=settings.api_base_url,
        timeout_sec=settings.request_timeout_sec,
        user_agent=settings.request_user_agent,
        logger=logging.getLogger("article_viewer.api"),
    )
    raise SystemExit(asyncio.run(run(args, settings, api)))


if __name__ == "__main__":
    main()
