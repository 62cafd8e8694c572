"""
gx log - browse history and optionally check out a commit.
"""

import logging

from gx.config.settings import Settings
from gx.git_backend.repository import GxRepository
from gx.ui.git_graph.graph import build_log_graph
from gx.ui.list_browser import run_browser
from gx.ui.log_viewer import LogViewer

logger = logging.getLogger(__name__)


def run(settings: Settings, limit: int | None = None, repo: GxRepository | None = None) -> None:
    if limit is None:
        limit = settings.get_log_limit()
    if repo is None:
        repo = GxRepository()

    graph = build_log_graph(repo, limit)
    if graph.skipped:
        logger.info("Left out %d unreadable commits or references", graph.skipped)

    if graph.is_empty:
        print("No commits found")
        return

    viewer = LogViewer(
        graph,
        repo,
        debounce=settings.get_log_debounce(),
        page_size=settings.get_page_size(),
        poll_interval=settings.get_poll_interval(),
    )
    commit_id = run_browser(viewer)

    if commit_id is not None:
        short_id = repo.checkout_commit(commit_id)
        print(f"Checked out commit {short_id}")
