"""
gx checkout - switch to a branch or commit, by query or interactively.
"""

import logging
from dataclasses import dataclass

from gx.config.settings import Settings
from gx.git_backend.errors import NoMatchError
from gx.git_backend.repository import GxRepository
from gx.ui.branch_picker import BranchPicker
from gx.ui.fuzzy import best_match
from gx.ui.list_browser import run_browser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutTarget:
    name: str
    is_branch: bool


def match_target(repo: GxRepository, query: str, branches: list[str]) -> CheckoutTarget | None:
    """Match a query against branch names first, then as a commit-ish"""
    branch = best_match(query, branches)
    if branch is not None:
        return CheckoutTarget(branch, is_branch=True)
    if repo.is_valid_commit_ref(query):
        return CheckoutTarget(query, is_branch=False)
    return None


def resolve_query(repo: GxRepository, query: str, fetch_on_miss: bool = True) -> CheckoutTarget:
    """
    Resolve a typed query to a checkout target.

    Known branch names are tried first. If nothing matches, remote branches
    are refreshed once with `git fetch` and the lookup is retried.
    """
    target = match_target(repo, query, repo.branches())
    if target is None and fetch_on_miss:
        logger.info("No match for %r, fetching and retrying", query)
        repo.fetch()
        target = match_target(repo, query, repo.branches())

    if target is None:
        raise NoMatchError(query)
    return target


def run(settings: Settings, query: str | None = None, repo: GxRepository | None = None) -> None:
    if repo is None:
        repo = GxRepository()

    if query:
        target = resolve_query(repo, query, fetch_on_miss=settings.get_fetch_on_miss())
    else:
        picker = BranchPicker(
            repo.branches(),
            repo,
            debounce=settings.get_branch_debounce(),
            page_size=settings.get_page_size(),
            poll_interval=settings.get_poll_interval(),
        )
        selection = run_browser(picker)
        if selection is None:
            print("Checkout cancelled.")
            return
        target = CheckoutTarget(selection, is_branch=True)

    if target.is_branch:
        repo.checkout_branch(target.name)
        print(f"Switched to branch '{target.name}'")
    else:
        short_id = repo.checkout_commit(target.name)
        print(f"Switched to commit '{short_id}'")
