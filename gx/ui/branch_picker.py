"""
Branch picker - fuzzy branch search with a debounced branch info pane.
"""

from typing import ClassVar

from rich.console import RenderableType
from rich.text import Text

from gx.constants import BRANCH_DEBOUNCE_MS, PAGE_SIZE, POLL_INTERVAL_MS
from gx.git_backend.reltime import format_timestamp
from gx.git_backend.repository import GxRepository
from gx.git_backend.types import BranchInfo
from gx.ui.list_browser import ListBrowser, truncate
from gx.ui.selectable_list import DetailFetcher, SelectableList


def render_branch_info(info: BranchInfo) -> Text:
    text = Text()
    text.append(info.name, style="bold")
    if info.is_current:
        text.append(" (current)", style="green")
    text.append("\n\n")

    if info.ahead_behind is not None:
        ahead, behind = info.ahead_behind
        parts = []
        if ahead > 0:
            parts.append(f"+{ahead} ahead")
        if behind > 0:
            parts.append(f"-{behind} behind")
        if parts:
            text.append(", ".join(parts))
            text.append("\n\n")

    text.append("Latest commit:\n")
    text.append(f"  {info.short_id} ", style="yellow")
    text.append(f"{info.summary}\n")
    text.append(f"  {info.author_name} <{info.author_email}>\n", style="dim")
    text.append(f"  {format_timestamp(info.commit_time)}\n", style="dim")

    # The first recent commit is the tip shown above
    if len(info.recent_commits) > 1:
        text.append("\nRecent commits:\n")
        for summary in info.recent_commits[1:]:
            text.append(f"  > {summary}\n")
    return text


class BranchPicker(ListBrowser):
    """
    Pick a branch by fuzzy search; accepting returns the branch name.

    Every printable key extends the query, so only the arrow and page keys
    navigate.
    """

    LIST_TITLE = "Branches"
    DETAIL_TITLE = "Branch Info"
    HELP: ClassVar[list[tuple[str, str]]] = [
        ("↑", "up"),
        ("↓", "down"),
        ("enter", "select"),
        ("esc", "cancel"),
    ]

    def __init__(
        self,
        branches: list[str],
        repo: GxRepository,
        debounce: float = BRANCH_DEBOUNCE_MS / 1000,
        page_size: int = PAGE_SIZE,
        poll_interval: float = POLL_INTERVAL_MS / 1000,
    ) -> None:
        controller: SelectableList[str] = SelectableList(branches, page_size=page_size)
        fetcher: DetailFetcher[str, BranchInfo] = DetailFetcher(repo.branch_info, debounce)
        super().__init__(controller, fetcher, poll_interval=poll_interval, typing=True)

    def list_title(self) -> str:
        return f"Branches ({len(self.controller)})"

    def render_row(self, item: str, selected: bool, width: int) -> Text:
        if selected:
            return Text(f">> {truncate(item, width - 3)}", style="bold yellow on grey30")
        return Text(f"   {truncate(item, width - 3)}")

    def render_detail(self, detail: BranchInfo | None, loading: bool) -> RenderableType:
        if loading:
            return Text("Loading...")
        if detail is None:
            return Text("Select a branch to view details", style="dim")
        return render_branch_info(detail)
