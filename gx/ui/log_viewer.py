"""
History browser: the commit graph with a debounced commit detail pane.
"""

from typing import ClassVar

from rich.console import RenderableType
from rich.text import Text

from gx.constants import LOG_DEBOUNCE_MS, PAGE_SIZE, POLL_INTERVAL_MS
from gx.git_backend.repository import GxRepository
from gx.git_backend.types import CommitDescriptor, CommitDetail, LogGraph
from gx.ui.git_graph.types import get_glyph_style
from gx.ui.list_browser import SELECTED_ROW_STYLE, ListBrowser, truncate
from gx.ui.selectable_list import DetailFetcher, SelectableList


def commit_label(entry: CommitDescriptor) -> str:
    """Text a history search matches against"""
    return " ".join([entry.short_id, entry.summary, entry.author_name, *entry.refs])


def render_graph(graph_line: str) -> Text:
    """Render a lane diagram with a space after every column for readability"""
    text = Text()
    for glyph in graph_line:
        text.append(f"{glyph} ", style=get_glyph_style(glyph))
    return text


def render_commit_detail(detail: CommitDetail) -> Text:
    text = Text()
    text.append("Commit: ", style="dim")
    text.append(detail.full_id, style="yellow")
    text.append("\n")

    if detail.refs:
        text.append("Refs: ", style="dim")
        text.append(", ".join(detail.refs), style="cyan")
        text.append("\n")

    text.append("\n")
    text.append(detail.summary, style="bold")
    text.append("\n")

    if detail.body:
        text.append("\n")
        for line in detail.body.splitlines()[:5]:
            text.append(line, style="dim")
            text.append("\n")

    text.append("\n")
    for label, value in [
        ("Author", detail.author_name),
        ("Email", detail.author_email),
        ("Date", detail.relative_time),
    ]:
        text.append(f"{label}: ", style="dim")
        text.append(value)
        text.append("\n")

    if detail.parent_ids:
        text.append("Parents: ", style="dim")
        text.append(", ".join(detail.parent_ids))
        text.append("\n")

    text.append("\n")
    text.append("Changes: ", style="dim")
    text.append(f"+{detail.insertions}", style="green")
    text.append(" ")
    text.append(f"-{detail.deletions}", style="red")
    text.append(f" ({detail.files_changed} files)", style="dim")
    return text


class LogViewer(ListBrowser):
    """
    Browse a LogGraph; accepting a row returns its commit id.

    Letters are commands here (vi-style navigation, `c` to check out, `q` to
    quit). `/` starts a search: while searching, keys extend the query,
    enter keeps the filter and escape clears it.
    """

    LIST_TITLE = "Log"
    DETAIL_TITLE = "Commit Details"
    SEARCH_TITLE = "Search"
    HELP: ClassVar[list[tuple[str, str]]] = [
        ("j/k", "navigate"),
        ("enter/c", "checkout"),
        ("/", "search"),
        ("q/esc", "quit"),
    ]
    CHARACTER_ACTIONS: ClassVar[dict[str, str]] = {
        "k": "cursor_up",
        "j": "cursor_down",
        "g": "first",
        "G": "last",
        "c": "accept",
        "q": "cancel",
        "/": "search",
    }

    def __init__(
        self,
        graph: LogGraph,
        repo: GxRepository,
        debounce: float = LOG_DEBOUNCE_MS / 1000,
        page_size: int = PAGE_SIZE,
        poll_interval: float = POLL_INTERVAL_MS / 1000,
    ) -> None:
        self.graph = graph
        self._graph_lines = {
            entry.id: line for entry, line in zip(graph.entries, graph.graph_lines, strict=True)
        }
        controller: SelectableList[CommitDescriptor] = SelectableList(
            graph.entries, label=commit_label, page_size=page_size, sort_by_score=False
        )
        fetcher: DetailFetcher[str, CommitDetail] = DetailFetcher(repo.detail, debounce)
        super().__init__(controller, fetcher, poll_interval=poll_interval, typing=False)

    def selection_key(self, item: CommitDescriptor) -> str:
        return item.id

    def result_for(self, item: CommitDescriptor) -> str:
        return item.id

    def list_title(self) -> str:
        title = f"Log ({len(self.graph)} commits)"
        if self.controller.query:
            title += f" - {len(self.controller)} matching"
        return title

    def render_row(self, item: CommitDescriptor, selected: bool, width: int) -> Text:
        graph = self._graph_lines.get(item.id, "")
        text = render_graph(graph)
        text.append(f"{item.short_id} ", style="yellow")
        if item.is_merge:
            text.append("Merge ", style="magenta")
        if item.refs:
            text.append(f"({', '.join(item.refs)}) ", style="bold cyan")

        author_time = f" - {item.author_name} {item.relative_time}"
        max_summary = max(10, width - len(text) - len(author_time))
        text.append(truncate(item.summary, max_summary), style="bold white" if selected else "")
        text.append(f" - {item.author_name}", style="blue")
        text.append(f" {item.relative_time}", style="dim")

        if selected:
            text.stylize(SELECTED_ROW_STYLE)
        return text

    def render_detail(self, detail: CommitDetail | None, loading: bool) -> RenderableType:
        if detail is None:
            # A failed lookup leaves the pane empty
            return Text("Loading..." if loading else "")
        return render_commit_detail(detail)

    def action_search(self) -> None:
        self.typing_query = True
        self.refresh_view()

    def action_accept(self) -> None:
        if self.typing_query:
            self.typing_query = False
            self.refresh_view()
            return
        super().action_accept()

    def action_cancel(self) -> None:
        if self.typing_query:
            self.typing_query = False
            self.controller.set_query("")
            self.refresh_view()
            return
        super().action_cancel()
