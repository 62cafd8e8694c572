"""
Full-screen list browser built on Textual.

One app drives every pick-one-from-a-list screen: a filterable list on the
left, a detail pane on the right that is filled in by a debounced lookup,
and a help bar. Subclasses supply the row/detail rendering and the lookup.
"""

import logging
from typing import Any, ClassVar, Optional

from rich.console import RenderableType
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding, BindingType
from textual.containers import Horizontal, Vertical
from textual.widgets import Static

from gx.constants import POLL_INTERVAL_MS
from gx.git_backend.errors import TerminalError
from gx.ui.selectable_list import DetailFetcher, SelectableList

logger = logging.getLogger(__name__)

SELECTED_ROW_STYLE = "on grey30"


def character_action(
    char: str,
    typing: bool,
    char_actions: dict[str, str],
) -> str | None:
    """
    Decide what a printable key does.

    Returns the name of the action to run, None if the character should be
    appended to the query, or an empty string if the key does nothing.
    """
    if typing:
        return None
    return char_actions.get(char, "")


def render_help_bar(hints: list[tuple[str, str]]) -> Text:
    text = Text()
    for i, (key, action) in enumerate(hints):
        if i > 0:
            text.append("  ")
        text.append(f" {key} ", style="yellow")
        text.append(action, style="dim")
    return text


def truncate(text: str, max_len: int) -> str:
    if len(text) > max_len:
        return text[: max(0, max_len - 3)] + "..."
    return text


class ListBrowser(App[Optional[str]]):
    """
    Base app for list screens.

    The interaction loop polls: every tick re-checks the debounce timer and
    runs the detail lookup inline once the selection has settled. Navigation
    keys are priority bindings; other printable keys go to `on_key`, where
    they either trigger a command or extend the query.
    """

    CSS = """
    #root {
        height: 100%;
    }
    #search {
        height: 3;
        border: round $accent;
    }
    #main {
        height: 1fr;
    }
    #list {
        width: 70%;
        height: 100%;
        border: round $primary;
    }
    #detail {
        width: 30%;
        height: 100%;
        border: round $secondary;
    }
    #help {
        height: 3;
        border: round grey;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("up", "cursor_up", show=False, priority=True),
        Binding("down", "cursor_down", show=False, priority=True),
        Binding("pageup", "page_up", show=False, priority=True),
        Binding("pagedown", "page_down", show=False, priority=True),
        Binding("home", "first", show=False, priority=True),
        Binding("end", "last", show=False, priority=True),
        Binding("enter", "accept", show=False, priority=True),
        Binding("escape", "cancel", show=False, priority=True),
        Binding("backspace", "backspace", show=False, priority=True),
        Binding("ctrl+c", "interrupt", show=False, priority=True),
    ]

    LIST_TITLE = "Items"
    DETAIL_TITLE = "Details"
    SEARCH_TITLE = "Fuzzy Search"
    HELP: ClassVar[list[tuple[str, str]]] = [
        ("↑/↓", "navigate"),
        ("enter", "select"),
        ("esc", "cancel"),
    ]
    # Printable keys that act as commands when not typing into the query
    CHARACTER_ACTIONS: ClassVar[dict[str, str]] = {}

    def __init__(
        self,
        controller: SelectableList[Any],
        fetcher: DetailFetcher[Any, Any],
        poll_interval: float = POLL_INTERVAL_MS / 1000,
        typing: bool = True,
    ) -> None:
        super().__init__()
        self.controller = controller
        self.fetcher = fetcher
        self.poll_interval = poll_interval
        self.typing_query = typing
        self._view_ready = False

    # -- hooks for subclasses ------------------------------------------------

    def selection_key(self, item: Any) -> Any:
        """Key the detail lookup is cached under"""
        return item

    def result_for(self, item: Any) -> str:
        """Value handed back to the caller when `item` is accepted"""
        return str(item)

    def list_title(self) -> str:
        return self.LIST_TITLE

    def render_row(self, item: Any, selected: bool, width: int) -> Text:
        text = Text(truncate(str(item), width))
        if selected:
            text.stylize(SELECTED_ROW_STYLE)
        return text

    def render_detail(self, detail: Any, loading: bool) -> RenderableType:
        if loading:
            return Text("Loading...")
        if detail is None:
            return Text("")
        return Text(str(detail))

    def show_search(self) -> bool:
        return self.typing_query or bool(self.controller.query)

    # -- layout ---------------------------------------------------------------

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            yield Static(id="search")
            with Horizontal(id="main"):
                yield Static(id="list")
                yield Static(id="detail")
            yield Static(render_help_bar(self.HELP), id="help")

    def on_mount(self) -> None:
        self.query_one("#search", Static).border_title = self.SEARCH_TITLE
        self.query_one("#detail", Static).border_title = self.DETAIL_TITLE
        self.query_one("#help", Static).border_title = "Help"
        self.set_interval(self.poll_interval, self._tick)
        self._view_ready = True
        self.refresh_view()
        # Pane sizes are only known once the first layout has run
        self.call_after_refresh(self.refresh_view)

    def on_resize(self, event: events.Resize) -> None:
        if self._view_ready:
            self.call_after_refresh(self.refresh_view)

    # -- interaction loop -------------------------------------------------------

    def _tick(self) -> None:
        """Re-check the debounce timer; the lookup runs inline when it fires"""
        if self.fetcher.poll():
            self._render_detail()

    def _observe_selection(self) -> None:
        selected = self.controller.selected
        key = None if selected is None else self.selection_key(selected)
        self.fetcher.observe(key)

    def refresh_view(self) -> None:
        self._observe_selection()
        self._render_search()
        self._render_list()
        self._render_detail()

    def _render_search(self) -> None:
        search = self.query_one("#search", Static)
        search.display = self.show_search()
        search.update(Text(self.controller.query))

    def _render_list(self) -> None:
        list_view = self.query_one("#list", Static)
        list_view.border_title = self.list_title()
        height = max(1, list_view.size.height)
        width = max(10, list_view.size.width)

        rows = [
            self.render_row(item, index == self.controller.selected_index, width)
            for index, item in self.controller.visible(height)
        ]
        if not rows and self.controller.query:
            rows = [Text("No matches", style="dim")]
        list_view.update(Text("\n").join(rows))

    def _render_detail(self) -> None:
        detail_view = self.query_one("#detail", Static)
        detail_view.update(self.render_detail(self.fetcher.detail, self.fetcher.loading))

    # -- input -------------------------------------------------------------------

    def on_key(self, event: events.Key) -> None:
        if not event.is_printable or event.character is None:
            return
        event.stop()

        action = character_action(event.character, self.typing_query, self.CHARACTER_ACTIONS)
        if action is None:
            self.controller.type_char(event.character)
            self.refresh_view()
        elif action:
            getattr(self, f"action_{action}")()

    def action_cursor_up(self) -> None:
        self.controller.up()
        self.refresh_view()

    def action_cursor_down(self) -> None:
        self.controller.down()
        self.refresh_view()

    def action_page_up(self) -> None:
        self.controller.page_up()
        self.refresh_view()

    def action_page_down(self) -> None:
        self.controller.page_down()
        self.refresh_view()

    def action_first(self) -> None:
        self.controller.home()
        self.refresh_view()

    def action_last(self) -> None:
        self.controller.end()
        self.refresh_view()

    def action_backspace(self) -> None:
        self.controller.backspace()
        self.refresh_view()

    def action_accept(self) -> None:
        selected = self.controller.selected
        if selected is not None:
            self.exit(self.result_for(selected))

    def action_cancel(self) -> None:
        self.exit(None)

    def action_interrupt(self) -> None:
        self.exit(None)


def run_browser(app: ListBrowser) -> str | None:
    """
    Run a browser in the alternate screen and return what the user picked.

    Textual restores the terminal on every exit path, so by the time this
    raises the user's shell is usable again.
    """
    try:
        result = app.run()
    except OSError as e:
        raise TerminalError(f"Could not start the terminal UI: {e}") from e

    logger.debug("Browser exited with %r (return code %s)", result, app.return_code)
    if app.return_code:
        raise TerminalError(f"Terminal UI exited with code {app.return_code}")
    return result
