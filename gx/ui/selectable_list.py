"""
Navigation state shared by every pick-one-from-a-list screen.

`SelectableList` owns the selection, viewport and query filter;
`DetailFetcher` turns selection changes into at most one detail lookup per
stable selection. Neither knows anything about the terminal.
"""

import logging
import time
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Generic, TypeVar

from gx.constants import PAGE_SIZE
from gx.git_backend.errors import GitError
from gx.ui.fuzzy import filter_matches, rank

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")
D = TypeVar("D")


class ListState(Enum):
    BROWSING = "browsing"
    FILTERING = "filtering"


class SelectableList(Generic[T]):
    """
    Selection over a query-filtered list of candidates.

    `selected_index` always indexes the filtered list; when the filtered
    list is empty it is 0 and `selected` is None.
    """

    def __init__(
        self,
        items: Sequence[T],
        label: Callable[[T], str] = str,
        page_size: int = PAGE_SIZE,
        sort_by_score: bool = True,
    ) -> None:
        self._items = list(items)
        self._label = label
        self.page_size = page_size
        self.sort_by_score = sort_by_score

        self.query = ""
        self.selected_index = 0
        self.scroll_offset = 0
        self._filtered = list(self._items)

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def filtered(self) -> list[T]:
        return list(self._filtered)

    @property
    def state(self) -> ListState:
        return ListState.FILTERING if self.query else ListState.BROWSING

    @property
    def selected(self) -> T | None:
        if not self._filtered:
            return None
        return self._filtered[self.selected_index]

    def __len__(self) -> int:
        return len(self._filtered)

    # -- query ----------------------------------------------------------

    def set_query(self, query: str) -> None:
        self.query = query
        if self.sort_by_score:
            self._filtered = rank(query, self._items, self._label)
        else:
            self._filtered = filter_matches(query, self._items, self._label)
        self.selected_index = 0
        self.scroll_offset = 0

    def type_char(self, char: str) -> None:
        self.set_query(self.query + char)

    def backspace(self) -> None:
        if self.query:
            self.set_query(self.query[:-1])

    # -- movement ---------------------------------------------------------

    def move(self, delta: int) -> None:
        self.selected_index = self._clamp(self.selected_index + delta)

    def up(self) -> None:
        self.move(-1)

    def down(self) -> None:
        self.move(1)

    def page_up(self) -> None:
        self.move(-self.page_size)

    def page_down(self) -> None:
        self.move(self.page_size)

    def home(self) -> None:
        self.selected_index = 0

    def end(self) -> None:
        self.selected_index = self._clamp(len(self._filtered) - 1)

    def _clamp(self, index: int) -> int:
        if not self._filtered:
            return 0
        return max(0, min(index, len(self._filtered) - 1))

    # -- viewport -----------------------------------------------------------

    def scroll_into_view(self, visible_height: int) -> int:
        """Adjust `scroll_offset` so the selection is inside a viewport of the given height"""
        visible_height = max(1, visible_height)
        if self.selected_index >= self.scroll_offset + visible_height:
            self.scroll_offset = self.selected_index - visible_height + 1
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        max_offset = max(0, len(self._filtered) - visible_height)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset))
        return self.scroll_offset

    def visible(self, visible_height: int) -> list[tuple[int, T]]:
        """(filtered index, item) pairs inside the current viewport"""
        start = self.scroll_into_view(visible_height)
        window = self._filtered[start : start + max(1, visible_height)]
        return list(enumerate(window, start))


class DetailFetcher(Generic[K, D]):
    """
    Debounced, at-most-once detail lookup for the highlighted item.

    Call `observe()` with the current selection key on every tick and
    `poll()` afterwards. A changed key drops the cached detail at once; the
    lookup itself only runs after the key has stayed the same for `window`
    seconds.
    """

    def __init__(
        self,
        fetch: Callable[[K], D],
        window: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self.window = window
        self._clock = clock

        self.key: K | None = None
        self.detail: D | None = None
        self.pending = False
        self.fetch_count = 0
        self._changed_at = clock()

    @property
    def loading(self) -> bool:
        return self.pending

    def observe(self, key: K | None) -> bool:
        """Record the current selection; returns True if it changed"""
        if key == self.key:
            return False
        self.key = key
        self.detail = None
        self.pending = key is not None
        self._changed_at = self._clock()
        return True

    def poll(self) -> bool:
        """Run the lookup if the selection has been stable long enough; returns True if it ran"""
        if not self.pending or self._clock() - self._changed_at < self.window:
            return False

        self.pending = False
        key = self.key
        assert key is not None
        self.fetch_count += 1
        try:
            self.detail = self._fetch(key)
        except GitError as e:
            logger.debug("Detail lookup for %s failed: %s", key, e)
            self.detail = None
        return True
