"""Tests for list navigation and debounced detail lookups."""

from unittest.mock import MagicMock

from gx.git_backend.errors import CommandFailedError
from gx.ui.selectable_list import DetailFetcher, ListState, SelectableList


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestSelectableListNavigation:
    """Test cursor movement and clamping."""

    def make_list(self, count=30, page_size=10):
        return SelectableList([f"item-{i}" for i in range(count)], page_size=page_size)

    def test_starts_at_top(self):
        items = self.make_list()
        assert items.selected_index == 0
        assert items.selected == "item-0"
        assert items.state == ListState.BROWSING

    def test_up_at_top_stays(self):
        items = self.make_list()
        items.up()
        assert items.selected_index == 0

    def test_down_at_bottom_stays(self):
        items = self.make_list(count=3)
        for _ in range(5):
            items.down()
        assert items.selected_index == 2

    def test_paging_clamps(self):
        items = self.make_list(count=25, page_size=10)
        items.page_down()
        assert items.selected_index == 10
        items.page_down()
        items.page_down()
        assert items.selected_index == 24
        items.page_up()
        assert items.selected_index == 14
        items.page_up()
        items.page_up()
        assert items.selected_index == 0

    def test_home_and_end(self):
        items = self.make_list(count=7)
        items.end()
        assert items.selected == "item-6"
        items.home()
        assert items.selected == "item-0"

    def test_empty_list(self):
        """Movement on an empty list never fails and selects nothing."""
        items = SelectableList([])
        items.down()
        items.page_down()
        items.end()
        assert items.selected_index == 0
        assert items.selected is None
        assert len(items) == 0


class TestSelectableListFiltering:
    """Test query filtering."""

    def test_query_filters_and_resets_selection(self):
        items = SelectableList(["main", "develop", "feature/login", "feature/logout"])
        items.down()
        items.down()
        items.set_query("log")
        assert items.state == ListState.FILTERING
        assert items.selected_index == 0
        assert items.filtered == ["feature/login", "feature/logout"]

    def test_no_matches_selects_nothing(self):
        items = SelectableList(["main", "develop"])
        items.set_query("zzz")
        assert items.filtered == []
        assert items.selected is None
        assert items.selected_index == 0
        items.down()
        assert items.selected is None

    def test_typing_and_backspace(self):
        items = SelectableList(["main", "develop"])
        items.type_char("d")
        items.type_char("e")
        assert items.query == "de"
        assert items.filtered == ["develop"]
        items.backspace()
        items.backspace()
        assert items.query == ""
        assert items.filtered == ["main", "develop"]
        assert items.state == ListState.BROWSING

    def test_backspace_on_empty_query(self):
        items = SelectableList(["main"])
        items.backspace()
        assert items.query == ""

    def test_score_order(self):
        items = SelectableList(["main-backup", "main"])
        items.set_query("main")
        assert items.selected == "main"

    def test_display_order_when_not_sorting(self):
        items = SelectableList(["main-backup", "main"], sort_by_score=False)
        items.set_query("main")
        assert items.filtered == ["main-backup", "main"]

    def test_label_function(self):
        items = SelectableList([{"name": "main"}, {"name": "develop"}], label=lambda d: d["name"])
        items.set_query("dev")
        assert items.selected == {"name": "develop"}

    def test_items_unchanged_by_filter(self):
        items = SelectableList(["a", "b"])
        items.set_query("a")
        assert items.items == ["a", "b"]


class TestViewport:
    """Test scrolling the viewport to follow the selection."""

    def test_scrolls_down_with_selection(self):
        items = SelectableList([str(i) for i in range(50)])
        items.move(12)
        assert items.scroll_into_view(5) == 8
        assert [index for index, _ in items.visible(5)] == [8, 9, 10, 11, 12]

    def test_scrolls_back_up(self):
        items = SelectableList([str(i) for i in range(50)])
        items.move(20)
        items.scroll_into_view(5)
        items.move(-18)
        assert items.scroll_into_view(5) == 2

    def test_selection_inside_view_keeps_offset(self):
        items = SelectableList([str(i) for i in range(50)])
        items.move(10)
        items.scroll_into_view(5)
        items.up()
        assert items.scroll_into_view(5) == 6

    def test_short_list_never_scrolls(self):
        items = SelectableList(["a", "b"])
        items.end()
        assert items.scroll_into_view(10) == 0
        assert items.visible(10) == [(0, "a"), (1, "b")]

    def test_filter_resets_offset(self):
        items = SelectableList([str(i) for i in range(50)])
        items.end()
        items.scroll_into_view(5)
        items.set_query("4")
        assert items.scroll_offset == 0


class TestDetailFetcher:
    """Test debounced, at-most-once detail lookups."""

    def test_rapid_moves_fetch_once_for_final_selection(self):
        """Five moves 20ms apart with a 100ms window fetch only the last one."""
        clock = FakeClock()
        fetch = MagicMock(side_effect=lambda key: f"detail of {key}")
        fetcher = DetailFetcher(fetch, window=0.1, clock=clock)

        for key in ["a", "b", "c", "d", "e"]:
            fetcher.observe(key)
            assert fetcher.poll() is False
            clock.advance(0.02)

        clock.advance(0.1)
        assert fetcher.poll() is True

        fetch.assert_called_once_with("e")
        assert fetcher.detail == "detail of e"
        assert fetcher.fetch_count == 1

    def test_stable_selection_fetches_once(self):
        clock = FakeClock()
        fetch = MagicMock(return_value="detail")
        fetcher = DetailFetcher(fetch, window=0.1, clock=clock)

        fetcher.observe("a")
        clock.advance(0.2)
        for _ in range(5):
            fetcher.observe("a")
            fetcher.poll()
            clock.advance(0.05)

        assert fetch.call_count == 1

    def test_change_clears_detail_immediately(self):
        clock = FakeClock()
        fetcher = DetailFetcher(lambda key: key.upper(), window=0.1, clock=clock)

        fetcher.observe("a")
        clock.advance(0.1)
        fetcher.poll()
        assert fetcher.detail == "A"

        assert fetcher.observe("b") is True
        assert fetcher.detail is None
        assert fetcher.loading

    def test_returning_to_earlier_key_fetches_again(self):
        clock = FakeClock()
        fetch = MagicMock(return_value="detail")
        fetcher = DetailFetcher(fetch, window=0.1, clock=clock)

        for key in ["a", "b", "a"]:
            fetcher.observe(key)
            clock.advance(0.15)
            fetcher.poll()

        assert [c.args[0] for c in fetch.call_args_list] == ["a", "b", "a"]

    def test_failed_fetch_leaves_no_detail(self):
        clock = FakeClock()
        fetch = MagicMock(side_effect=CommandFailedError("boom"))
        fetcher = DetailFetcher(fetch, window=0.1, clock=clock)

        fetcher.observe("a")
        clock.advance(0.1)
        assert fetcher.poll() is True
        assert fetcher.detail is None
        assert not fetcher.loading

        # A failure is not retried until the selection changes
        clock.advance(1)
        assert fetcher.poll() is False
        assert fetch.call_count == 1

    def test_no_selection_never_fetches(self):
        clock = FakeClock()
        fetch = MagicMock()
        fetcher = DetailFetcher(fetch, window=0.1, clock=clock)

        fetcher.observe(None)
        clock.advance(1)
        assert fetcher.poll() is False
        assert not fetcher.loading
        fetch.assert_not_called()

    def test_zero_window_fetches_on_first_poll(self):
        clock = FakeClock()
        fetch = MagicMock(return_value="detail")
        fetcher = DetailFetcher(fetch, window=0, clock=clock)

        fetcher.observe("a")
        assert fetcher.poll() is True
