"""Lane assignment for the textual commit graph."""

from collections.abc import Mapping, Sequence

from gx.constants import DEFAULT_START_POINT
from gx.git_backend.log import load_commits
from gx.git_backend.repository import GxRepository
from gx.git_backend.types import CommitDescriptor, LogGraph
from gx.ui.git_graph.types import COMMIT, CONVERGE, DIVERGE, EMPTY, THROUGH


def render_lanes(
    entries: Sequence[CommitDescriptor],
    parents: Mapping[str, Sequence[str]],
) -> list[str]:
    """
    Render one lane diagram per commit.

    `entries` must be in display order (children before parents). Each lane
    slot holds the id of the commit it is waiting for. After every row the
    empty slots are dropped, so a line of history can shift columns between
    rows; lanes are not stable per branch.
    """
    graph_lines: list[str] = []
    lanes: list[str | None] = []

    for entry in entries:
        oid = entry.id
        commit_parents = list(parents.get(oid, ()))

        # A commit can be awaited by several lanes when branches reconverge
        matching = [i for i, lane in enumerate(lanes) if lane == oid]

        if matching:
            commit_lane = matching[0]
        elif None in lanes:
            commit_lane = lanes.index(None)
            lanes[commit_lane] = oid
        else:
            lanes.append(oid)
            commit_lane = len(lanes) - 1

        closing = [i for i in matching if i != commit_lane]

        # Extra merge parents open new lanes after every known lane
        new_lanes: list[tuple[int, str]] = []
        for parent in commit_parents[1:]:
            if parent not in lanes:
                new_lanes.append((len(lanes) + len(new_lanes), parent))

        width = max(len(lanes), max((pos + 1 for pos, _ in new_lanes), default=0))
        new_positions = {pos for pos, _ in new_lanes}

        row = []
        for i in range(width):
            if i == commit_lane:
                row.append(COMMIT)
            elif i in closing:
                row.append(CONVERGE)
            elif i in new_positions:
                row.append(DIVERGE)
            elif i < len(lanes) and lanes[i] is not None:
                row.append(THROUGH)
            else:
                row.append(EMPTY)
        graph_lines.append("".join(row).rstrip())

        for i in closing:
            lanes[i] = None

        lanes[commit_lane] = commit_parents[0] if commit_parents else None

        for pos, parent in new_lanes:
            while len(lanes) <= pos:
                lanes.append(None)
            lanes[pos] = parent

        lanes = [lane for lane in lanes if lane is not None]

    return graph_lines


def build_log_graph(
    repo: GxRepository,
    limit: int,
    start: str = DEFAULT_START_POINT,
) -> LogGraph:
    """Load up to `limit` commits from `start` and lay out their graph"""
    history = load_commits(repo, start, limit)
    graph_lines = render_lanes(history.entries, history.parents)
    return LogGraph(
        entries=tuple(history.entries),
        graph_lines=tuple(graph_lines),
        parents=history.parents,
        skipped=history.skipped,
    )
