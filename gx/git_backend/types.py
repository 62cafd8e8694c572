"""Records produced by the git backend."""

from dataclasses import dataclass, field

# commit id -> ordered parent ids; the first parent is the mainline
ParentLinks = dict[str, tuple[str, ...]]

# commit id -> reference shorthands pointing at it, in enumeration order
RefMap = dict[str, list[str]]


@dataclass(frozen=True)
class CommitDescriptor:
    """Minimal per-commit metadata shown in the history list."""

    id: str
    short_id: str
    summary: str
    author_name: str
    relative_time: str
    is_merge: bool
    refs: tuple[str, ...] = ()


@dataclass(frozen=True)
class LogGraph:
    """
    Immutable snapshot of a history browsing session.

    `entries` are in display order (children before parents) and
    `graph_lines[i]` is the lane diagram for `entries[i]`. `skipped` counts
    commits and references that failed to load and were left out.
    """

    entries: tuple[CommitDescriptor, ...]
    graph_lines: tuple[str, ...]
    parents: ParentLinks = field(default_factory=dict)
    skipped: int = 0

    def __post_init__(self) -> None:
        if len(self.entries) != len(self.graph_lines):
            raise ValueError(
                f"LogGraph has {len(self.entries)} entries but {len(self.graph_lines)} graph lines"
            )

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries


@dataclass(frozen=True)
class CommitDetail:
    """Full information about one commit, loaded on demand."""

    full_id: str
    summary: str
    body: str | None
    author_name: str
    author_email: str
    relative_time: str
    parent_ids: tuple[str, ...]
    refs: tuple[str, ...]
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0


@dataclass(frozen=True)
class BranchInfo:
    """Summary of a branch tip, loaded on demand by the branch picker."""

    name: str
    is_current: bool
    short_id: str
    summary: str
    author_name: str
    author_email: str
    commit_time: int
    ahead_behind: tuple[int, int] | None = None
    recent_commits: tuple[str, ...] = ()
