"""
Bulk loading of history metadata for the log browser.

Loading is best effort: a commit or reference that fails to resolve is left
out and counted, so a damaged object never takes the whole view down.
"""

import logging
from dataclasses import dataclass, field

import pygit2

from gx.git_backend.reltime import format_timestamp, now_secs
from gx.git_backend.repository import GxRepository, split_message
from gx.git_backend.types import CommitDescriptor, ParentLinks, RefMap

logger = logging.getLogger(__name__)

# Errors that mean "this one object is unusable" rather than "the repository is"
PARTIAL_DATA_ERRORS = (LookupError, ValueError, pygit2.GitError)


@dataclass
class LoadedHistory:
    """Descriptors in display order plus the parent links between them"""

    entries: list[CommitDescriptor] = field(default_factory=list)
    parents: ParentLinks = field(default_factory=dict)
    skipped: int = 0


def build_ref_map(repo: GxRepository) -> tuple[RefMap, int]:
    """
    Map commit ids to the names of the references pointing at them.

    Returns the map and the number of references that could not be resolved.
    """
    ref_map: RefMap = {}
    skipped = 0

    for name in repo.reference_names():
        try:
            shorthand, commit_id = repo.reference_target(name)
        except PARTIAL_DATA_ERRORS as e:
            logger.debug("Skipping reference %s: %s", name, e)
            skipped += 1
            continue

        names = ref_map.setdefault(commit_id, [])
        if shorthand not in names:
            names.append(shorthand)

    return ref_map, skipped


def describe_commit(commit: pygit2.Commit, refs: list[str], now: int) -> CommitDescriptor:
    summary, _ = split_message(commit.message)
    return CommitDescriptor(
        id=str(commit.id),
        short_id=commit.short_id,
        summary=summary,
        author_name=commit.author.name or "Unknown",
        relative_time=format_timestamp(commit.commit_time, now),
        is_merge=len(commit.parent_ids) > 1,
        refs=tuple(refs),
    )


def load_commits(
    repo: GxRepository,
    start: str,
    limit: int,
    ref_map: RefMap | None = None,
) -> LoadedHistory:
    """
    Walk history from `start` and describe at most `limit` commits.

    Commits come out in topological+time order, so a commit never precedes
    one of its descendants. An unborn HEAD gives an empty history.
    """
    history = LoadedHistory()
    if limit <= 0:
        return history
    if start == "HEAD" and repo.head_is_unborn():
        return history

    if ref_map is None:
        ref_map, history.skipped = build_ref_map(repo)

    walker = repo.walker(start)
    now = now_secs()

    while len(history.entries) < limit:
        try:
            commit = next(walker)
        except StopIteration:
            break
        except pygit2.GitError as e:
            # The walker cannot recover its position; keep what we have
            logger.debug("History walk stopped early: %s", e)
            history.skipped += 1
            break

        try:
            descriptor = describe_commit(commit, ref_map.get(str(commit.id), []), now)
            parent_ids = tuple(str(oid) for oid in commit.parent_ids)
        except PARTIAL_DATA_ERRORS as e:
            logger.debug("Skipping unreadable commit %s: %s", commit.id, e)
            history.skipped += 1
            continue

        history.entries.append(descriptor)
        history.parents[descriptor.id] = parent_ids

    return history
