"""
Git repository access using pygit2
"""

import logging
import subprocess
from itertools import islice
from pathlib import Path

import pygit2
from pygit2.enums import CheckoutStrategy, SortMode

from gx.constants import RECENT_COMMITS
from gx.git_backend.errors import (
    CommandFailedError,
    GitError,
    GitNotFoundError,
    NotInRepositoryError,
    ObjectNotFoundError,
)
from gx.git_backend.reltime import format_timestamp
from gx.git_backend.types import BranchInfo, CommitDetail

logger = logging.getLogger(__name__)

# Display order for history: parents never before children, newest first otherwise
LOG_SORT = SortMode.TOPOLOGICAL | SortMode.TIME

# A missing or damaged object; pygit2.NotFoundError is both a KeyError and a GitError
OBJECT_ERRORS = (KeyError, ValueError, pygit2.GitError)


def split_message(message: str) -> tuple[str, str | None]:
    """Split a commit message into its summary line and optional body"""
    lines = message.strip().split("\n")
    summary = lines[0].strip() if lines else ""
    body = "\n".join(lines[1:]).strip()
    return summary, body or None


class GxRepository:
    """Wraps the repository operations gx needs from the engine"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Open the repository containing `repo_path` (defaults to the current directory)"""
        if repo_path is None:
            repo_path = self._find_repo()

        try:
            self.repo = pygit2.Repository(repo_path)
        except pygit2.GitError as e:
            logger.debug("Failed to open repository at %s: %s", repo_path, e)
            raise NotInRepositoryError() from e

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        found = pygit2.discover_repository(str(Path.cwd()))
        if found is None:
            raise NotInRepositoryError()
        return found

    @property
    def workdir(self) -> str:
        return self.repo.workdir or self.repo.path

    # -- resolution -----------------------------------------------------

    def resolve(self, ref: str) -> pygit2.Commit:
        """Resolve a branch, tag, SHA or revision expression to a commit"""
        try:
            obj = self.repo.revparse_single(ref)
            commit = obj if isinstance(obj, pygit2.Commit) else obj.peel(pygit2.Commit)
        except OBJECT_ERRORS as e:
            raise ObjectNotFoundError(ref) from e
        assert isinstance(commit, pygit2.Commit)
        return commit

    def is_valid_commit_ref(self, ref: str) -> bool:
        try:
            self.resolve(ref)
        except ObjectNotFoundError:
            return False
        return True

    def head_is_unborn(self) -> bool:
        return bool(self.repo.head_is_unborn)

    def walker(self, start: str) -> pygit2.Walker:
        """Start a history walk in display order from `start`"""
        commit = self.resolve(start)
        return self.repo.walk(commit.id, LOG_SORT)

    def parents(self, commit_id: str) -> list[str]:
        return [str(oid) for oid in self.resolve(commit_id).parent_ids]

    # -- references -------------------------------------------------------

    def reference_names(self) -> list[str]:
        return list(self.repo.references)

    def reference_target(self, name: str) -> tuple[str, str]:
        """
        Resolve a reference to (shorthand, commit id).

        Symbolic references are followed and annotated tags are peeled, so
        the id is always a commit.
        """
        reference = self.repo.references[name]
        commit = reference.resolve().peel(pygit2.Commit)
        return reference.shorthand, str(commit.id)

    def refs_pointing_at(self, commit_id: str) -> list[str]:
        names: list[str] = []
        for name in self.reference_names():
            try:
                shorthand, target = self.reference_target(name)
            except OBJECT_ERRORS:
                continue
            if target == commit_id and shorthand not in names:
                names.append(shorthand)
        return names

    # -- details ----------------------------------------------------------

    def detail(self, commit_id: str) -> CommitDetail:
        """Load the full detail record for one commit"""
        commit = self.resolve(commit_id)
        try:
            summary, body = split_message(commit.message)
            author_name = commit.author.name or "Unknown"
            author_email = commit.author.email or ""
        except OBJECT_ERRORS as e:
            raise ObjectNotFoundError(commit_id) from e

        # Parents may be missing from a shallow or damaged repository
        parent_ids = []
        for parent_id in commit.parent_ids:
            try:
                parent_ids.append(self.repo[parent_id].short_id)
            except OBJECT_ERRORS:
                parent_ids.append(str(parent_id)[:7])

        files_changed = insertions = deletions = 0
        if commit.parent_ids:
            try:
                first_parent = self.repo[commit.parent_ids[0]]
                stats = self.repo.diff(first_parent, commit).stats
                files_changed = stats.files_changed
                insertions = stats.insertions
                deletions = stats.deletions
            except OBJECT_ERRORS as e:
                logger.debug("No diff stats for %s: %s", commit_id, e)

        return CommitDetail(
            full_id=str(commit.id),
            summary=summary,
            body=body,
            author_name=author_name,
            author_email=author_email,
            relative_time=format_timestamp(commit.commit_time),
            parent_ids=tuple(parent_ids),
            refs=tuple(self.refs_pointing_at(str(commit.id))),
            files_changed=files_changed,
            insertions=insertions,
            deletions=deletions,
        )

    # -- branches -----------------------------------------------------------

    def branches(self) -> list[str]:
        """
        List branch names for checkout.

        Remote branches are listed without their remote prefix, so
        `origin/feature` appears as `feature`. Duplicates are dropped.
        """
        names: list[str] = []
        for name in self.repo.branches.local:
            if name not in names:
                names.append(name)
        for name in self.repo.branches.remote:
            _, _, short = name.partition("/")
            if short and short != "HEAD" and short not in names:
                names.append(short)
        return names

    def _find_branch(self, name: str) -> pygit2.Branch:
        branch = self.repo.branches.local.get(name)
        if branch is not None:
            return branch
        for remote_name in self.repo.branches.remote:
            if remote_name.partition("/")[2] == name:
                return self.repo.branches.remote[remote_name]
        raise ObjectNotFoundError(name)

    def branch_info(self, name: str) -> BranchInfo:
        """Load the tip summary shown next to a branch in the picker"""
        branch = self._find_branch(name)
        try:
            tip = branch.peel(pygit2.Commit)
            summary, _ = split_message(tip.message)
        except OBJECT_ERRORS as e:
            raise ObjectNotFoundError(name) from e

        ahead_behind = None
        try:
            upstream = branch.upstream
            if upstream is not None:
                ahead_behind = self.repo.ahead_behind(tip.id, upstream.target)
        except OBJECT_ERRORS as e:
            logger.debug("No ahead/behind for %s: %s", name, e)

        # Keep whatever was read before the walk hit a missing object
        recent: list[str] = []
        try:
            for commit in islice(self.repo.walk(tip.id, LOG_SORT), RECENT_COMMITS):
                recent.append(split_message(commit.message)[0])
        except OBJECT_ERRORS as e:
            logger.debug("Recent commits of %s cut short: %s", name, e)

        return BranchInfo(
            name=name,
            is_current=bool(branch.is_head()),
            short_id=tip.short_id,
            summary=summary,
            author_name=tip.author.name or "Unknown",
            author_email=tip.author.email or "",
            commit_time=tip.commit_time,
            ahead_behind=ahead_behind,
            recent_commits=tuple(recent),
        )

    # -- working tree operations ---------------------------------------------

    def checkout_commit(self, ref: str) -> str:
        """Detach HEAD at `ref` and update the working tree; returns the short id"""
        commit = self.resolve(ref)
        try:
            self.repo.set_head(commit.id)
            self.repo.checkout_head(strategy=CheckoutStrategy.SAFE)
        except pygit2.GitError as e:
            raise GitError(str(e)) from e
        return commit.short_id

    def checkout_branch(self, name: str) -> None:
        """Check out a branch with git itself, so remote branches get a tracking branch"""
        self._run_git(["checkout", name])

    def fetch(self) -> None:
        self._run_git(["fetch"])

    def _run_git(self, args: list[str]) -> str:
        logger.debug("Running git %s", " ".join(args))
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.workdir,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitNotFoundError() from e

        if result.returncode != 0:
            stderr = result.stderr.strip()
            if "not a git repository" in stderr:
                raise NotInRepositoryError()
            raise CommandFailedError(stderr)
        return result.stdout.strip()
