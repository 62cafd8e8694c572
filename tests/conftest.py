"""Shared fixtures: small pygit2 repositories built commit by commit."""

import os

import pygit2
import pytest
from pygit2.enums import FileMode

from gx.git_backend.repository import GxRepository


class RepoBuilder:
    """Creates commits with increasing timestamps and explicit parents."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.repo = pygit2.init_repository(path, initial_head="main")
        self._time = 1_700_000_000

    def commit(
        self,
        message: str,
        parents: list[str] | None = None,
        files: dict[str, str] | None = None,
        branch: str | None = "main",
    ) -> str:
        """Create a commit and optionally move `branch` to it; returns the hex id"""
        self._time += 60
        signature = pygit2.Signature("Test Author", "test@example.com", self._time, 0)

        builder = self.repo.TreeBuilder()
        for name, content in (files or {}).items():
            builder.insert(name, self.repo.create_blob(content.encode("utf-8")), FileMode.BLOB)
        tree = builder.write()

        oid = self.repo.create_commit(None, signature, signature, message, tree, parents or [])
        if branch is not None:
            self.repo.references.create(f"refs/heads/{branch}", oid, force=True)
        return str(oid)

    def drop_object(self, oid: str) -> None:
        """Delete a loose object, leaving the repository damaged"""
        os.remove(os.path.join(self.repo.path, "objects", oid[:2], oid[2:]))

    def gx(self) -> GxRepository:
        return GxRepository(self.path)


@pytest.fixture
def builder(tmp_path) -> RepoBuilder:
    return RepoBuilder(str(tmp_path / "repo"))
