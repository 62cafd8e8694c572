"""Git backend for reading history and switching branches"""

from gx.git_backend.errors import GitError, GxError, NoMatchError, TerminalError
from gx.git_backend.repository import GxRepository
from gx.git_backend.types import BranchInfo, CommitDescriptor, CommitDetail, LogGraph

__all__ = [
    "BranchInfo",
    "CommitDescriptor",
    "CommitDetail",
    "GitError",
    "GxError",
    "GxRepository",
    "LogGraph",
    "NoMatchError",
    "TerminalError",
]
