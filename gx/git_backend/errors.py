"""
Error types raised by gx.

Every error carries an optional `help` hint that the CLI prints after the
message.
"""


class GxError(Exception):
    """Base class for all errors reported to the user"""

    help: str | None = None

    def __init__(self, message: str, help: str | None = None) -> None:
        super().__init__(message)
        if help is not None:
            self.help = help


class GitError(GxError):
    """The version-control engine failed"""


class NotInRepositoryError(GitError):
    help = "Run gx from inside a git working tree."

    def __init__(self) -> None:
        super().__init__("Not in a git repository")


class GitNotFoundError(GitError):
    help = "Ensure that 'git' is installed and available in your PATH."

    def __init__(self) -> None:
        super().__init__("Git executable not found.")


class CommandFailedError(GitError):
    """A `git` subprocess exited with a non-zero status"""

    def __init__(self, stderr: str) -> None:
        super().__init__(f"Git command failed: {stderr}")
        self.stderr = stderr


class ObjectNotFoundError(GitError):
    def __init__(self, ref: str) -> None:
        super().__init__(
            f"Could not resolve '{ref}' to a commit",
            help="Pass a branch name, tag, or commit SHA that exists in this repository.",
        )
        self.ref = ref


class NoMatchError(GitError):
    def __init__(self, query: str) -> None:
        super().__init__(
            f"No branch or commit matches query: {query}",
            help=(
                f"The search string '{query}' didn't match any local or remote branches. "
                "Try 'gx checkout' to search for valid branches."
            ),
        )
        self.query = query


class TerminalError(GxError):
    """The full-screen terminal session could not run to completion"""

    help = "The terminal has been restored; rerun with logging.file set to inspect the failure."
