"""Git module error types."""


class GitError(Exception):
    """Base error for git operations."""

    pass


class RefNotFoundError(GitError):
    """The compare branch could not be resolved."""

    def __init__(self, ref: str) -> None:
        super().__init__(
            f"Could not find the branch to compare to. Does '{ref}' exist?\n"
            "the `--compare-branch` argument allows you to set a different branch."
        )
        self.ref = ref


class DiffFileNotFoundError(GitError):
    """The --diff-file input could not be read."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Could not read the diff file. Make sure '{path}' exists?")
        self.path = path
