"""Exceptions raised by ghall."""


class GhallError(Exception):
    """Base exception for ghall."""


class ListingError(GhallError):
    """Raised when the repository list cannot be fetched or decoded."""


class ConfigError(GhallError):
    """Raised when ghall.toml cannot be parsed."""


class CloneError(GhallError):
    """Raised when a clone fails and the policy is to abort."""

    def __init__(self, name: str, returncode: int):
        super().__init__(f"git clone of {name} exited with status {returncode}")
        self.name = name
        self.returncode = returncode
