"""Error types shared by the registries, the resolver and the persistence layer.

Every domain error derives from ``CommandError`` so callers that do not care
about the precise failure can catch a single type.  Each concrete error also
subclasses the closest built-in exception, which keeps ``except KeyError`` and
``except ValueError`` call sites working.

Storage failures are not wrapped: they propagate as ``OSError``.
"""
from __future__ import annotations

from pathlib import Path


class CommandError(Exception):
    """Base class for all command-association errors."""


class DuplicateAliasError(CommandError, ValueError):
    """Raised when a strict registration meets an alias that is already taken."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(
            f"A command is already registered under alias {alias!r}. "
            "Use a unique alias or register without strict semantics."
        )


class UnknownAliasError(CommandError, KeyError):
    """Raised when an association or lookup references an unregistered alias."""

    def __init__(self, alias: str) -> None:
        self.alias = alias
        super().__init__(f"No command is registered under alias {alias!r}.")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class InvalidTargetError(CommandError, ValueError):
    """Raised when a configured store path is not a plain file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Not a valid file: {self.path}")


class FormatError(CommandError, ValueError):
    """Raised when a persisted record or document is malformed.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    path:
        The store being read or written, when known.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"

    def with_path(self, path: Path | str) -> "FormatError":
        """Return a copy of this error that names ``path``."""
        return FormatError(self.message, path)
