"""
Exception types for Contrail.

Configuration problems are fatal: they propagate out of the renderer and the
CLI turns them into a one-line message and a nonzero exit status. Problems with
the environment (a missing repository, a git command that fails) are handled
inside the segment that hit them and never show up here, with the exception of
GitError, which only lives long enough to be caught by the git segment.
"""


class ContrailError(Exception):
    """Base class for every error the CLI reports to the user."""


class ConfigTypeError(ContrailError):
    """A configuration key holds a value of the wrong kind."""

    def __init__(self, key: str, expected: str, actual: str):
        super().__init__(f"{key}: expected {expected}, found {actual}")
        self.key = key
        self.expected = expected
        self.actual = actual


class ParseError(ContrailError):
    """A configuration value of the right kind could not be parsed."""

    reason = "could not parse value"

    def __init__(self, value, key: str | None = None, detail: str | None = None):
        self.value = value
        self.key = key
        self.detail = detail
        super().__init__(self._message())

    def _message(self) -> str:
        message = f"{self.reason}: {self.value!r}"
        if self.detail:
            message += f" ({self.detail})"
        if self.key:
            message = f"{self.key}: {message}"
        return message


class NoSuchMatchError(ParseError):
    """The value does not match any known color, attribute or shell."""

    reason = "no match for value"


class InvalidFormError(ParseError):
    """The value looks right but is malformed or out of range."""

    reason = "malformed value"


class UnsupportedShellError(NoSuchMatchError):
    reason = "unsupported shell"


class CommandError(ContrailError):
    """An external command in a batch failed."""

    def __init__(self, command: str, detail: str):
        super().__init__(f"command {command!r} failed: {detail}")
        self.command = command
        self.detail = detail


class GitError(Exception):
    """A git query failed. Never escapes the git segment."""
