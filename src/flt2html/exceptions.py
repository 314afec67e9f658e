"""Exceptions raised while reading or rendering FLT documents."""

from __future__ import annotations


class Flt2HtmlError(Exception):
    """Base class for all flt2html errors.

    Args:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ParsingError(Flt2HtmlError):
    """The input line stream could not be read.

    Args:
        message: Description of the problem.
        line_index: Zero-based index of the offending line, if known.
    """

    def __init__(self, message: str, line_index: int | None = None) -> None:
        if line_index is not None:
            message = f"line {line_index}: {message}"
        super().__init__(message)
        self.line_index = line_index


class RenderingError(Flt2HtmlError):
    """A rendering pass was aborted.

    Any instance means the document failed to render; no partial output
    is returned.
    """
