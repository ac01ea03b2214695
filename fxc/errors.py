"""
Exceptions and error handling for the FX shader compiler.

This module defines the exceptions raised while lexing, parsing and generating
code. Every stage raises instead of exiting; only the command line driver
decides to report the error and terminate.
"""

from typing import Any, Optional


class FxcError(Exception):
    """Base exception for all compiler failures.

    The error optionally carries the source position it refers to. The position
    is appended to the message so that the CLI can log it as is.

    Examples:
        >>> raise FxcError("expected ';'", line=3, column=14)
        FxcError: expected ';' at line 3, col 14
    """

    def __init__(
        self, message: str, line: Optional[int] = None, column: Optional[int] = None
    ):
        """Initialize the exception with a message and an optional position.

        Args:
            message: The error message
            line: 1-based source line where the error occurred
            column: 1-based source column where the error occurred
        """
        self.message = message
        self.line = line
        self.column = column

        location_info = ""
        if line is not None:
            location_info = f" at line {line}"
            if column is not None:
                location_info += f", col {column}"

        super().__init__(f"{message}{location_info}")

    @classmethod
    def at(cls, message: str, token: Any) -> "FxcError":
        """Create an error located at the given token."""
        return cls(message, line=token.line, column=token.column)


class FxSyntaxError(FxcError):
    """Raised for any grammar violation in FX source."""


class UnexpectedCharacterError(FxSyntaxError):
    """Raised when the lexer meets a character outside the token alphabet."""

    def __init__(self, character: str, line: int, column: int):
        self.character = character
        super().__init__(f"Unexpected character {character!r}", line, column)


class NoShadersError(FxcError):
    """Raised when a source file contains no shader definitions."""


class SourceReadError(FxcError):
    """Raised when the FX source file cannot be read."""


class OutputWriteError(FxcError):
    """Raised when a generated file cannot be written."""
