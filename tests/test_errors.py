"""Tests for the errors module."""

import pytest

from fxc.errors import (
    FxcError,
    FxSyntaxError,
    NoShadersError,
    OutputWriteError,
    SourceReadError,
    UnexpectedCharacterError,
)
from fxc.tokens import Token, TokenKind


def test_message_with_location():
    """Test that the position is appended to the message."""
    error = FxcError("Expected ';'", line=3, column=14)
    assert str(error) == "Expected ';' at line 3, col 14"
    assert error.message == "Expected ';'"


def test_message_without_location():
    """Test errors that have no source position."""
    assert str(FxcError("No shaders found")) == "No shaders found"
    assert str(FxcError("Bad", line=2)) == "Bad at line 2"


def test_error_at_token():
    """Test creating an error located at a token."""
    token = Token(TokenKind.IDENTIFIER, "foo", 10, 2, 5)
    error = FxSyntaxError.at("Unexpected token 'foo'", token)
    assert isinstance(error, FxSyntaxError)
    assert (error.line, error.column) == (2, 5)


def test_unexpected_character():
    """Test the unexpected character error."""
    error = UnexpectedCharacterError("#", 1, 7)
    assert error.character == "#"
    assert str(error) == "Unexpected character '#' at line 1, col 7"


@pytest.mark.parametrize(
    "error_type",
    [FxSyntaxError, UnexpectedCharacterError, NoShadersError, OutputWriteError, SourceReadError],
)
def test_hierarchy(error_type):
    """Test that every error derives from FxcError."""
    assert issubclass(error_type, FxcError)
    assert issubclass(error_type, Exception)
