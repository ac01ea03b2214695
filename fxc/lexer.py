"""
Lexer for FX shader source.

The lexer is a pure function of the source text and a cursor: ``next_token``
returns the next token together with the advanced cursor and never mutates
anything. ``Lexer`` wraps it for the parser, which holds a single token of
lookahead.
"""

from dataclasses import dataclass

from fxc.errors import UnexpectedCharacterError
from fxc.tokens import KEYWORDS, PUNCTUATION, Token, TokenKind

_WHITESPACE = " \t\r"


@dataclass(frozen=True)
class LexerState:
    """Cursor into the source text."""

    pos: int = 0
    line: int = 1
    column: int = 1


def _is_ident_start(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z") or char == "_"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _is_ident_char(char: str) -> bool:
    return _is_ident_start(char) or _is_digit(char)


def _skip_trivia(source: str, state: LexerState) -> LexerState:
    """Skip whitespace, line comments and block comments."""
    pos, line, column = state.pos, state.line, state.column
    size = len(source)

    while pos < size:
        char = source[pos]
        if char in _WHITESPACE:
            pos += 1
            column += 1
        elif char == "\n":
            pos += 1
            line += 1
            column = 1
        elif source.startswith("//", pos):
            end = source.find("\n", pos)
            if end == -1:
                end = size
            column += end - pos
            pos = end
        elif source.startswith("/*", pos):
            pos += 2
            column += 2
            while pos < size and not source.startswith("*/", pos):
                if source[pos] == "\n":
                    line += 1
                    column = 1
                else:
                    column += 1
                pos += 1
            # Unterminated comments run to the end of input
            if pos < size:
                pos += 2
                column += 2
        else:
            break

    return LexerState(pos, line, column)


def next_token(source: str, state: LexerState) -> tuple[Token, LexerState]:
    """Lex one token starting at ``state``.

    Args:
        source: Complete source text
        state: Current cursor

    Returns:
        Tuple of (token, cursor after the token). At the end of input a
        zero-length EOF token is returned and the cursor does not move, so
        calling again keeps returning EOF.

    Raises:
        UnexpectedCharacterError: If the next character starts no token
    """
    state = _skip_trivia(source, state)
    start, line, column = state.pos, state.line, state.column

    if start >= len(source):
        return Token(TokenKind.EOF, "", start, line, column), state

    char = source[start]
    pos = start

    if _is_ident_start(char):
        while pos < len(source) and _is_ident_char(source[pos]):
            pos += 1
        text = source[start:pos]
        kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
    elif _is_digit(char):
        while pos < len(source) and _is_digit(source[pos]):
            pos += 1
        # Fractional part only when a digit follows the dot
        if (
            pos + 1 < len(source)
            and source[pos] == "."
            and _is_digit(source[pos + 1])
        ):
            pos += 1
            while pos < len(source) and _is_digit(source[pos]):
                pos += 1
        text = source[start:pos]
        kind = TokenKind.NUMBER
    elif char in PUNCTUATION:
        pos += 1
        text = char
        kind = PUNCTUATION[char]
    else:
        raise UnexpectedCharacterError(char, line, column)

    token = Token(kind, text, start, line, column)
    return token, LexerState(pos, line, column + (pos - start))


class Lexer:
    """Stateful wrapper around ``next_token``."""

    def __init__(self, source: str):
        self.source = source
        self.state = LexerState()

    def next(self) -> Token:
        token, self.state = next_token(self.source, self.state)
        return token


def tokenize(source: str) -> list[Token]:
    """Lex the whole source. The returned list ends with one EOF token."""
    lexer = Lexer(source)
    tokens = [lexer.next()]
    while tokens[-1].kind is not TokenKind.EOF:
        tokens.append(lexer.next())
    return tokens
