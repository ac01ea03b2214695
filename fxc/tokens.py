"""Token kinds and keyword tables for the FX language."""

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    """Kind of a lexical token."""

    EOF = "end of input"
    IDENTIFIER = "identifier"
    NUMBER = "number"

    # Punctuation
    LBRACE = "{"
    RBRACE = "}"
    LPAREN = "("
    RPAREN = ")"
    SEMICOLON = ";"
    COMMA = ","
    EQUAL = "="
    ASTERISK = "*"
    DOT = "."
    COLON = ":"
    MINUS = "-"
    PLUS = "+"
    SLASH = "/"
    LT = "<"
    GT = ">"
    AMPERSAND = "&"
    PIPE = "|"
    EXCLAMATION = "!"

    # Dialect keywords
    SHADER = "shader"
    UNIFORM = "uniform"
    INPUT = "input"
    VOID = "void"
    OUT = "out"
    VERTEX_SHADER = "vertex_shader"
    FRAGMENT_SHADER = "fragment_shader"

    # Builtin types
    FLOAT = "float"
    VEC2 = "vec2"
    VEC3 = "vec3"
    VEC4 = "vec4"
    MAT4 = "mat4"
    SAMPLER2D = "sampler2D"
    SAMPLERCUBE = "samplerCube"


PUNCTUATION: dict[str, TokenKind] = {
    kind.value: kind
    for kind in (
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.LPAREN,
        TokenKind.RPAREN,
        TokenKind.SEMICOLON,
        TokenKind.COMMA,
        TokenKind.EQUAL,
        TokenKind.ASTERISK,
        TokenKind.DOT,
        TokenKind.COLON,
        TokenKind.MINUS,
        TokenKind.PLUS,
        TokenKind.SLASH,
        TokenKind.LT,
        TokenKind.GT,
        TokenKind.AMPERSAND,
        TokenKind.PIPE,
        TokenKind.EXCLAMATION,
    )
}

BUILTIN_TYPES: frozenset[TokenKind] = frozenset(
    {
        TokenKind.FLOAT,
        TokenKind.VEC2,
        TokenKind.VEC3,
        TokenKind.VEC4,
        TokenKind.MAT4,
        TokenKind.SAMPLER2D,
        TokenKind.SAMPLERCUBE,
    }
)

DIALECT_KEYWORDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.SHADER,
        TokenKind.UNIFORM,
        TokenKind.INPUT,
        TokenKind.VOID,
        TokenKind.OUT,
        TokenKind.VERTEX_SHADER,
        TokenKind.FRAGMENT_SHADER,
    }
)

# Exact, case-sensitive spelling -> kind
KEYWORDS: dict[str, TokenKind] = {
    kind.value: kind for kind in DIALECT_KEYWORDS | BUILTIN_TYPES
}


def is_builtin_type(kind: TokenKind) -> bool:
    """Return True if the kind names one of the builtin GLSL types."""
    return kind in BUILTIN_TYPES


@dataclass(frozen=True)
class Token:
    """A token together with its position in the source text.

    Attributes:
        kind: Token classification
        text: Exact source text of the token (empty for end of input)
        offset: 0-based offset of the first character in the source
        line: 1-based line number
        column: 1-based column number
    """

    kind: TokenKind
    text: str
    offset: int
    line: int
    column: int

    def describe(self) -> str:
        """Human readable form used in diagnostics."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        return f"'{self.text}'"
