"""
Body transformer for modern-dialect stage functions.

Re-renders the tokens of a function body as GLSL text. ``out`` declarations
are rewritten per stage and a small spacing heuristic is applied between
tokens. The closing brace of the function is left for the caller.
"""

from typing import TYPE_CHECKING

from loguru import logger

from fxc.errors import FxSyntaxError
from fxc.models import ShaderStage
from fxc.tokens import Token, TokenKind, is_builtin_type

if TYPE_CHECKING:
    from fxc.parser import Parser

SPACED_OPERATORS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.EQUAL,
        TokenKind.PLUS,
        TokenKind.MINUS,
        TokenKind.ASTERISK,
        TokenKind.SLASH,
        TokenKind.LT,
        TokenKind.GT,
    }
)

# Operators that form a compound assignment with a following '='
COMPOUND_PREFIXES: frozenset[TokenKind] = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH}
)

STATEMENT_BREAK = "\n    "


def needs_space(previous: TokenKind | None, current: TokenKind) -> bool:
    """Decide whether a space goes between two consecutive body tokens.

    Args:
        previous: Kind of the previously emitted token, None at body start
        current: Kind of the token about to be emitted

    Returns:
        True if a single space must be inserted before the current token
    """
    if previous is None:
        return False
    if current is TokenKind.EQUAL and previous in COMPOUND_PREFIXES:
        return False
    if current in SPACED_OPERATORS or previous in SPACED_OPERATORS:
        return True
    if current is TokenKind.IDENTIFIER and (
        previous is TokenKind.IDENTIFIER or is_builtin_type(previous)
    ):
        return True
    return previous is TokenKind.COMMA


class BodyTransformer:
    """Converts the token span of a function body into GLSL text."""

    def __init__(self, parser: "Parser", stage: ShaderStage):
        self.parser = parser
        self.stage = stage
        self.chunks: list[str] = []
        self.previous: TokenKind | None = None

    def transform(self) -> str:
        """Consume tokens up to (not including) the closing brace.

        Returns:
            Rendered GLSL body text
        """
        parser = self.parser
        depth = 0

        while not parser.check(TokenKind.EOF):
            token = parser.current
            if token.kind is TokenKind.LBRACE:
                depth += 1
                self.chunks.append("{")
                parser.advance()
            elif token.kind is TokenKind.RBRACE:
                if depth == 0:
                    break
                depth -= 1
                self.chunks.append("}")
                parser.advance()
            elif token.kind is TokenKind.OUT:
                self._out_declaration()
            else:
                self._emit(token)
                parser.advance()

        return "".join(self.chunks)

    def _emit(self, token: Token) -> None:
        if needs_space(self.previous, token.kind):
            self.chunks.append(" ")
        self.chunks.append(token.text)
        if token.kind is TokenKind.SEMICOLON:
            self.chunks.append(STATEMENT_BREAK)
        self.previous = token.kind

    def _out_declaration(self) -> None:
        """Handle ``out <Type> <Identifier> [: SEMANTIC] ;``.

        Vertex stage: emitted as a GLSL varying declaration.
        Fragment stage: dropped, the generator declares ``fragColor``.
        """
        parser = self.parser
        parser.advance()

        type_token = parser.current
        if not is_builtin_type(type_token.kind):
            raise FxSyntaxError.at(
                f"Expected type after 'out', got {type_token.describe()}", type_token
            )
        parser.advance()

        if self.stage is ShaderStage.VERTEX:
            name_token = parser.expect(TokenKind.IDENTIFIER, "identifier after type")
            self._skip_semantic()
            self.chunks.append(f"out {type_token.text} {name_token.text};\n")
            logger.debug(f"Varying: {type_token.text} {name_token.text}")
        else:
            parser.match(TokenKind.IDENTIFIER)
            self._skip_semantic()
            logger.debug("Dropped fragment output declaration")

        parser.match(TokenKind.SEMICOLON)

    def _skip_semantic(self) -> None:
        if self.parser.match(TokenKind.COLON):
            self.parser.match(TokenKind.IDENTIFIER)


def transform_body(parser: "Parser", stage: ShaderStage) -> str:
    """Render the body at the parser's position for the given stage."""
    return BodyTransformer(parser, stage).transform()
