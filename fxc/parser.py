"""
Recursive-descent parser for FX source.

Two surface syntaxes share one token stream:

* legacy blocks: ``shader NAME { uniform ...; input ...; void vertex() {...} }``
* standalone shaders: file-scope ``uniform``/``input`` declarations followed by
  ``vertex_shader``/``fragment_shader`` blocks.

Every grammar violation raises ``FxSyntaxError``; nothing here exits.
"""

from dataclasses import replace

from loguru import logger

from fxc.body import transform_body
from fxc.errors import FxSyntaxError
from fxc.lexer import Lexer
from fxc.models import (
    Declaration,
    FunctionDef,
    InputDecl,
    LegacyOutput,
    ShaderDef,
    ShaderStage,
    UniformDecl,
)
from fxc.tokens import Token, TokenKind, is_builtin_type

STAGE_KEYWORDS: dict[TokenKind, ShaderStage] = {
    TokenKind.VERTEX_SHADER: ShaderStage.VERTEX,
    TokenKind.FRAGMENT_SHADER: ShaderStage.FRAGMENT,
}

# Legacy functions are classified by name
LEGACY_STAGE_NAMES: dict[str, ShaderStage] = {
    "vertex": ShaderStage.VERTEX,
    "fragment": ShaderStage.FRAGMENT,
}


class Parser:
    """Parser holding one token of lookahead."""

    def __init__(self, source: str):
        self.source = source
        self.lexer = Lexer(source)
        self.current: Token = self.lexer.next()

    # --- Token helpers ---

    def advance(self) -> Token:
        """Consume the current token and return it."""
        token = self.current
        self.current = self.lexer.next()
        return token

    def check(self, kind: TokenKind) -> bool:
        return self.current.kind is kind

    def match(self, kind: TokenKind) -> bool:
        """Consume the current token if it has the given kind."""
        if self.check(kind):
            self.advance()
            return True
        return False

    def expect(self, kind: TokenKind, what: str) -> Token:
        """Consume a token of the given kind or raise.

        Args:
            kind: Required token kind
            what: Description used in the error message

        Returns:
            The consumed token

        Raises:
            FxSyntaxError: If the current token has another kind
        """
        if not self.check(kind):
            raise FxSyntaxError.at(
                f"Expected {what}, got {self.current.describe()}", self.current
            )
        return self.advance()

    def expect_type(self, context: str) -> Token:
        """Consume a builtin type keyword or raise."""
        if not is_builtin_type(self.current.kind):
            raise FxSyntaxError.at(
                f"Expected type {context}, got {self.current.describe()}",
                self.current,
            )
        return self.advance()

    # --- Declarations ---

    def parse_declaration(self) -> Declaration:
        """Parse ``uniform <Type> <Identifier> ;`` or the ``input`` form."""
        keyword = self.current
        if keyword.kind not in (TokenKind.UNIFORM, TokenKind.INPUT):
            raise FxSyntaxError.at(
                f"Expected 'uniform' or 'input', got {keyword.describe()}", keyword
            )
        self.advance()

        type_token = self.expect_type(f"after '{keyword.text}'")
        name_token = self.expect(
            TokenKind.IDENTIFIER, f"identifier after type in {keyword.text} declaration"
        )
        self.expect(TokenKind.SEMICOLON, "';'")

        logger.debug(
            f"Parsed {keyword.text} {type_token.text} {name_token.text} "
            f"at line {keyword.line}"
        )
        if keyword.kind is TokenKind.UNIFORM:
            return UniformDecl(type_token.text, name_token.text)
        return InputDecl(type_token.text, name_token.text)

    def _collect_declaration(
        self, uniforms: list[UniformDecl], inputs: list[InputDecl]
    ) -> None:
        decl = self.parse_declaration()
        if isinstance(decl, UniformDecl):
            uniforms.append(decl)
        else:
            inputs.append(decl)

    # --- Legacy dialect ---

    def parse_legacy_shader(self) -> ShaderDef:
        """Parse ``shader NAME { ... }``."""
        start = self.expect(TokenKind.SHADER, "'shader'")
        name = self.expect(TokenKind.IDENTIFIER, "shader name").text
        logger.debug(f"Parsing shader block '{name}' at line {start.line}")
        self.expect(TokenKind.LBRACE, "'{'")

        shader = ShaderDef(name=name)
        while not self.check(TokenKind.RBRACE) and not self.check(TokenKind.EOF):
            if self.check(TokenKind.UNIFORM) or self.check(TokenKind.INPUT):
                self._collect_declaration(shader.uniforms, shader.inputs)
            elif self.check(TokenKind.VOID):
                shader.functions.append(self.parse_legacy_function())
            else:
                raise FxSyntaxError.at(
                    f"Unexpected token {self.current.describe()} in shader block",
                    self.current,
                )

        self.expect(TokenKind.RBRACE, "'}' closing shader block")
        return shader

    def parse_legacy_function(self) -> FunctionDef:
        """Parse ``void NAME([out <Type> <Identifier>]) { raw body }``."""
        self.expect(TokenKind.VOID, "'void'")
        name = self.expect(TokenKind.IDENTIFIER, "function name").text
        stage = LEGACY_STAGE_NAMES.get(name)
        if stage is None:
            logger.debug(f"Function '{name}' is not a stage function")

        self.expect(TokenKind.LPAREN, "'('")
        legacy_output = None
        if stage is ShaderStage.FRAGMENT and self.match(TokenKind.OUT):
            type_token = self.expect_type("after 'out' in fragment()")
            out_name = self.expect(TokenKind.IDENTIFIER, "output parameter name")
            legacy_output = LegacyOutput(type_token.text, out_name.text)
        self.expect(TokenKind.RPAREN, "')'")

        self.expect(TokenKind.LBRACE, "'{'")
        body = self._raw_body()
        self.expect(TokenKind.RBRACE, "'}' closing function body")

        return FunctionDef(
            name=name, stage=stage, body=body, legacy_output=legacy_output
        )

    def _raw_body(self) -> str:
        """Capture the source text up to the matching closing brace."""
        start = self.current.offset
        depth = 0
        while True:
            token = self.current
            if token.kind is TokenKind.EOF:
                raise FxSyntaxError.at("Unterminated function body", token)
            if token.kind is TokenKind.RBRACE:
                if depth == 0:
                    break
                depth -= 1
            elif token.kind is TokenKind.LBRACE:
                depth += 1
            self.advance()
        return self.source[start : self.current.offset]

    # --- Modern dialect ---

    def parse_standalone_shader(
        self,
        pending_uniforms: list[UniformDecl],
        pending_inputs: list[InputDecl],
    ) -> ShaderDef:
        """Parse a ``vertex_shader``/``fragment_shader`` block.

        Declarations written between the stage keyword and the function
        signature are local to this shader. File-scope declarations seen so far
        are copied in front of them.
        """
        keyword = self.current
        stage = STAGE_KEYWORDS.get(keyword.kind)
        if stage is None:
            raise FxSyntaxError.at(
                f"Expected 'vertex_shader' or 'fragment_shader', "
                f"got {keyword.describe()}",
                keyword,
            )
        self.advance()
        logger.debug(f"Parsing standalone {stage.value} shader at line {keyword.line}")

        uniforms = [replace(decl) for decl in pending_uniforms]
        inputs = [replace(decl) for decl in pending_inputs]
        while self.check(TokenKind.UNIFORM) or self.check(TokenKind.INPUT):
            self._collect_declaration(uniforms, inputs)

        function = self.parse_modern_function(stage)
        return ShaderDef(
            name=stage.value, uniforms=uniforms, inputs=inputs, functions=[function]
        )

    def parse_modern_function(self, stage: ShaderStage) -> FunctionDef:
        """Parse ``[NAME] (params) { body }`` following a stage keyword."""
        if self.check(TokenKind.IDENTIFIER):
            name = self.advance().text
        else:
            name = stage.value

        self.expect(TokenKind.LPAREN, "'('")
        self._parameter_list()
        self.expect(TokenKind.RPAREN, "')'")

        self.expect(TokenKind.LBRACE, "'{'")
        body = transform_body(self, stage)
        self.expect(TokenKind.RBRACE, "'}' closing function body")

        logger.debug(f"Parsed {stage.value} function '{name}'")
        return FunctionDef(name=name, stage=stage, body=body)

    def _parameter_list(self) -> None:
        """Parse ``Type Identifier [: SEMANTIC]`` items; semantics are dropped."""
        while not self.check(TokenKind.RPAREN) and not self.check(TokenKind.EOF):
            token = self.current
            if not (is_builtin_type(token.kind) or token.kind is TokenKind.IDENTIFIER):
                raise FxSyntaxError.at(
                    f"Expected parameter type, got {token.describe()}", token
                )
            self.advance()
            self.expect(TokenKind.IDENTIFIER, "parameter name")

            if self.match(TokenKind.COLON):
                self.expect(TokenKind.IDENTIFIER, "semantic")

            if self.match(TokenKind.COMMA):
                continue
            if not self.check(TokenKind.RPAREN):
                raise FxSyntaxError.at(
                    f"Expected ',' or ')' in parameter list, "
                    f"got {self.current.describe()}",
                    self.current,
                )

    # --- File ---

    def parse(self) -> list[ShaderDef]:
        """Parse the whole file into shader definitions in source order."""
        shaders: list[ShaderDef] = []
        pending_uniforms: list[UniformDecl] = []
        pending_inputs: list[InputDecl] = []

        while not self.check(TokenKind.EOF):
            kind = self.current.kind
            if kind is TokenKind.SHADER:
                shaders.append(self.parse_legacy_shader())
            elif kind in (TokenKind.UNIFORM, TokenKind.INPUT):
                logger.debug(f"Top-level declaration at line {self.current.line}")
                self._collect_declaration(pending_uniforms, pending_inputs)
            elif kind in STAGE_KEYWORDS:
                shaders.append(
                    self.parse_standalone_shader(pending_uniforms, pending_inputs)
                )
            else:
                raise FxSyntaxError.at(
                    f"Unexpected token {self.current.describe()}", self.current
                )

        logger.debug(f"Parsed {len(shaders)} shader(s)")
        return shaders


def parse_source(source: str) -> list[ShaderDef]:
    """Parse FX source text.

    Args:
        source: Complete FX source

    Returns:
        Shader definitions in source order

    Raises:
        FxSyntaxError: On any lexical or grammar error
    """
    return Parser(source).parse()
