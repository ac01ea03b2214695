"""
Data models for parsed FX source.

A parsed file is an ordered list of ``ShaderDef``. Declaration order is kept
everywhere since it decides attribute locations and manifest line order.
"""

from dataclasses import dataclass, field
from enum import Enum


class ShaderStage(Enum):
    """Shader pipeline stage of a function."""

    VERTEX = "vertex"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class UniformDecl:
    """A ``uniform <type> <name>;`` declaration.

    Attributes:
        type_name: One of the builtin type names
        name: Declared identifier
    """

    type_name: str
    name: str


@dataclass(frozen=True)
class InputDecl:
    """An ``input <type> <name>;`` declaration (vertex attribute source).

    Attributes:
        type_name: One of the builtin type names
        name: Declared identifier
    """

    type_name: str
    name: str


Declaration = UniformDecl | InputDecl


@dataclass(frozen=True)
class LegacyOutput:
    """The ``out <type> <name>`` parameter of a legacy fragment function.

    Recorded for documentation only; it does not change generated code.
    """

    type_name: str
    name: str


@dataclass
class FunctionDef:
    """A stage function.

    Attributes:
        name: Function name
        stage: Vertex or fragment stage, None if the function is neither
        body: Raw source text (legacy) or rendered GLSL (modern)
        legacy_output: Output parameter of a legacy fragment function
    """

    name: str
    stage: ShaderStage | None
    body: str
    legacy_output: LegacyOutput | None = None


@dataclass
class ShaderDef:
    """A shader with its declarations and stage functions.

    Attributes:
        name: Shader name, used to build output file names
        uniforms: Uniform declarations in source order
        inputs: Input declarations in source order
        functions: Functions in source order
    """

    name: str
    uniforms: list[UniformDecl] = field(default_factory=list)
    inputs: list[InputDecl] = field(default_factory=list)
    functions: list[FunctionDef] = field(default_factory=list)

    def stage_function(self, stage: ShaderStage) -> FunctionDef | None:
        """Return the first function of the given stage, if any."""
        return next((fn for fn in self.functions if fn.stage is stage), None)

    @property
    def vertex_function(self) -> FunctionDef | None:
        return self.stage_function(ShaderStage.VERTEX)

    @property
    def fragment_function(self) -> FunctionDef | None:
        return self.stage_function(ShaderStage.FRAGMENT)
