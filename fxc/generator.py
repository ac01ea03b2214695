"""
GLSL code generation.

Assembles the per-stage GLSL sources of a ``ShaderDef``: a fixed header, the
uniform block, the stage interface and ``void main()`` wrapping the function
body exactly as produced by the parser.
"""

from dataclasses import dataclass

from fxc.models import FunctionDef, InputDecl, ShaderDef, UniformDecl

# Inputs of every fragment shader, independent of what the vertex stage emits
FRAGMENT_VARYINGS: tuple[tuple[str, str], ...] = (
    ("vec3", "v_normal"),
    ("vec3", "v_position"),
    ("vec2", "v_texCoord"),
)

FRAGMENT_OUTPUT = ("vec4", "fragColor")


@dataclass(frozen=True)
class GLSLTarget:
    """Target dialect settings.

    Attributes:
        version: GLSL version number for the ``#version`` directive
        profile: GLSL profile name
        precision: Default float precision, None to omit the statement
    """

    version: int = 330
    profile: str = "core"
    precision: str | None = "highp"

    def version_directive(self) -> str:
        return f"#version {self.version} {self.profile}"

    def precision_qualifiers(self) -> list[str]:
        if self.precision is None:
            return []
        return [f"precision {self.precision} float;"]


DEFAULT_TARGET = GLSLTarget()


@dataclass
class StageSources:
    """Generated GLSL of one shader. A stage is None when it has no function."""

    vertex: str | None
    fragment: str | None


class Emitter:
    """Generates GLSL text for a target."""

    def __init__(self, target: GLSLTarget = DEFAULT_TARGET):
        self.target = target

    def _header(self) -> list[str]:
        lines = [self.target.version_directive()]
        lines.extend(self.target.precision_qualifiers())
        lines.append("")
        return lines

    @staticmethod
    def _uniforms(uniforms: list[UniformDecl]) -> list[str]:
        lines = [f"uniform {u.type_name} {u.name};" for u in uniforms]
        if lines:
            lines.append("")
        return lines

    @staticmethod
    def _vertex_inputs(inputs: list[InputDecl]) -> list[str]:
        # Locations follow declaration order
        lines = [
            f"layout(location = {location}) in {decl.type_name} {decl.name};"
            for location, decl in enumerate(inputs)
        ]
        if lines:
            lines.append("")
        return lines

    @staticmethod
    def _fragment_interface() -> list[str]:
        lines = [f"in {type_name} {name};" for type_name, name in FRAGMENT_VARYINGS]
        lines.append("")
        type_name, name = FRAGMENT_OUTPUT
        lines.append(f"out {type_name} {name};")
        lines.append("")
        return lines

    @staticmethod
    def _main(function: FunctionDef) -> str:
        return f"void main() {{\n{function.body}}}\n"

    def emit_vertex(self, shader: ShaderDef, function: FunctionDef) -> str:
        """Generate the vertex stage source."""
        lines = self._header()
        lines.extend(self._uniforms(shader.uniforms))
        lines.extend(self._vertex_inputs(shader.inputs))
        return "\n".join(lines) + "\n" + self._main(function)

    def emit_fragment(self, shader: ShaderDef, function: FunctionDef) -> str:
        """Generate the fragment stage source."""
        lines = self._header()
        lines.extend(self._uniforms(shader.uniforms))
        lines.extend(self._fragment_interface())
        return "\n".join(lines) + "\n" + self._main(function)

    def emit(self, shader: ShaderDef) -> StageSources:
        """Generate both stages; the first function of each stage is used."""
        vertex_fn = shader.vertex_function
        fragment_fn = shader.fragment_function
        return StageSources(
            vertex=self.emit_vertex(shader, vertex_fn) if vertex_fn else None,
            fragment=self.emit_fragment(shader, fragment_fn) if fragment_fn else None,
        )


def generate_glsl(
    shader: ShaderDef, target: GLSLTarget = DEFAULT_TARGET
) -> StageSources:
    """Generate GLSL for both stages of a shader."""
    return Emitter(target).emit(shader)
