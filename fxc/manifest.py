"""
Binding manifest emission and reading.

The manifest is a line oriented text file::

    shader <name>
    uniforms 0
    uniform <type> <name>
    inputs 0
    input <type> <name>

The ``uniforms``/``inputs`` count fields are always written as ``0``. Runtime
loaders must not rely on them; they resolve bind locations by looking up every
listed name in the linked program. ``read_manifest`` does exactly that.
"""

from dataclasses import dataclass, field
from pathlib import Path

from loguru import logger

from fxc.models import InputDecl, ShaderDef, UniformDecl

# Written verbatim into both count lines
MANIFEST_COUNT_PLACEHOLDER = 0


def emit_manifest(shader: ShaderDef) -> str:
    """Render the manifest text of a shader."""
    lines = [f"shader {shader.name}", f"uniforms {MANIFEST_COUNT_PLACEHOLDER}"]
    lines.extend(f"uniform {u.type_name} {u.name}" for u in shader.uniforms)
    lines.append(f"inputs {MANIFEST_COUNT_PLACEHOLDER}")
    lines.extend(f"input {i.type_name} {i.name}" for i in shader.inputs)
    return "\n".join(lines) + "\n"


@dataclass
class ShaderManifest:
    """Bindings listed in a manifest file."""

    name: str | None = None
    uniforms: list[UniformDecl] = field(default_factory=list)
    inputs: list[InputDecl] = field(default_factory=list)

    @property
    def uniform_names(self) -> list[str]:
        return [u.name for u in self.uniforms]

    @property
    def input_names(self) -> list[str]:
        return [i.name for i in self.inputs]


def read_manifest(text: str) -> ShaderManifest:
    """Parse manifest text.

    Count lines are ignored and so are lines that do not have the expected
    number of fields.

    Args:
        text: Manifest file contents

    Returns:
        Parsed manifest
    """
    manifest = ShaderManifest()
    for lineno, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        match fields:
            case ["shader", name]:
                manifest.name = name
            case ["uniform", type_name, name]:
                manifest.uniforms.append(UniformDecl(type_name, name))
            case ["input", type_name, name]:
                manifest.inputs.append(InputDecl(type_name, name))
            case ["uniforms" | "inputs", _]:
                pass
            case _:
                logger.warning(f"Ignoring malformed manifest line {lineno}: {line!r}")
    return manifest


def load_manifest(path: str | Path) -> ShaderManifest:
    """Read and parse a ``.meta`` file."""
    return read_manifest(Path(path).read_text(encoding="latin-1"))
