"""
Compilation pipeline: FX source -> shader definitions -> GLSL + manifest files.

Compilation is a pure function of the source text; only ``write_outputs`` and
``compile_file`` touch the file system.
"""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from fxc.errors import NoShadersError, OutputWriteError, SourceReadError
from fxc.generator import DEFAULT_TARGET, GLSLTarget, generate_glsl
from fxc.manifest import emit_manifest
from fxc.parser import parse_source

# Source bytes map 1:1 onto characters so raw spans round-trip exactly
SOURCE_ENCODING = "latin-1"

VERTEX_SUFFIX = ".vert.glsl"
FRAGMENT_SUFFIX = ".frag.glsl"
MANIFEST_SUFFIX = ".meta"


@dataclass
class CompiledShader:
    """Generated outputs of one shader definition.

    Attributes:
        name: Shader name
        vertex: Vertex stage GLSL, None without a vertex function
        fragment: Fragment stage GLSL, None without a fragment function
        manifest: Manifest text
    """

    name: str
    vertex: str | None
    fragment: str | None
    manifest: str

    @property
    def has_output(self) -> bool:
        return self.vertex is not None or self.fragment is not None


def compile_source(
    source: str, target: GLSLTarget = DEFAULT_TARGET
) -> list[CompiledShader]:
    """Compile FX source text.

    Args:
        source: Complete FX source
        target: GLSL target settings

    Returns:
        One entry per shader definition, in source order

    Raises:
        FxSyntaxError: If the source does not parse
        NoShadersError: If the source defines no shaders
    """
    shaders = parse_source(source)
    if not shaders:
        raise NoShadersError("No shaders found")

    compiled = []
    for shader in shaders:
        stages = generate_glsl(shader, target)
        compiled.append(
            CompiledShader(
                name=shader.name,
                vertex=stages.vertex,
                fragment=stages.fragment,
                manifest=emit_manifest(shader),
            )
        )
    return compiled


def output_base(input_path: str | Path, shader_name: str) -> str:
    """Return ``<inputPath>_<shaderName>``, the prefix of all output files."""
    return f"{input_path}_{shader_name}"


def _write(path: Path, text: str) -> None:
    try:
        path.write_bytes(text.encode(SOURCE_ENCODING))
    except OSError as e:
        raise OutputWriteError(f"Could not open output file: {path} ({e})") from e
    logger.info(f"Generated: {path}")


def write_outputs(input_path: str | Path, compiled: list[CompiledShader]) -> list[Path]:
    """Write generated files next to the input file.

    Shaders without any stage function produce no files.

    Args:
        input_path: Path of the FX source, used as output prefix
        compiled: Results of ``compile_source``

    Returns:
        Paths of written files in write order

    Raises:
        OutputWriteError: If a file cannot be written
    """
    written: list[Path] = []
    seen_bases: set[str] = set()
    for shader in compiled:
        if not shader.has_output:
            logger.warning(
                f"Shader '{shader.name}' has no vertex or fragment function, skipping"
            )
            continue

        logger.info(f"Generating shader: {shader.name}")
        base = output_base(input_path, shader.name)
        if base in seen_bases:
            logger.warning(
                f"Shader name '{shader.name}' repeats, overwriting outputs of {base}"
            )
        seen_bases.add(base)
        outputs = [
            (VERTEX_SUFFIX, shader.vertex),
            (FRAGMENT_SUFFIX, shader.fragment),
            (MANIFEST_SUFFIX, shader.manifest),
        ]
        for suffix, text in outputs:
            if text is None:
                continue
            path = Path(base + suffix)
            _write(path, text)
            written.append(path)
    return written


def read_source(path: str | Path) -> str:
    """Read an FX file.

    Raises:
        SourceReadError: If the file cannot be read
    """
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise SourceReadError(f"Could not open file: {path} ({e})") from e
    logger.debug(f"Read {len(data)} bytes from {path}")
    return data.decode(SOURCE_ENCODING)


def compile_file(
    path: str | Path, target: GLSLTarget = DEFAULT_TARGET
) -> list[Path]:
    """Compile an FX file and write its outputs beside it.

    Returns:
        Paths of the written files
    """
    logger.info(f"Compiling shader: {path}")
    compiled = compile_source(read_source(path), target)
    written = write_outputs(path, compiled)
    logger.info("Compilation completed successfully")
    return written
