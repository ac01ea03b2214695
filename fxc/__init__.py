from fxc.compiler import CompiledShader, compile_file, compile_source
from fxc.errors import FxcError, FxSyntaxError, UnexpectedCharacterError
from fxc.manifest import ShaderManifest, load_manifest, read_manifest
from fxc.parser import parse_source

__version__ = "0.1.0"


__all__ = [
    "CompiledShader",
    "compile_file",
    "compile_source",
    "parse_source",
    "FxcError",
    "FxSyntaxError",
    "UnexpectedCharacterError",
    "ShaderManifest",
    "load_manifest",
    "read_manifest",
]
