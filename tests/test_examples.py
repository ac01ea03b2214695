"""Compile the FX files shipped in examples/."""

from pathlib import Path

import pytest

from fxc.compiler import compile_source, read_source

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"


@pytest.mark.parametrize("path", sorted(EXAMPLES_DIR.glob("*.fx")), ids=lambda p: p.name)
def test_example_compiles(path):
    """Test that every example compiles to at least one stage."""
    compiled = compile_source(read_source(path))
    assert compiled
    assert all(shader.has_output for shader in compiled)


def test_standalone_example_declarations():
    """Test local declarations of the standalone example."""
    vertex, fragment = compile_source(read_source(EXAMPLES_DIR / "standalone.fx"))
    assert "uniform sampler2D albedo;" in fragment.fragment
    assert "albedo" not in vertex.vertex
    assert "out vec3 v_normal;\n" in vertex.vertex
