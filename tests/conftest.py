"""Fixtures and configuration for pytest."""

import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from loguru import logger

LEGACY_SOURCE = textwrap.dedent(
    """\
    // Legacy block syntax
    shader Basic {
        uniform mat4 mvp;
        uniform vec3 color;
        input vec3 position;
        input vec2 uv;

        void vertex() {
            gl_Position = mvp * vec4(position, 1.0);
        }

        void fragment(out vec4 result) {
            result = vec4(color, 1.0);
        }
    }
    """
)

MODERN_SOURCE = textwrap.dedent(
    """\
    /* Standalone syntax */
    uniform mat4 mvp;
    input vec3 position;
    input vec3 normal;

    vertex_shader main(vec3 position : POSITION, vec3 normal : NORMAL) {
        out vec3 v_normal : NORMAL;
        v_normal = normal;
        gl_Position = mvp * vec4(position, 1.0);
    }

    fragment_shader(vec3 v_normal : NORMAL) {
        out vec4 color : SV_Target;
        fragColor = vec4(v_normal, 1.0);
    }
    """
)


@pytest.fixture
def legacy_source() -> str:
    """FX source using a legacy shader block."""
    return LEGACY_SOURCE


@pytest.fixture
def modern_source() -> str:
    """FX source using standalone vertex/fragment shaders."""
    return MODERN_SOURCE


@pytest.fixture
def write_fx(tmp_path: Path) -> Callable[[str, str], Path]:
    """Fixture returning a helper that writes an FX file into tmp_path."""

    def _write(source: str, name: str = "shader.fx") -> Path:
        path = tmp_path / name
        path.write_bytes(source.encode("latin-1"))
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the default loguru sink after tests that reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr)
