"""Tests for the fxc command-line interface."""

from typer.testing import CliRunner
from watchdog.events import FileModifiedEvent

from fxc.main import ShaderChangeHandler, app

runner = CliRunner()


def test_help():
    """Test that the CLI help command works."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Compile an FX shader file" in result.stdout


def test_missing_argument():
    """Test that a missing input path exits with status 1."""
    result = runner.invoke(app, [])
    assert result.exit_code == 1


def test_missing_file(tmp_path):
    """Test that an unreadable input exits with status 1."""
    result = runner.invoke(app, [str(tmp_path / "absent.fx")])
    assert result.exit_code == 1


def test_watch_missing_directory(tmp_path):
    """Test that --watch exits with status 1 when the input cannot be read."""
    result = runner.invoke(app, [str(tmp_path / "missing" / "shader.fx"), "--watch"])
    assert result.exit_code == 1


def test_syntax_error(write_fx):
    """Test that a parse failure exits with status 1 and writes nothing."""
    path = write_fx("shader S { float x; }")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 1
    assert sorted(p.name for p in path.parent.iterdir()) == ["shader.fx"]


def test_unexpected_character(write_fx):
    """Test that an unknown character exits with status 1."""
    path = write_fx("shader S { void vertex() { a = b % c; } }")
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 1


def test_compile(write_fx, legacy_source):
    """Test a successful compilation."""
    path = write_fx(legacy_source)
    result = runner.invoke(app, [str(path)])
    assert result.exit_code == 0

    vert = path.parent / "shader.fx_Basic.vert.glsl"
    frag = path.parent / "shader.fx_Basic.frag.glsl"
    meta = path.parent / "shader.fx_Basic.meta"
    assert vert.read_text().startswith("#version 330 core\n")
    assert "out vec4 fragColor;" in frag.read_text()
    assert meta.read_text().startswith("shader Basic\nuniforms 0\n")


def test_no_precision(write_fx, legacy_source):
    """Test that --no-precision drops the precision statement."""
    path = write_fx(legacy_source)
    result = runner.invoke(app, [str(path), "--no-precision"])
    assert result.exit_code == 0
    vert = path.parent / "shader.fx_Basic.vert.glsl"
    assert "precision" not in vert.read_text()


def test_log_level_from_environment(write_fx, legacy_source):
    """Test that the log level can come from FXC_LOG_LEVEL."""
    path = write_fx(legacy_source)
    result = runner.invoke(app, [str(path)], env={"FXC_LOG_LEVEL": "DEBUG"})
    assert result.exit_code == 0


def test_invalid_log_level(write_fx, legacy_source):
    """Test that an unknown log level exits with status 1."""
    path = write_fx(legacy_source)
    result = runner.invoke(app, [str(path), "--log-level", "LOUD"])
    assert result.exit_code == 1


class TestShaderChangeHandler:
    """Tests for the watch mode handler."""

    def test_rebuild_on_change(self, write_fx, legacy_source):
        """Test that modifying the watched file recompiles it."""
        path = write_fx(legacy_source)
        handler = ShaderChangeHandler(str(path))

        handler.on_modified(FileModifiedEvent(str(path)))

        assert handler.rebuilds == 1
        assert (path.parent / "shader.fx_Basic.meta").exists()

    def test_other_files_ignored(self, write_fx, legacy_source, tmp_path):
        """Test that changes to other files are ignored."""
        path = write_fx(legacy_source)
        handler = ShaderChangeHandler(str(path))

        handler.on_modified(FileModifiedEvent(str(tmp_path / "other.fx")))

        assert handler.rebuilds == 0

    def test_rebuild_failure_is_reported(self, write_fx):
        """Test that a broken file does not raise in watch mode."""
        path = write_fx("shader S {")
        handler = ShaderChangeHandler(str(path))

        assert handler.rebuild() is False
        assert handler.rebuilds == 1
