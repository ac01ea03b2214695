"""Command line interface for fxc.

Compiles one FX source file into ``<input>_<shader>.vert.glsl``,
``<input>_<shader>.frag.glsl`` and ``<input>_<shader>.meta`` files written next
to it. Exit status is 0 on success and 1 on any failure.
"""

import os
import sys
import time
from collections.abc import Callable
from typing import Any, Optional, TypeVar, cast

import arrow
import typer
import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from fxc.compiler import compile_file
from fxc.errors import FxcError, SourceReadError
from fxc.generator import DEFAULT_TARGET, GLSLTarget

F = TypeVar("F", bound=Callable[..., Any])


def typed_command(app_command: Any) -> Callable[[F], F]:
    """Wrap typer command with proper typing for mypy."""

    def decorator(func: F) -> F:
        return cast(F, app_command(func))

    return decorator


app = typer.Typer(
    name="fxc",
    help="Compile FX shader files into GLSL sources and binding manifests.",
    add_completion=False,
)

LOG_FORMAT = "[{level}] {message}"


def _configure_logging(level: str) -> None:
    """Send log records to stderr at the requested level."""
    logger.remove()
    try:
        logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
    except ValueError as e:
        logger.add(sys.stderr, level="INFO", format=LOG_FORMAT)
        logger.error(f"Invalid log level: {level}")
        raise typer.Exit(1) from e


def _run_compile(source_file: str, target: GLSLTarget) -> Optional[FxcError]:
    """Compile once, logging failures. Returns the error, None on success."""
    try:
        compile_file(source_file, target)
    except FxcError as e:
        logger.error(str(e))
        return e
    return None


class ShaderChangeHandler(FileSystemEventHandler):  # type: ignore
    """Recompiles the source file whenever it is modified."""

    def __init__(self, source_file: str, target: GLSLTarget = DEFAULT_TARGET):
        """Initialize the handler.

        Args:
            source_file: Path to the FX file
            target: GLSL target settings
        """
        self.source_file = source_file
        self.target = target
        self.rebuilds = 0

    def on_modified(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle file modified event.

        Args:
            event: File system event
        """
        if os.path.abspath(event.src_path) != os.path.abspath(self.source_file):
            return
        logger.info(f"Detected changes in {self.source_file}")
        self.rebuild()

    def rebuild(self) -> bool:
        """Recompile the source file; errors are logged, not raised."""
        ok = _run_compile(self.source_file, self.target) is None
        self.rebuilds += 1
        timestamp = arrow.now().format("HH:mm:ss")
        status = "succeeded" if ok else "failed"
        logger.info(f"Rebuild {status} at {timestamp}")
        return ok


def _watch(source_file: str, target: GLSLTarget) -> None:
    observer = watchdog.observers.Observer()
    handler = ShaderChangeHandler(source_file, target)

    # Watch the file's directory, not the file itself
    directory = os.path.dirname(os.path.abspath(source_file))
    observer.schedule(handler, path=directory, recursive=False)
    observer.start()
    logger.info(f"Watching {source_file} for changes (Ctrl+C to stop)...")

    try:
        while True:
            time.sleep(0.1)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, stopping...")
    finally:
        observer.stop()
        observer.join()


@typed_command(app.command())
def main(
    source_file: Optional[str] = typer.Argument(
        None, help="FX source file to compile", show_default=False
    ),
    watch: bool = typer.Option(
        False, "--watch", "-w", help="Recompile whenever the source file changes"
    ),
    precision: bool = typer.Option(
        True,
        "--precision/--no-precision",
        help="Emit the 'precision highp float;' statement",
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", "-l", envvar="FXC_LOG_LEVEL", help="Logging level"
    ),
) -> None:
    """Compile an FX shader file.

    Example: fxc shaders/basic.fx
    """
    _configure_logging(log_level)

    if not source_file:
        logger.error("Usage: fxc <file.fx>")
        raise typer.Exit(1)

    target = GLSLTarget(precision="highp" if precision else None)
    error = _run_compile(source_file, target)

    if watch:
        if isinstance(error, SourceReadError):
            raise typer.Exit(1)
        _watch(source_file, target)
        return

    if error is not None:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
