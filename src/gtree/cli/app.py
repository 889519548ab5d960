# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
from typing import Optional

import typer

from .. import __version__
from ..adapters.local_fs import LocalFS
from ..domain.errors import ConfigurationError, FilesystemError
from ..domain.options import MAX_DEPTH, TraversalOptions, clamp_depth
from ..ports.filesystem import FilesystemPort
from ..services import ReportService, TraversalEngine

from ..logging_config import setup_logging

setup_logging()

app = typer.Typer(
    help="gtree - directory tree listing with symlink loop detection",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gtree version {__version__}", err=True)
        raise typer.Exit()


def _depth_callback(value: int) -> int:
    """Clamp -d into the supported range instead of rejecting it."""
    return clamp_depth(value)


def _check_start(fs: FilesystemPort, start: Optional[str]) -> str:
    """
    Validate the starting directory before any traversal begins.
    Raises ConfigurationError with the message shown to the user.
    """
    if not start:
        raise ConfigurationError("No starting directory specified")
    try:
        fs.open_dir(start).close()
    except OSError as e:
        logger.debug("open_dir failed for %s: %s", start, e)
        raise ConfigurationError("Invalid starting directory specified") from e
    return start


# ------------------------------
# CLI Command
# ------------------------------


@app.command()
def main(
    start: Optional[str] = typer.Argument(
        None, metavar="STARTING_DIRECTORY", help="Directory to list", show_default=False
    ),
    stats: bool = typer.Option(
        False, "-s", "--stats", help="Show file & size totals for populated directories"
    ),
    follow_links: bool = typer.Option(
        False,
        "-l",
        "--follow-links",
        help="Follow sym-linked directories (loop detection is always enabled)",
    ),
    hidden: bool = typer.Option(
        False, "-j", "--hidden", help="Show entries that start with a ."
    ),
    files: bool = typer.Option(False, "-f", "--files", help="Show individual files"),
    colour: bool = typer.Option(
        False, "-c", "--colour", "--color", help="Show files in colour (implies -f)"
    ),
    max_depth: int = typer.Option(
        MAX_DEPTH,
        "-d",
        "--max-depth",
        metavar="N",
        callback=_depth_callback,
        help="Maximum depth (always at least 2)",
    ),
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        is_eager=True,
        callback=_version_callback,
        help="Show the version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """
    Print the directory tree under STARTING_DIRECTORY followed by a summary.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    fs = LocalFS()
    try:
        root = _check_start(fs, start)
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    options = TraversalOptions(
        show_hidden=hidden,
        show_files=files,
        show_stats=stats,
        follow_links=follow_links,
        colour_files=colour,
        max_depth=max_depth,
    )

    typer.echo(f"gtree version {__version__}", err=True)

    def emit(line: str) -> None:
        typer.echo(line, color=True if options.colour_files else None)

    engine = TraversalEngine(fs, options, emit=emit)
    try:
        report = engine.run(root)
    except FilesystemError as e:
        typer.echo(f"Invalid starting directory specified ({e})", err=True)
        raise typer.Exit(code=1)
    except MemoryError:
        typer.echo("Fatal: out of memory", err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    for line in ReportService(report).summary_lines():
        typer.echo(line)
