"""Main CLI entry point for the confluence-analyze command.

This module provides the Typer application that analyzes a Confluence XML
export and writes the migration lookup tables into a workspace directory.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from migrate_confluence import __version__
from migrate_confluence.cli.analyze_command import AnalyzeCommand
from migrate_confluence.cli.models import ExitCode
from migrate_confluence.cli.output import OutputHandler

app = typer.Typer(
    name="confluence-analyze",
    help="""Analyze a Confluence XML export for a MediaWiki migration.

EXAMPLE:
  confluence-analyze ./export                          # Analyze all entities.xml below ./export
  confluence-analyze ./export --workspace ./workspace  # Choose where tables are written
  confluence-analyze ./export --config analyzer.yaml   # Custom analyzer settings""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)

# Package logger configured by the CLI; third-party loggers are left alone
PACKAGE_LOGGER = "migrate_confluence"

VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
}


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Only the package logger is configured, so analysis messages can be
    raised to DEBUG without turning on lxml or rich internals. The root
    logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2 or more=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.setLevel(level)

    date_format = "%Y-%m-%d %H:%M:%S"

    # Terminal: short lines next to the rich summary
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)8s] %(message)s", datefmt=date_format
    ))
    app_logger.addHandler(console_handler)

    if not logdir:
        return

    # One file per run, named after the local start time
    log_path = Path(logdir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"confluence-analyze_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    # File lines carry the logger name of the emitting module
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt=date_format
    ))
    app_logger.addHandler(file_handler)

    logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"confluence-analyze version {__version__}")
        raise typer.Exit()


@app.command()
def main_command(
    source: str = typer.Argument(
        ...,
        help=(
            "Export directory or metadata document; only files named entities.xml "
            "(or the configured metadata_filename) are analyzed"
        ),
    ),
    workspace: str = typer.Option(
        AnalyzeCommand.DEFAULT_WORKSPACE_DIR,
        "--workspace",
        "-w",
        help="Directory for the lookup tables (loaded before and saved after analysis)",
        metavar="DIR",
    ),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Analyzer configuration file (YAML)",
        metavar="FILE",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Analyze a Confluence XML export for a MediaWiki migration.

    Writes namespace prefixes, target page titles, attachment file references,
    revision fingerprints and invalid titles as YAML tables into the workspace.
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    command = AnalyzeCommand(
        workspace_dir=workspace,
        config_path=config,
        output_handler=output,
    )

    try:
        exit_code = command.run(source)
    except Exception as e:
        logger.exception("Unexpected error during analysis")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the console script."""
    app()


# Allow running as: python -m migrate_confluence.cli.main
if __name__ == "__main__":
    main()
