"""Main CLI application."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import PagesmithError
from ..core.models import RenderOptions, Site
from ..host.sources import read_source_tree, write_output_tree
from ..pipeline import stage
from .parsers import load_metadata_file, parse_file_mode, parse_meta

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pagesmith",
    help="Render Jinja2 pages through layouts, partials and helpers.",
)


@app.command()
def build(
    source: Annotated[
        Path,
        typer.Argument(help="Source directory to read.", metavar="SOURCE"),
    ],
    dest: Annotated[
        Path,
        typer.Argument(help="Destination directory to write.", metavar="DEST"),
    ],
    directory: Annotated[
        str,
        typer.Option(
            "--directory",
            help="Base directory for resource paths (default: cwd).",
            metavar="DIR",
        ),
    ] = "",
    pattern: Annotated[
        Optional[str],
        typer.Option(
            "--pattern",
            help="Glob selecting files to process (default: **/*EXTENSION).",
            metavar="GLOB",
        ),
    ] = None,
    extension: Annotated[
        str,
        typer.Option("--extension", help="Template file suffix.", metavar="EXT"),
    ] = ".j2",
    output_extension: Annotated[
        str,
        typer.Option(
            "--output-extension", help="Suffix for rendered templates.", metavar="EXT"
        ),
    ] = ".html",
    layouts: Annotated[
        Optional[Path],
        typer.Option("--layouts", help="Directory of layout templates.", metavar="DIR"),
    ] = None,
    partials: Annotated[
        Optional[Path],
        typer.Option("--partials", help="Directory of partials.", metavar="DIR"),
    ] = None,
    helpers: Annotated[
        Optional[Path],
        typer.Option("--helpers", help="Directory of helper modules.", metavar="DIR"),
    ] = None,
    metadata_file: Annotated[
        Optional[Path],
        typer.Option(
            "--metadata", help="YAML file of global metadata.", metavar="FILE"
        ),
    ] = None,
    meta: Annotated[
        list[str],
        typer.Option(
            "--meta",
            help="Global metadata entry (format: KEY=VALUE). Repeatable.",
            metavar="KEY=VALUE",
        ),
    ] = [],
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on undefined template variables."),
    ] = False,
    autoescape: Annotated[
        bool,
        typer.Option("--autoescape", help="HTML-escape rendered variables."),
    ] = False,
    file_mode: Annotated[
        str,
        typer.Option(
            "--mode",
            help="File permissions in octal (default: 0644).",
            metavar="OCTAL",
        ),
    ] = "0644",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose logging.",
        ),
    ] = False,
) -> None:
    """Render a source tree of pages into DEST."""
    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    logger.debug("Starting pagesmith")

    # Parse configuration
    metadata = load_metadata_file(metadata_file) if metadata_file else {}
    metadata.update(parse_meta(entry) for entry in meta)
    mode = parse_file_mode(file_mode)

    try:
        options = RenderOptions(
            pattern=pattern,
            extension=extension,
            output_extension=output_extension,
            layouts=layouts,
            partials=partials,
            helpers=helpers,
            strict=strict,
            autoescape=autoescape,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    site = Site(
        directory=Path(directory) if directory else Path.cwd(),
        metadata=metadata,
    )

    try:
        files = read_source_tree(source)
        stage.run_sync(files, site, options)
    except PagesmithError as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e

    outputs = write_output_tree(files, dest, file_mode=mode)
    logger.debug(f"Completed: {len(outputs)} file(s) written")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
