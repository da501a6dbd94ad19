"""The render stage: select, load resources, render concurrently, rename."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path, PurePosixPath

from ..core.errors import ConfigurationError
from ..core.matching import match_files
from ..core.models import Files, RenderOptions, RenderSettings, Site, VirtualFile
from ..rendering.compiler import Compiler
from ..rendering.context import CONTENTS_KEY, initial_context, split_file
from ..rendering.registry import TemplateRegistry
from ..resources.helpers import HelperLoader
from ..resources.loader import load_layouts, register_helpers, register_partials

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


def select_files(files: Files, pattern: str) -> list[str]:
    """Return the paths this stage processes; an empty match is an error."""
    selected = match_files(list(files), pattern)
    if not selected:
        raise ConfigurationError(f"Pattern '{pattern}' did not match any files.")
    return selected


def resolve_resource_dir(site: Site, directory: Path | None) -> Path | None:
    if directory is None:
        return None
    return (site.directory / directory).resolve()


def move_file(
    files: Files, filename: str, extension: str, output_extension: str = ".html"
) -> str:
    """Rename ``filename`` from the template suffix to ``output_extension``.

    Returns:
        The file's path after the move (unchanged when not applicable)
    """
    path = PurePosixPath(filename)
    newname = str(path.with_name(path.stem + output_extension))

    # don't rename if it's identical or not applicable
    if newname != filename and path.suffix == extension:
        files[newname] = files.pop(filename)
        return newname
    return filename


async def load_resources(
    options: RenderOptions,
    site: Site,
    registry: TemplateRegistry,
    helper_loader: HelperLoader | None = None,
) -> dict[str, str]:
    """Load layouts and register partials and helpers concurrently.

    Returns:
        The layout map
    """
    layouts, _, _ = await asyncio.gather(
        load_layouts(resolve_resource_dir(site, options.layouts), options.extension),
        register_partials(
            registry, resolve_resource_dir(site, options.partials), options.extension
        ),
        register_helpers(
            registry, resolve_resource_dir(site, options.helpers), helper_loader
        ),
    )
    return layouts


async def render_file(
    filename: str, file: VirtualFile, settings: RenderSettings, compiler: Compiler
) -> bytes:
    """Render one file, returning its new contents without writing them."""
    contents, locals_ = split_file(file)
    if isinstance(contents, bytes):
        # surrogateescape keeps undecodable pass-through bytes intact
        text = contents.decode(ENCODING, errors="surrogateescape")
    else:
        text = str(contents or "")

    logger.debug(f"Rendering {filename}")
    rendered = compiler.compile(
        filename, text, initial_context(settings.metadata, locals_)
    )
    return rendered.encode(ENCODING, errors="surrogateescape")


async def run(
    files: Files,
    site: Site,
    options: RenderOptions | None = None,
    *,
    helper_loader: HelperLoader | None = None,
) -> Files:
    """Run the render stage over ``files`` in place.

    Every selected file is rendered before any contents are written back or
    any file is renamed, so a failing run leaves ``files`` untouched.

    Args:
        files: The host's file set (path -> file)
        site: Base directory and global metadata
        options: Stage options (defaults apply when omitted)
        helper_loader: Loader used to turn helper modules into callables

    Returns:
        The mutated file set
    """
    options = options or RenderOptions()
    pattern = options.effective_pattern

    selected = select_files(files, pattern)
    logger.info(f"Rendering {len(selected)} file(s) matching '{pattern}'")

    registry = TemplateRegistry(strict=options.strict, autoescape=options.autoescape)
    layouts = await load_resources(options, site, registry, helper_loader)

    settings = RenderSettings.for_site(site, options.extension, layouts)
    compiler = Compiler(settings, registry)

    rendered = await asyncio.gather(
        *(render_file(name, files[name], settings, compiler) for name in selected)
    )
    for name, contents in zip(selected, rendered):
        files[name][CONTENTS_KEY] = contents

    # rename files (i.e. .j2 -> .html)
    for name in selected:
        move_file(files, name, options.extension, options.output_extension)

    logger.info(f"Successfully rendered {len(selected)} file(s)")
    return files


def run_sync(
    files: Files,
    site: Site,
    options: RenderOptions | None = None,
    *,
    helper_loader: HelperLoader | None = None,
) -> Files:
    """Blocking wrapper around :func:`run`."""
    return asyncio.run(run(files, site, options, helper_loader=helper_loader))
