"""Loading directories of layouts, partials and helpers."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Iterable

from ..core.errors import AmbiguousResourceError, ResourceLoadError
from ..rendering.registry import TemplateRegistry
from .helpers import HELPER_SUFFIX, HelperLoader, ModuleHelperLoader

logger = logging.getLogger(__name__)


async def list_directory(
    directory: Path | None, suffixes: str | Iterable[str]
) -> list[Path]:
    """List entries of ``directory`` whose suffix is one of ``suffixes``.

    An unset or nonexistent directory yields no entries.
    """
    if directory is None:
        return []

    wanted = {suffixes} if isinstance(suffixes, str) else set(suffixes)
    try:
        entries = await asyncio.to_thread(lambda: sorted(directory.iterdir()))
    except FileNotFoundError:
        logger.debug(f"Resource directory not found, skipping: {directory}")
        return []
    except OSError as e:
        raise ResourceLoadError(directory, e.strerror or str(e)) from e

    return [entry for entry in entries if entry.suffix in wanted]


async def read_text(path: Path) -> str | None:
    """Read ``path`` as UTF-8, returning None when it is a directory."""
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except IsADirectoryError:
        return None
    except OSError as e:
        raise ResourceLoadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise ResourceLoadError(path, str(e)) from e


async def load_directory(
    directory: Path | None, suffixes: str | Iterable[str]
) -> dict[str, str]:
    """Read matching files of ``directory`` into a ``{stem: text}`` mapping.

    Entries that turn out to be directories are skipped. Two files sharing a
    stem (e.g. ``page.j2`` and ``page.jinja``) are rejected as ambiguous.

    Args:
        directory: Directory to read, or None
        suffixes: Suffix or suffixes to accept

    Returns:
        Mapping of file stem to contents
    """
    paths = await list_directory(directory, suffixes)
    texts = await asyncio.gather(*(read_text(path) for path in paths))

    loaded: dict[str, str] = {}
    seen: dict[str, Path] = {}
    for path, text in zip(paths, texts):
        if text is None:
            continue
        if path.stem in seen:
            raise AmbiguousResourceError(path.stem, [seen[path.stem], path])
        seen[path.stem] = path
        loaded[path.stem] = text

    return loaded


async def load_layouts(directory: Path | None, extension: str) -> dict[str, str]:
    layouts = await load_directory(directory, extension)
    logger.debug(f"Loaded {len(layouts)} layout(s)")
    return layouts


async def register_partials(
    registry: TemplateRegistry, directory: Path | None, extension: str
) -> None:
    """Register every template in ``directory`` as a partial."""
    partials = await load_directory(directory, extension)
    for name, source in partials.items():
        registry.register_partial(name, source)


async def register_helpers(
    registry: TemplateRegistry,
    directory: Path | None,
    loader: HelperLoader | None = None,
) -> None:
    """Register every ``.py`` module in ``directory`` as a helper."""
    loader = loader or ModuleHelperLoader()
    for path in await list_directory(directory, HELPER_SUFFIX):
        if path.is_dir():
            continue
        helper = await asyncio.to_thread(loader.load, path)
        registry.register_helper(path.stem, helper)
