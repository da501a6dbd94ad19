"""Reading a source tree into a virtual file set and writing it back out."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import FrontmatterError
from ..core.models import Files
from ..rendering.context import CONTENTS_KEY
from .io import atomic_write_bytes

logger = logging.getLogger(__name__)

_FRONTMATTER = re.compile(
    rb"\A---\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.S | re.M
)


def parse_frontmatter(
    data: bytes, source: str = "<bytes>"
) -> tuple[dict[str, Any], bytes]:
    """Split a leading YAML block delimited by ``---`` lines from the body.

    Args:
        data: Raw file contents
        source: Name used in error messages

    Returns:
        The frontmatter mapping (empty when absent) and the remaining body
    """
    match = _FRONTMATTER.match(data)
    if not match:
        return {}, data

    try:
        meta = yaml.safe_load(match.group(1).decode("utf-8"))
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise FrontmatterError(source, str(e)) from e

    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontmatterError(source, "frontmatter must be a mapping")

    return meta, data[match.end() :]


def read_source_tree(source: Path) -> Files:
    """Read every file under ``source`` into ``{relative/posix/path: file}``."""
    files: Files = {}
    for path in sorted(p for p in source.rglob("*") if p.is_file()):
        key = path.relative_to(source).as_posix()
        meta, body = parse_frontmatter(path.read_bytes(), key)
        files[key] = {**meta, CONTENTS_KEY: body}

    logger.debug(f"Read {len(files)} source file(s) from {source}")
    return files


def write_output_tree(files: Files, dest: Path, file_mode: int = 0o644) -> list[Path]:
    """Write each file's contents below ``dest``.

    Returns:
        Output file paths
    """
    outputs = []
    for key, file in files.items():
        output_path = dest / key
        contents = file.get(CONTENTS_KEY) or b""
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        atomic_write_bytes(output_path, contents, mode=file_mode)
        logger.debug(f"Wrote {key} → {output_path}")
        outputs.append(output_path)
    return outputs
