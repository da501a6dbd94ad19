"""Splitting and merging of per-file render contexts."""

from __future__ import annotations

from typing import Any, Mapping

CONTENTS_KEY = "contents"
LAYOUT_KEY = "layout"


def split_file(file: Mapping[str, Any]) -> tuple[Any, dict[str, Any]]:
    """Separate a file's ``contents`` from its local variables."""
    locals_ = {k: v for k, v in file.items() if k != CONTENTS_KEY}
    return file.get(CONTENTS_KEY), locals_


def split_context(context: Mapping[str, Any]) -> tuple[Any, dict[str, Any]]:
    """Separate the ``layout`` directive from the remaining variables."""
    locals_ = {k: v for k, v in context.items() if k != LAYOUT_KEY}
    return context.get(LAYOUT_KEY), locals_


def initial_context(
    metadata: Mapping[str, Any], locals_: Mapping[str, Any]
) -> dict[str, Any]:
    """Global metadata overlaid with file locals; locals win on conflict."""
    context = dict(metadata)
    context.update(locals_)
    return context


def layout_context(context: Mapping[str, Any], contents: str) -> dict[str, Any]:
    """The full, unsplit context with ``contents`` bound to the inner render."""
    merged = dict(context)
    merged[CONTENTS_KEY] = contents
    return merged
