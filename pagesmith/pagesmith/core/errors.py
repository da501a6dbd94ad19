"""Exceptions raised by the render stage. Every one of them aborts the run."""

from __future__ import annotations

from pathlib import Path


class PagesmithError(Exception):
    """Base class for render stage failures."""


class ConfigurationError(PagesmithError):
    """Raised when the stage is misconfigured (e.g. pattern matches nothing)."""


class AmbiguousResourceError(ConfigurationError):
    """Raised when two resource files in one directory share a base name."""

    def __init__(self, name: str, paths: list[Path]) -> None:
        self.name = name
        self.paths = paths
        joined = ", ".join(str(p) for p in paths)
        super().__init__(f"Resource name '{name}' is ambiguous: {joined}")


class MissingLayoutError(PagesmithError):
    """Raised when a file references a layout that was not loaded."""

    def __init__(self, layout: str, filename: str) -> None:
        self.layout = layout
        self.filename = filename
        super().__init__(f"Layout '{layout}' doesn't exist. (from '{filename}')")


class TemplateRenderError(PagesmithError):
    """Raised when a template fails to compile or render."""

    def __init__(self, filename: str, message: str) -> None:
        self.filename = filename
        super().__init__(f"Failed to render '{filename}': {message}")


class ResourceLoadError(PagesmithError):
    """Raised on an unexpected filesystem failure while loading resources."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot load '{path}': {message}")


class HelperLoadError(ResourceLoadError):
    """Raised when a helper module cannot be imported or exposes no helper."""


class FrontmatterError(PagesmithError):
    """Raised when a source file's frontmatter is not a valid YAML mapping."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Invalid frontmatter in '{source}': {message}")
