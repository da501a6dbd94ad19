"""Recursive composition of page templates and layouts."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, Mapping

from jinja2 import Template, TemplateError

from ..core.errors import MissingLayoutError, TemplateRenderError
from ..core.models import RenderSettings
from .context import layout_context, split_context
from .registry import TemplateRegistry

logger = logging.getLogger(__name__)


def is_template(filename: str, extension: str) -> bool:
    """Whether ``filename`` carries the template suffix."""
    return PurePosixPath(filename).suffix == extension


def layout_name(layout: str, extension: str) -> str:
    """Resolve a layout directive to the base name used as its key.

    Directory components are dropped and a trailing template suffix is
    stripped, so ``page``, ``page.j2`` and ``layouts/page.j2`` all name the
    same layout.
    """
    name = PurePosixPath(str(layout)).name
    if name != extension and name.endswith(extension):
        name = name[: -len(extension)]
    return name


class Compiler:
    """Renders file contents against a context, wrapping them in layouts.

    A file that is a template and names a layout is rendered twice: once for
    its own body against its locals, then once more through the layout with
    the body bound to ``contents``. A file that is neither a template nor
    layout-directed passes through untouched.
    """

    def __init__(self, settings: RenderSettings, registry: TemplateRegistry) -> None:
        self.settings = settings
        self.registry = registry

    def compile(self, filename: str, contents: str, context: Mapping[str, Any]) -> str:
        """Render ``contents`` of ``filename`` against ``context``.

        Args:
            filename: Path of the file, used for the template check and errors
            contents: Raw file contents
            context: Merged variables; may carry a ``layout`` directive

        Returns:
            Rendered text
        """
        layout, locals_ = split_context(context)
        extension = self.settings.extension

        if layout:
            template = self._load_layout(layout, filename)

            # the body is only rendered when it is a template itself
            if is_template(filename, extension):
                contents = self.compile(filename, contents, locals_)

            logger.debug(f"Wrapping {filename} in layout '{layout}'")
            return self._render(template, layout_context(context, contents), filename)

        if is_template(filename, extension):
            template = self._compile(contents, filename)
            return self._render(template, locals_, filename)

        return contents

    def _load_layout(self, layout: str, filename: str) -> Template:
        name = layout_name(layout, self.settings.extension)
        source = self.settings.layouts.get(name)
        # an empty layout file counts as missing
        if not source:
            raise MissingLayoutError(str(layout), filename)
        return self._compile(source, filename)

    def _compile(self, source: str, filename: str) -> Template:
        try:
            return self.registry.compile(source)
        except TemplateError as e:
            raise TemplateRenderError(filename, str(e)) from e

    @staticmethod
    def _render(template: Template, context: Mapping[str, Any], filename: str) -> str:
        try:
            return template.render(context)
        except TemplateError as e:
            raise TemplateRenderError(filename, str(e)) from e
        except Exception as e:
            # helpers and expressions fail with arbitrary exceptions
            raise TemplateRenderError(filename, f"{type(e).__name__}: {e}") from e
