"""Pagesmith - layout-aware Jinja2 render stage for static sites.

Renders a virtual file set through page templates, named layouts, partials
and helpers, then renames rendered templates to their output suffix.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.errors import (
    AmbiguousResourceError,
    ConfigurationError,
    FrontmatterError,
    HelperLoadError,
    MissingLayoutError,
    PagesmithError,
    ResourceLoadError,
    TemplateRenderError,
)
from .core.models import RenderOptions, RenderSettings, Site
from .pipeline.stage import run, run_sync
from .rendering.compiler import Compiler
from .rendering.registry import TemplateRegistry

__all__ = [
    "AmbiguousResourceError",
    "Compiler",
    "ConfigurationError",
    "FrontmatterError",
    "HelperLoadError",
    "MissingLayoutError",
    "PagesmithError",
    "RenderOptions",
    "RenderSettings",
    "ResourceLoadError",
    "Site",
    "TemplateRegistry",
    "TemplateRenderError",
    "run",
    "run_sync",
]
