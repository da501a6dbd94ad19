"""Run-scoped registry of partials and helpers backing one Jinja2 environment."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping

from jinja2 import DictLoader, Environment, StrictUndefined, Template, Undefined

logger = logging.getLogger(__name__)

Helper = Callable[..., Any]


class TemplateRegistry:
    """Partials and helpers visible to every template compiled in one run.

    A registry is created fresh for each run, so nothing registered by one
    build leaks into the next.
    """

    def __init__(self, *, strict: bool = False, autoescape: bool = False) -> None:
        self._partials: dict[str, str] = {}
        self._helpers: dict[str, Helper] = {}
        self._env = Environment(
            loader=DictLoader(self._partials),
            undefined=StrictUndefined if strict else Undefined,
            autoescape=autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    @property
    def partials(self) -> Mapping[str, str]:
        return MappingProxyType(self._partials)

    @property
    def helpers(self) -> Mapping[str, Helper]:
        return MappingProxyType(self._helpers)

    def register_partial(self, name: str, source: str) -> None:
        """Make ``source`` available as ``{% include "name" %}``."""
        logger.debug(f"Registering partial: {name}")
        self._partials[name] = source

    def register_helper(self, name: str, helper: Helper) -> None:
        """Expose ``helper`` as both a global function and a filter."""
        logger.debug(f"Registering helper: {name}")
        self._helpers[name] = helper
        self._env.globals[name] = helper
        self._env.filters[name] = helper

    def compile(self, source: str) -> Template:
        return self._env.from_string(source)
