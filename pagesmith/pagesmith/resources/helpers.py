"""Loading template helpers from Python modules on disk."""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Protocol

from ..core.errors import HelperLoadError
from ..rendering.registry import Helper

logger = logging.getLogger(__name__)

HELPER_SUFFIX = ".py"


class HelperLoader(Protocol):
    """Anything that turns a helper file into a callable."""

    def load(self, path: Path) -> Helper: ...


class ModuleHelperLoader:
    """Import a helper module by path and return the function named after it.

    ``helpers/shout.py`` must define a callable ``shout``. Modules are not
    added to ``sys.modules``, so repeated runs always import fresh code.
    """

    def load(self, path: Path) -> Helper:
        name = path.stem
        spec = importlib.util.spec_from_file_location(f"pagesmith_helper_{name}", path)
        if spec is None or spec.loader is None:
            raise HelperLoadError(path, "not an importable module")

        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as e:
            raise HelperLoadError(path, f"{type(e).__name__}: {e}") from e

        helper = getattr(module, name, None)
        if not callable(helper):
            raise HelperLoadError(path, f"module defines no callable '{name}'")

        logger.debug(f"Loaded helper {name} from {path}")
        return helper
