"""File selection with minimatch-style glob patterns."""

from __future__ import annotations

from typing import Iterable

from wcmatch import glob

# ``**`` spans directories, ``{a,b}`` expands; ``*`` never crosses ``/``
GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE


def match_files(paths: Iterable[str], pattern: str) -> list[str]:
    """Return the paths matching ``pattern`` as whole paths, in input order.

    A pattern naming a directory does not select the files below it; use
    ``dir/**`` for that.
    """
    return [path for path in paths if glob.globmatch(path, pattern, flags=GLOB_FLAGS)]
