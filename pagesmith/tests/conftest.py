"""Shared fixtures: a site directory with layouts, partials and helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from pagesmith.core.models import RenderOptions, Site


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "base.j2").write_text(
        "<html><title>{{ title }}</title>{{ contents }}</html>", encoding="utf-8"
    )
    (layouts / "plain.j2").write_text("[{{ contents }}]", encoding="utf-8")

    partials = tmp_path / "partials"
    partials.mkdir()
    (partials / "byline.j2").write_text("by {{ author }}", encoding="utf-8")

    helpers = tmp_path / "helpers"
    helpers.mkdir()
    (helpers / "shout.py").write_text(
        "def shout(value):\n    return str(value).upper() + '!'\n", encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def site(site_dir: Path) -> Site:
    return Site(directory=site_dir, metadata={"author": "Me.", "title": "Site"})


@pytest.fixture
def options() -> RenderOptions:
    return RenderOptions(
        layouts=Path("layouts"),
        partials=Path("partials"),
        helpers=Path("helpers"),
    )
