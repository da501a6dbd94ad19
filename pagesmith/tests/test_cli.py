"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from pagesmith.cli.app import app
from pagesmith.cli.parsers import coerce_value, load_metadata_file, parse_meta

runner = CliRunner()


@pytest.fixture
def source(site_dir: Path) -> Path:
    src = site_dir / "src"
    (src / "blog").mkdir(parents=True)
    (src / "index.j2").write_text(
        "---\ntitle: Home\nlayout: base\n---\n"
        '<p>{{ shout(title) }} {% include "byline" %} {{ year }}</p>',
        encoding="utf-8",
    )
    (src / "blog" / "post.j2").write_text("{{ title }}", encoding="utf-8")
    (src / "style.css").write_text("body {}", encoding="utf-8")
    return src


def test_build(site_dir: Path, source: Path):
    dest = site_dir / "dest"
    metadata = site_dir / "site.yaml"
    metadata.write_text("title: Site\nauthor: Nobody\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            str(source),
            str(dest),
            "--directory",
            str(site_dir),
            "--layouts",
            "layouts",
            "--partials",
            "partials",
            "--helpers",
            "helpers",
            "--metadata",
            str(metadata),
            "--meta",
            "author=Me.",
            "--meta",
            "year=2024",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (dest / "index.html").read_text(encoding="utf-8") == (
        "<html><title>Home</title><p>HOME! by Me. 2024</p></html>"
    )
    assert (dest / "blog" / "post.html").read_text(encoding="utf-8") == "Site"
    assert (dest / "style.css").read_text(encoding="utf-8") == "body {}"
    assert not (dest / "index.j2").exists()


def test_build_fails_on_missing_layout(site_dir: Path, source: Path):
    dest = site_dir / "dest"

    result = runner.invoke(app, [str(source), str(dest), "--directory", str(site_dir)])

    assert result.exit_code == 1
    assert not dest.exists()


def test_build_fails_on_unmatched_pattern(site_dir: Path, source: Path):
    result = runner.invoke(
        app, [str(source), str(site_dir / "dest"), "--pattern", "foo.bar"]
    )
    assert result.exit_code == 1


def test_build_fails_on_render_error(site_dir: Path, source: Path):
    (source / "broken.j2").write_text("{{ 1 + 'a' }}", encoding="utf-8")
    dest = site_dir / "dest"

    result = runner.invoke(
        app, [str(source), str(dest), "--pattern", "broken.j2"]
    )

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert not dest.exists()


def test_build_rejects_bad_extension(site_dir: Path, source: Path):
    result = runner.invoke(
        app, [str(source), str(site_dir / "dest"), "--extension", "j2"]
    )
    assert result.exit_code != 0


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("False", False), ("42", 42), ("-1.5", -1.5), ("Me.", "Me.")],
)
def test_coerce_value(raw, expected):
    assert coerce_value(raw) == expected


def test_parse_meta():
    assert parse_meta("year=2024") == ("year", 2024)
    assert parse_meta("eq=a=b") == ("eq", "a=b")
    with pytest.raises(typer.BadParameter):
        parse_meta("novalue")
    with pytest.raises(typer.BadParameter):
        parse_meta("=x")


def test_load_metadata_file(tmp_path: Path):
    path = tmp_path / "meta.yaml"
    path.write_text("", encoding="utf-8")
    assert load_metadata_file(path) == {}

    path.write_text("- not\n- a mapping\n", encoding="utf-8")
    with pytest.raises(typer.BadParameter):
        load_metadata_file(path)
