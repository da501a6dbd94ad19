"""Domain models for render configuration, settings and the host site."""

from __future__ import annotations

from pathlib import Path
from typing import Any, MutableMapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# A virtual file: {"contents": bytes, ...local variables}
VirtualFile = MutableMapping[str, Any]

# The host's file set: path -> virtual file
Files = MutableMapping[str, VirtualFile]

DIRNAME_KEY = "__dirname"


class RenderOptions(BaseSettings):
    """Options recognized by the render stage."""

    model_config = SettingsConfigDict(env_prefix="PAGESMITH_", case_sensitive=False)

    pattern: str | None = Field(
        default=None, description="Glob selecting the files to process"
    )
    extension: str = Field(default=".j2", description="Template file suffix")
    output_extension: str = Field(
        default=".html", description="Suffix given to renamed templates"
    )
    partials: Path | None = Field(default=None, description="Partials directory")
    helpers: Path | None = Field(default=None, description="Helpers directory")
    layouts: Path | None = Field(default=None, description="Layouts directory")
    strict: bool = Field(default=False, description="Fail on undefined variables")
    autoescape: bool = Field(default=False, description="HTML-escape output")

    @field_validator("extension", "output_extension")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if not value.startswith(".") or len(value) < 2:
            raise ValueError(f"Suffix must start with '.', got: {value!r}")
        return value

    @property
    def effective_pattern(self) -> str:
        return self.pattern or f"**/*{self.extension}"


class Site(BaseModel):
    """The host pipeline's view: base directory and global metadata."""

    directory: Path = Field(default_factory=Path.cwd, description="Base directory")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Globals")


class RenderSettings(BaseModel):
    """Immutable bundle shared by every render task of one run."""

    model_config = ConfigDict(frozen=True)

    metadata: dict[str, Any] = Field(default_factory=dict)
    extension: str = ".j2"
    layouts: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def for_site(
        cls, site: Site, extension: str, layouts: dict[str, str]
    ) -> RenderSettings:
        """Snapshot site metadata, injecting the working directory."""
        metadata: dict[str, Any] = {DIRNAME_KEY: str(site.directory)}
        metadata.update(site.metadata)
        return cls(metadata=metadata, extension=extension, layouts=dict(layouts))
