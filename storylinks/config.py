"""Load mention resolver config from TOML (e.g. storylinks.toml).

Config file is looked up in order:
  1. Path in STORYLINKS_CONFIG env var (if set)
  2. storylinks.toml in the storylinks package directory
  3. storylinks.toml in the current working directory

Only the ``[mentions]`` table is read. A file that cannot be read or parsed
is skipped and the next path is tried. If no usable file is found, built-in
defaults are used.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_CHARACTER_TITLE = "View character: {name}"
DEFAULT_NOTE_TITLE = "View note: {name}"
DEFAULT_LINK_SCHEME = "mention"


class MentionConfig(BaseModel):
    """Settings shared by the index builder, scanner, caches and renderers.

    Attributes:
        ascii_word_boundaries: Treat only ASCII letters, digits and underscore
            as word characters. Default is Unicode-aware.
        character_title_template: Tooltip template for character mentions.
        note_title_template: Tooltip template for note mentions.
        link_scheme: URL scheme used by the markdown and node renderers.
        max_index_entries: LRU size for memoized candidate indexes.
        max_scan_entries: LRU size for memoized chapter scans.
    """

    model_config = {"frozen": True}

    ascii_word_boundaries: bool = Field(False, description="Use ASCII-only word characters for boundaries")
    character_title_template: str = Field(DEFAULT_CHARACTER_TITLE, description="Tooltip for character mentions")
    note_title_template: str = Field(DEFAULT_NOTE_TITLE, description="Tooltip for note mentions")
    link_scheme: str = Field(DEFAULT_LINK_SCHEME, min_length=1, description="URL scheme for mention links")
    max_index_entries: int = Field(64, gt=0, description="Maximum memoized candidate indexes")
    max_scan_entries: int = Field(256, gt=0, description="Maximum memoized chapter scans")

    @field_validator("character_title_template", "note_title_template")
    @classmethod
    def template_must_use_name(cls, value: str) -> str:
        if "{name}" not in value:
            raise ValueError("title template must contain a {name} placeholder")
        return value

    @field_validator("link_scheme")
    @classmethod
    def scheme_must_be_bare(cls, value: str) -> str:
        if not value.isalnum():
            raise ValueError("link_scheme must be alphanumeric (no ':' or '/')")
        return value


def _default_config_paths() -> list[Path]:
    """Return paths to check for storylinks.toml (first existing wins)."""
    paths: list[Path] = []
    if os.environ.get("STORYLINKS_CONFIG"):
        paths.append(Path(os.environ["STORYLINKS_CONFIG"]))
    paths.append(Path(__file__).resolve().parent / "storylinks.toml")
    paths.append(Path.cwd() / "storylinks.toml")
    return paths


def load_config(paths: list[Path] | None = None) -> MentionConfig:
    """Load the ``[mentions]`` table from the first TOML file that exists.

    Args:
        paths: Candidate files to try in order. Defaults to the lookup order
            described in the module docstring.

    Returns:
        A MentionConfig. Unknown keys are ignored; values of the wrong type
        raise pydantic's ValidationError.
    """
    data: dict[str, Any] = {}
    for path in paths if paths is not None else _default_config_paths():
        if path.is_file():
            try:
                with open(path, "rb") as f:
                    raw = tomllib.load(f)
            except (OSError, ValueError):
                continue
            section = raw.get("mentions")
            if isinstance(section, dict):
                data = {k: v for k, v in section.items() if k in MentionConfig.model_fields}
            break
    return MentionConfig(**data)
