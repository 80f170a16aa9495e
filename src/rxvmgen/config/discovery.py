"""Locating and reading ``rxvmgen.toml``.

Lookup order: ``RXVMGEN_CONFIG`` if set, otherwise the first
``rxvmgen.toml`` found walking up from the start directory (the way git
finds ``.git/``). An explicit ``--config`` path bypasses discovery
entirely; see :meth:`RxvmgenSettings.from_cli`.

A relative ``[templates] directory`` is resolved against the directory
holding the file, so the same config works from any working directory.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import click

from rxvmgen.config.models import RxvmgenConfig

CONFIG_FILENAME = "rxvmgen.toml"
CONFIG_ENV_VAR = "RXVMGEN_CONFIG"


def _candidates(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here / CONFIG_FILENAME
    for parent in here.parents:
        yield parent / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any.

    When ``RXVMGEN_CONFIG`` names a file that does not exist, no config
    applies; the walk-up is not tried as a fallback.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None
    return next((c for c in _candidates(start or Path.cwd()) if c.is_file()), None)


def read_config_table(path: Path) -> dict[str, Any]:
    """Parse *path* into a plain dict with the template directory made absolute.

    Raises:
        click.ClickException: If the file is not valid TOML.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc

    templates = data.get("templates")
    if isinstance(templates, dict) and templates.get("directory"):
        directory = Path(templates["directory"]).expanduser()
        if not directory.is_absolute():
            templates["directory"] = str(path.parent / directory)
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> RxvmgenConfig:
    """Load only the file-backed sections, ignoring CLI flags and env vars.

    Discovers the file from *cwd* when *path* is not given and falls back
    to the code defaults when none applies.
    """
    path = path or find_config(cwd)
    if path is None:
        return RxvmgenConfig()
    return RxvmgenConfig.model_validate(read_config_table(path))
