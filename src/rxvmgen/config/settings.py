"""RxvmgenSettings — CLI flags, env vars and ``rxvmgen.toml`` merged into one object.

Sources, highest priority first:

1. keyword arguments (the global CLI flags)
2. ``RXVMGEN_*`` environment variables, ``__`` between section and key
   (``RXVMGEN_FORMAT__ENABLED=false``)
3. the ``rxvmgen.toml`` located by :mod:`rxvmgen.config.discovery`
4. defaults baked into the section models
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from rxvmgen.config.discovery import find_config, read_config_table
from rxvmgen.config.models import ClassifyConfig, FormatConfig, TemplatesConfig

# Config file for the settings object under construction. Pydantic builds
# sources from the class, so the path travels beside the call.
_loading_from: ContextVar[Path | None] = ContextVar("rxvmgen_loading_from", default=None)


@contextmanager
def _loading(path: Path | None) -> Iterator[None]:
    token = _loading_from.set(path)
    try:
        yield
    finally:
        _loading_from.reset(token)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by one ``rxvmgen.toml`` table."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._table: dict[str, Any] = read_config_table(toml_path) if toml_path else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._table.get(field_name), field_name, field_name in self._table

    def __call__(self) -> dict[str, Any]:
        return self._table


class RxvmgenSettings(BaseSettings):
    """Everything a command needs to know about how it was invoked.

    Built once by the root CLI group and carried in :class:`AppContext`.

    Attributes:
        project_root: Directory holding the config file, else the working
            directory (or whatever the caller passed).
        config_path: The config file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RXVMGEN_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    classify: ClassifyConfig = Field(default_factory=ClassifyConfig)
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)
    format: FormatConfig = Field(default_factory=FormatConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No dotenv or secrets directory support.
        return init_settings, env_settings, TomlSettingsSource(settings_cls, _loading_from.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> RxvmgenSettings:
        """Locate the config file and build settings with *cli_flags* on top.

        An explicit *config_path* must exist; otherwise the file is
        discovered from *project_root* (default: the working directory).

        Raises:
            click.ClickException: If *config_path* does not exist, the
                config file is not valid TOML, or a setting is unknown or
                has the wrong type.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        try:
            with _loading(toml_path):
                return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            where = f" in {toml_path}" if toml_path else ""
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            msg = f"Invalid configuration{where}: {problems}"
            raise click.ClickException(msg) from exc
