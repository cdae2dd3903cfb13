"""AssetSettings — CLI flags, ``ASSETCTL_*`` env vars and assetctl.toml merged.

Sources, highest priority first::

    init kwargs (Click flags) > env vars > assetctl.toml > section defaults

Built once per process and frozen; processors receive it through the
Project and never mutate it.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    TomlConfigSettingsSource,
)

from assetctl.config.discovery import find_config
from assetctl.config.models import (
    FeaturesConfig,
    FontsConfig,
    ImagesConfig,
    PathsConfig,
    PathSpec,
    PluginsConfig,
    ScriptsConfig,
    ServerConfig,
    SpriteConfig,
    StylesConfig,
)
from assetctl.domain.types import AssetCategory

# The TOML file for the settings object currently being constructed.
_active_toml: ContextVar[Path | None] = ContextVar("assetctl_active_toml", default=None)


class AssetSettings(BaseSettings):
    """Settings for one assetctl project.

    Attributes:
        project_root: Directory every path-table glob resolves against:
            the config file's parent, or the CWD without one.
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ASSETCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # Output and dispatch flags
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    sync: bool = False

    # assetctl.toml sections
    paths: PathsConfig = Field(default_factory=PathsConfig)
    styles: StylesConfig = Field(default_factory=StylesConfig)
    scripts: ScriptsConfig = Field(default_factory=ScriptsConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
    sprite: SpriteConfig = Field(default_factory=SpriteConfig)
    fonts: FontsConfig = Field(default_factory=FontsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    features: FeaturesConfig = Field(default_factory=FeaturesConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_active_toml.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        no_notify: bool = False,
        no_sprite: bool = False,
        **flags: Any,
    ) -> AssetSettings:
        """Build settings for a CLI invocation.

        *config_path* (``-c``) wins over walk-up discovery. ``--no-notify``
        and ``--no-sprite`` can only switch a feature off, never on.

        Raises:
            click.ClickException: The config file is not valid TOML.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _active_toml.set(toml_path)
        try:
            settings = cls(project_root=project_root, config_path=toml_path, **flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _active_toml.reset(token)

        if not (no_notify or no_sprite):
            return settings
        features = settings.features.model_copy(
            update={
                "notify": settings.features.notify and not no_notify,
                "svg_sprite": settings.features.svg_sprite and not no_sprite,
            }
        )
        return settings.model_copy(update={"features": features})

    # --- Derived views ---

    def path_table(self) -> dict[AssetCategory, PathSpec]:
        return self.paths.table()

    def enabled_categories(self) -> list[AssetCategory]:
        """Categories in a full build, in declaration order."""
        if self.features.svg_sprite:
            return list(AssetCategory)
        return [c for c in AssetCategory if c is not AssetCategory.SPRITE]
