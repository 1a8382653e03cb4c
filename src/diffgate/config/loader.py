"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (CLI options; highest priority)
2. Environment variables (DIFFGATE__KEY)
3. Config file passed with --config-file (TOML or YAML)
4. Built-in defaults (lowest priority)
"""

import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from diffgate.config.models import CoverConfig, QualityConfig, Tool
from diffgate.core.errors import ConfigError

_CONFIG_MODELS: dict[Tool, type[BaseModel]] = {
    Tool.DIFF_COVER: CoverConfig,
    Tool.DIFF_QUALITY: QualityConfig,
}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Config files may spell keys with dashes like the CLI flags."""
    return {key.replace("-", "_"): value for key, value in data.items()}


def _load_toml(path: Path, tool: Tool) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e

    section = data.get("tool", {}).get(tool.value)
    if not isinstance(section, dict):
        raise ConfigError.missing_section(str(path), f"tool.{tool.value}")
    return section


def _load_yaml(path: Path, tool: Tool) -> dict[str, Any]:
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e

    section = data.get(tool.value) if isinstance(data, dict) else None
    if not isinstance(section, dict):
        raise ConfigError.missing_section(str(path), tool.value)
    return section


def load_config_file(path: Path, tool: Tool) -> dict[str, Any]:
    """Read the tool's section from a TOML or YAML config file.

    Raises:
        ConfigError: Missing file, unsupported extension, bad syntax or missing section.
    """
    if not path.exists():
        raise ConfigError.file_not_found(str(path))

    suffix = path.suffix.lower()
    if suffix == ".toml":
        return _normalize_keys(_load_toml(path, tool))
    if suffix in (".yaml", ".yml"):
        return _normalize_keys(_load_yaml(path, tool))
    raise ConfigError.unsupported_file(str(path))


class _FileSource(PydanticBaseSettingsSource):
    """Settings source that reads from a pre-loaded config file section."""

    def __init__(self, settings_cls: type[BaseSettings], file_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._file_config = file_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._file_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return {k: v for k, v in self._file_config.items() if v is not None}


def _make_settings_class(tool: Tool, file_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class with an instance-based file source."""
    base = _CONFIG_MODELS[tool]

    class DiffGateSettings(BaseSettings, base):  # type: ignore[valid-type,misc]
        """Env vars: DIFFGATE__COMPARE_BRANCH, DIFFGATE__FAIL_UNDER, etc."""

        model_config = SettingsConfigDict(
            env_prefix="DIFFGATE__",
            env_nested_delimiter="__",
            case_sensitive=False,
            extra="ignore",
        )

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > config file
            return (init_settings, env_settings, _FileSource(settings_cls, file_config))

    return DiffGateSettings


def load_config(
    tool: Tool,
    config_file: Path | None = None,
    **overrides: Any,
) -> CoverConfig | QualityConfig:
    """Load config: defaults < config file < env vars < overrides.

    Args:
        tool: Which gate the configuration is for.
        config_file: Optional TOML/YAML file holding the tool's section.
        **overrides: Values given on the command line. None means "not given".

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On unreadable config files or validation errors.
    """
    file_config = load_config_file(config_file, tool) if config_file else {}
    given = {key: value for key, value in overrides.items() if value is not None}

    settings_cls = _make_settings_class(tool, file_config)
    try:
        settings = settings_cls(**given)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    model = _CONFIG_MODELS[tool]
    return model.model_validate(settings.model_dump())  # type: ignore[return-value]
