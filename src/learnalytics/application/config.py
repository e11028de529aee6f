from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from learnalytics.domain.constants import MAX_MATCH_DISTANCE, MAX_QUEUE_SIZE


def _config_file() -> Path:
    return Path.home() / ".config/learnalytics/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for learnalytics.
    Supports loading from:
    1. Environment variables (LEARNALYTICS_*)
    2. Config file (~/.config/learnalytics/config.toml)
    3. Manual overrides (CLI / request)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEARNALYTICS_",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8787
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Engine limits
    queue_capacity: int = Field(default=MAX_QUEUE_SIZE, ge=0)
    match_max_distance: int = Field(default=MAX_MATCH_DISTANCE, ge=0)

    # Fixed evaluation clock (epoch seconds) for reproducible due computation
    now_epoch: int | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        toml_file = _config_file()
        if toml_file.exists():
            # Earlier sources win: overrides, then env, then the file.
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/learnalytics/config.toml (if exists)
    3. Environment variables (LEARNALYTICS_*)
    4. cli_overrides (non-None values only)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
