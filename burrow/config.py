"""Burrow configuration management.

Runtime settings come from the environment; plugin configurations are
validated once at configure time and frozen afterwards.
"""

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, ClassVar, Self

from pydantic import Field, TypeAdapter, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from burrow._version import __version__
from burrow.core.models import Action
from burrow.core.tagging import TagRule, build_tag_rule
from burrow.exceptions import config_error_from_validation
from burrow.parsers.options import ParserOptions

logger = logging.getLogger(__name__)

# Keys understood by the host engine rather than by the plugin
RESERVED_KEYS = {"type", "@type", "name", "match"}

_BOOL = TypeAdapter(bool)


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BURROW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "burrow"
    app_version: str = __version__
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Defaults applied to plugin configurations
    record_time_key: str = "time"
    warn_unknown_options: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> str:
        level = str(v).strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{v}'")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class BurrowConfig(ParserOptions):
    """Options shared by the burrow filter and output plugins."""

    plugin_label: ClassVar[str] = "burrow"
    allowed_actions: ClassVar[tuple[Action, ...]] = tuple(Action)

    # Required
    key_name: str = Field(min_length=1)
    format: str = Field(min_length=1)

    # Record format
    action: Action = Action.INPLACE
    keep_key: bool = False

    # Time handling
    keep_time: bool = False
    record_time_key: str = Field(
        default_factory=lambda: get_settings().record_time_key,
        min_length=1,
    )

    @field_validator("action", mode="before")
    @classmethod
    def parse_action(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in Action.values():
                raise ValueError(f"Invalid 'action', must be one of {','.join(Action.values())}")
        return v

    @model_validator(mode="after")
    def check_action_rules(self) -> Self:
        if self.action not in self.allowed_actions:
            allowed = ",".join(action.value for action in self.allowed_actions)
            raise ValueError(f"Invalid 'action', must be one of {allowed}")
        if self.action is Action.INPLACE and self.keep_key:
            raise ValueError("Specifying 'keep_key' with action 'inplace' is not supported")
        return self

    @property
    def parser_options(self) -> ParserOptions:
        """The subset of options handed to the format parser."""
        return ParserOptions.model_validate(
            self.model_dump(include=set(ParserOptions.model_fields))
        )

    @classmethod
    def load(cls, conf: Mapping[str, Any]) -> Self:
        """Validate a raw configuration mapping.

        Args:
            conf: Plugin configuration, e.g. one stage of a pipeline file

        Returns:
            Frozen configuration

        Raises:
            ConfigError: If any option is missing or invalid
        """
        if get_settings().warn_unknown_options:
            unknown = set(conf) - set(cls.model_fields) - RESERVED_KEYS
            for key in sorted(unknown):
                logger.warning(f"Unknown {cls.plugin_label} option '{key}' ignored")

        try:
            return cls.model_validate(dict(conf))
        except ValidationError as e:
            raise config_error_from_validation(
                e, f"Invalid {cls.plugin_label} configuration"
            ) from e


class BurrowFilterConfig(BurrowConfig):
    """Configuration of the burrow filter."""

    plugin_label: ClassVar[str] = "burrow filter"

    data_prefix: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def check_data_prefix(self) -> Self:
        if self.action is Action.PREFIX and not self.data_prefix:
            raise ValueError("You must specify 'data_prefix' with action 'prefix'")
        return self


class BurrowOutputConfig(BurrowConfig):
    """Configuration of the burrow output.

    The legacy ``overlay: true`` flag is accepted as a synonym for
    ``action: overlay``.
    """

    plugin_label: ClassVar[str] = "burrow output"
    allowed_actions: ClassVar[tuple[Action, ...]] = (
        Action.INPLACE,
        Action.OVERLAY,
        Action.REPLACE,
    )

    # Tag format
    tag: str | None = Field(default=None, min_length=1)
    remove_prefix: str | None = Field(default=None, min_length=1)
    add_prefix: str | None = Field(default=None, min_length=1)

    overlay: bool = False

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_overlay(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "overlay" not in data:
            return data

        try:
            overlay = _BOOL.validate_python(data["overlay"])
        except ValidationError as e:
            raise ValueError(f"Invalid 'overlay' value {data['overlay']!r}, must be a boolean") from e
        if not overlay:
            return data

        action = data.get("action")
        action = getattr(action, "value", action)
        if action is not None and str(action).strip().lower() != Action.OVERLAY.value:
            raise ValueError(
                f"Specifying 'overlay' with action '{action}' is not supported"
            )
        return {**data, "action": Action.OVERLAY.value}

    @model_validator(mode="after")
    def check_tag_rules(self) -> Self:
        build_tag_rule(self.tag, self.remove_prefix, self.add_prefix)
        return self

    @property
    def tag_rule(self) -> TagRule:
        """The closed tag-rewrite variant for these options."""
        return build_tag_rule(self.tag, self.remove_prefix, self.add_prefix)
