"""Options shared by all format parsers."""

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class ParserOptions(BaseModel):
    """Format parser options.

    Every option has a default so parsers can be built without any
    configuration. Format-specific options are ignored by parsers that
    do not use them.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Time handling
    time_key: str = "time"
    time_format: str | None = None
    keep_time_key: bool = False

    # csv / tsv
    keys: list[str] = []

    # ltsv
    delimiter: str = "\t"
    label_delimiter: str = ":"

    # regexp
    expression: str | None = None

    # none
    message_key: str = "message"

    # Null conversion
    null_value_pattern: str | None = None
    null_empty_string: bool = False

    @field_validator("keys", mode="before")
    @classmethod
    def parse_keys(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [key.strip() for key in v.split(",") if key.strip()]
        return v

    @field_validator("null_value_pattern")
    @classmethod
    def check_null_value_pattern(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid regular expression: {e}") from e
        return v

    @field_validator("delimiter", "label_delimiter")
    @classmethod
    def check_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v
