"""Standardized exceptions for the burrow re-parsing stage."""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

# =============================================================================
# Error Detail Model
# =============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = None
    message: str
    code: str | None = None


# =============================================================================
# Custom Exceptions
# =============================================================================


class BurrowException(Exception):
    """Base exception for burrow errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: list[ErrorDetail] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a machine-readable error payload."""
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = [d.model_dump(exclude_none=True) for d in self.details]
        return result


class ConfigError(BurrowException):
    """Invalid plugin or parser configuration.

    Always raised before any event is processed.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: list[ErrorDetail] | None = None,
        code: str = "CONFIG_ERROR",
    ):
        super().__init__(message=message, code=code, details=details)


class UnknownFormatError(ConfigError):
    """Format identifier not present in the parser registry."""

    def __init__(self, format_name: str, available: list[str] | None = None):
        self.format_name = format_name
        message = f"Unknown format '{format_name}'"
        if available:
            message = f"{message}, must be one of {','.join(sorted(available))}"
        super().__init__(
            message=message,
            code="UNKNOWN_FORMAT",
            details=[ErrorDetail(field="format", message=message, code="unknown_format")],
        )


class ParseError(BurrowException):
    """Raw value could not be parsed by a format parser.

    Non-fatal: the extractor turns it into an empty parse outcome.
    """

    def __init__(self, message: str = "Malformed input", format_name: str | None = None):
        self.format_name = format_name
        super().__init__(message=message, code="PARSE_ERROR")


class PluginStateError(BurrowException):
    """Plugin used outside of its configured lifecycle."""

    def __init__(self, plugin: str, state: str, operation: str):
        super().__init__(
            message=f"Cannot {operation} plugin '{plugin}' in state '{state}'",
            code="INVALID_STATE",
        )


# =============================================================================
# Helpers
# =============================================================================


def config_error_from_validation(exc: PydanticValidationError, message: str) -> ConfigError:
    """Translate pydantic validation errors into a ConfigError."""
    details = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or None
        msg = error["msg"]
        # "Value error, ..." prefix added by pydantic for ValueError raised in validators
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        details.append(ErrorDetail(field=field, message=msg, code=error["type"]))

    summary = "; ".join(
        f"{d.field}: {d.message}" if d.field else d.message for d in details
    )
    return ConfigError(message=f"{message}: {summary}" if summary else message, details=details)
