"""Exception hierarchy for sphinxql."""

from pathlib import Path


class SphinxQLError(Exception):
    """Base exception for all sphinxql errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all sphinxql errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(SphinxQLError):
    """Configuration-related errors."""

    pass


class ConfigNotFoundError(ConfigError):
    """Configuration file not found (non-fatal, defaults used)."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Builder Errors
class BuilderError(SphinxQLError):
    """Statement construction errors."""

    pass


class UnsupportedFilterValueError(BuilderError):
    """A filter value has a shape that cannot be turned into a comparison."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.value = value
        self.reason = reason
        message = f"Unsupported filter value: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class StatementError(BuilderError):
    """Mutation arguments cannot form a valid statement."""

    def __init__(self, statement: str, reason: str) -> None:
        self.statement = statement
        self.reason = reason
        super().__init__(f"Cannot build {statement} statement: {reason}")


# Input Errors
class FilterParseError(SphinxQLError):
    """Raised when a filter expression cannot be parsed."""

    def __init__(self, expression: str, message: str) -> None:
        self.expression = expression
        super().__init__(f"Failed to parse filter expression '{expression}': {message}")
