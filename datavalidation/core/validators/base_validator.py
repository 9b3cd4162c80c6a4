"""
Base validator interface for all rule kinds.

All validators inherit from BaseValidator and implement check(). Parameter
problems are raised from __init__ so that a broken rule document fails when it
is loaded, not while a record is being validated.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class ValidationError(Exception):
    """Raised when a value violates a rule."""

    def __init__(self, rule_name: str, field_name: str, message: str):
        self.rule_name = rule_name
        self.field_name = field_name
        self.message = message
        super().__init__(f"[{rule_name}] {field_name}: {message}")


def text_form(value: Any) -> str:
    """
    Render a resolved value the way rules compare it.

    Booleans use their JSON spelling so that records decoded from JSON or YAML
    compare the same as their source text.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return text_form(value.value)
    return str(value)


def require_int(parameters: dict[str, Any], key: str, rule_type: str) -> int:
    """Fetch an integer parameter, rejecting missing values and booleans."""
    if key not in parameters or parameters[key] is None:
        raise ValueError(f"'{rule_type}' rule requires '{key}' parameter")
    value = parameters[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {type(value).__name__}")
    return value


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator implements one rule kind (notblank, notnull, size, min,
    pattern, enum). A value of None means the field was absent.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, message: str = ""):
        """
        Initialize validator.

        Args:
            field_name: Dot path of the field to validate
            parameters: Kind-specific parameters (e.g., min/max for size)
            message: Message reported when the rule fails
        """
        self.field_name = field_name
        self.parameters = parameters or {}
        self.message = message

    def validate(self, value: Any) -> None:
        """
        Validate a resolved value against this rule.

        Raises:
            ValidationError: If validation fails
        """
        if value is None and not self.checks_absence:
            return
        self.check(value)

    @abstractmethod
    def check(self, value: Any) -> None:
        """Rule-specific check; only called with None when checks_absence is set."""

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""

    @property
    def checks_absence(self) -> bool:
        """Whether an absent value is something this rule can fail on."""
        return False

    def fail(self, message: str | None = None) -> None:
        raise ValidationError(
            rule_name=self.rule_type,
            field_name=self.field_name,
            message=message or self.message,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
