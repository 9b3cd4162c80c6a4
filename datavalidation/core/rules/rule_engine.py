"""
Rule dispatch: maps each rule kind to its validator and evaluates one rule
against one resolved value.
"""

from typing import Any

from datavalidation.core.errors import ConfigurationError, InternalValidationError
from datavalidation.core.models import FieldRule, RuleKind
from datavalidation.core.validators import (
    BaseValidator,
    EnumValidator,
    MinValidator,
    NotBlankValidator,
    NotNullValidator,
    PatternValidator,
    SizeValidator,
    ValidationError,
)


class RuleDispatcher:
    """
    Evaluates field rules through a registry of validator classes.

    Adding a rule kind means adding a RuleKind member and a registry entry.
    """

    VALIDATOR_REGISTRY: dict[RuleKind, type[BaseValidator]] = {
        RuleKind.NOT_BLANK: NotBlankValidator,
        RuleKind.NOT_NULL: NotNullValidator,
        RuleKind.SIZE: SizeValidator,
        RuleKind.MIN: MinValidator,
        RuleKind.PATTERN: PatternValidator,
        RuleKind.ENUM: EnumValidator,
    }

    # Keys each kind reads from a rule document entry
    PARAMETER_KEYS: dict[RuleKind, tuple[str, ...]] = {
        RuleKind.NOT_BLANK: (),
        RuleKind.NOT_NULL: (),
        RuleKind.SIZE: ("min", "max"),
        RuleKind.MIN: ("value",),
        RuleKind.PATTERN: ("pattern",),
        RuleKind.ENUM: ("values",),
    }

    def build_validator(self, rule: FieldRule) -> BaseValidator:
        """
        Instantiate the validator for a rule.

        Raises:
            ConfigurationError: If the kind has no validator or its parameters are invalid
        """
        validator_class = self.VALIDATOR_REGISTRY.get(rule.type)
        if not validator_class:
            raise ConfigurationError(f"Unknown rule type: {rule.type}")

        try:
            return validator_class(rule.field, rule.params, rule.message)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid '{rule.type.value}' rule for field '{rule.field}': {e}"
            ) from e

    def evaluate(self, rule: FieldRule, value: Any, validator: BaseValidator | None = None) -> str | None:
        """
        Evaluate one rule against a resolved value.

        Args:
            rule: The rule to apply
            value: Value resolved from the record, None when absent
            validator: Validator already built for the rule; built here when omitted

        Returns:
            The error message if the rule fails, None if it passes

        Raises:
            InternalValidationError: If the validator fails for a reason other than the data
        """
        if validator is None:
            validator = self.build_validator(rule)

        try:
            validator.validate(value)
        except ValidationError as e:
            return e.message
        except Exception as e:
            raise InternalValidationError(rule.field, rule.type.value, e) from e

        return None

    def parameter_keys(self, kind: RuleKind) -> tuple[str, ...]:
        return self.PARAMETER_KEYS.get(kind, ())
