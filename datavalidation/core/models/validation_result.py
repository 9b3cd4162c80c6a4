"""
ValidationResult model representing the outcome of validating a record (ephemeral).
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of validating one record against one rule set.

    Note: ValidationResult is ephemeral and never retains the record itself.

    Attributes:
        valid: True exactly when errors is empty
        errors: Error messages in rule declaration order
        rule_set: Identifier of the rule set that was applied, if one was resolved
    """

    valid: bool
    errors: tuple[str, ...] = Field(default_factory=tuple, validate_default=True)
    rule_set: str | None = None

    @field_validator("errors")
    @classmethod
    def check_valid_consistency(cls, v, info):
        """Validate that valid=True implies no errors and valid=False implies some."""
        valid = info.data.get("valid")
        if valid and len(v) > 0:
            raise ValueError("valid=True but errors is not empty")
        if valid is False and len(v) == 0:
            raise ValueError("valid=False but errors is empty")
        return v

    @classmethod
    def from_errors(cls, errors: Iterable[str], rule_set: str | None = None) -> "ValidationResult":
        errors = tuple(errors)
        return cls(valid=not errors, errors=errors, rule_set=rule_set)

    @classmethod
    def failure(cls, message: str, rule_set: str | None = None) -> "ValidationResult":
        """Result carrying a single synthetic error."""
        return cls(valid=False, errors=(message,), rule_set=rule_set)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "valid": False,
                "errors": [
                    "Invalid username format",
                    "Password must contain at least one uppercase letter",
                ],
                "rule_set": "user-validation.yml",
            }
        }
