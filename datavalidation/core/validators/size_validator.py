"""
SizeValidator - validates the length of a field's text form.
"""

from typing import Any

from .base_validator import BaseValidator, require_int, text_form


class SizeValidator(BaseValidator):
    """
    Validates that the text length of a value is within a range.

    Parameters:
    - min: Minimum length (inclusive)
    - max: Maximum length (inclusive)

    Absent values pass; pair with notnull/notblank to require the field.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, message: str = ""):
        super().__init__(field_name, parameters, message)

        self.min_length = require_int(self.parameters, "min", "size")
        self.max_length = require_int(self.parameters, "max", "size")

        if self.min_length < 0:
            raise ValueError(f"'min' must not be negative, got {self.min_length}")
        if self.min_length > self.max_length:
            raise ValueError(f"'min' ({self.min_length}) is greater than 'max' ({self.max_length})")

    def check(self, value: Any) -> None:
        length = len(text_form(value))
        if length < self.min_length or length > self.max_length:
            self.fail()

    @property
    def rule_type(self) -> str:
        return "size"
