"""
MinValidator - validates that an integer field is not below a lower bound.
"""

import re
from typing import Any

from .base_validator import BaseValidator, require_int, text_form

_INTEGER = re.compile(r"[+-]?[0-9]+")


class MinValidator(BaseValidator):
    """
    Validates that a value parses as an integer and is >= a minimum.

    Parameters:
    - value: Minimum value (inclusive)

    A value that does not parse as an integer fails with a fixed
    "Invalid number format" message instead of the rule's message.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, message: str = ""):
        super().__init__(field_name, parameters, message)
        self.min_value = require_int(self.parameters, "value", "min")

    def check(self, value: Any) -> None:
        text = text_form(value)
        if not _INTEGER.fullmatch(text):
            self.fail(f"Invalid number format for field: {self.field_name}")

        if int(text) < self.min_value:
            self.fail()

    @property
    def rule_type(self) -> str:
        return "min"
