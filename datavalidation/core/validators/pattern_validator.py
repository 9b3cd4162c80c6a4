"""
PatternValidator - validates field values against a regular expression.
"""

import re
from re import Pattern
from typing import Any

from .base_validator import BaseValidator, text_form


class PatternValidator(BaseValidator):
    """
    Validates that the whole text form of a value matches a pattern.

    The match is anchored at both ends: "\\d{5}" accepts "12345" but not
    "123456" or "zip 12345".

    Parameters:
    - pattern: Regular expression pattern (string)
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, message: str = ""):
        super().__init__(field_name, parameters, message)

        pattern = self.parameters.get("pattern")
        if pattern is None:
            raise ValueError("'pattern' rule requires 'pattern' parameter")
        if not isinstance(pattern, str):
            raise ValueError(f"Pattern must be a string, got {type(pattern).__name__}")

        try:
            self.pattern: Pattern = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid regex pattern: {e}")

    def check(self, value: Any) -> None:
        if not self.pattern.fullmatch(text_form(value)):
            self.fail()

    @property
    def rule_type(self) -> str:
        return "pattern"
