"""
NotBlankValidator - ensures a field is present and has non-whitespace text.
"""

from typing import Any

from .base_validator import BaseValidator, text_form


class NotBlankValidator(BaseValidator):
    """
    Validates that a field is present and not blank.

    Fails if:
    - Field is absent (missing key, missing member, or null)
    - Text form of the value is empty after stripping whitespace
    """

    def check(self, value: Any) -> None:
        if value is None or text_form(value).strip() == "":
            self.fail()

    @property
    def checks_absence(self) -> bool:
        return True

    @property
    def rule_type(self) -> str:
        return "notblank"
