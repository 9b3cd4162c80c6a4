"""
NotNullValidator - ensures a field is present.
"""

from typing import Any

from .base_validator import BaseValidator


class NotNullValidator(BaseValidator):
    """Validates that a field resolves to a value. Empty strings pass."""

    def check(self, value: Any) -> None:
        if value is None:
            self.fail()

    @property
    def checks_absence(self) -> bool:
        return True

    @property
    def rule_type(self) -> str:
        return "notnull"
