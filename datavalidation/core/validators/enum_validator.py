"""
EnumValidator - validates that a field holds one of a fixed set of values.
"""

from typing import Any

from .base_validator import BaseValidator, text_form


class EnumValidator(BaseValidator):
    """
    Validates that the text form of a value is one of the allowed values.

    Parameters:
    - values: List of allowed strings. Entries must be strings; quote
      values such as NO or ON in YAML, which would otherwise load as booleans.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, message: str = ""):
        super().__init__(field_name, parameters, message)

        values = self.parameters.get("values")
        if values is None:
            raise ValueError("'enum' rule requires 'values' parameter")
        if not isinstance(values, list | tuple):
            raise ValueError(f"'values' must be a list, got {type(values).__name__}")

        for item in values:
            if not isinstance(item, str):
                raise ValueError(f"'values' entries must be strings, got {item!r}")

        self.allowed = frozenset(values)

    def check(self, value: Any) -> None:
        if text_form(value) not in self.allowed:
            self.fail()

    @property
    def rule_type(self) -> str:
        return "enum"
