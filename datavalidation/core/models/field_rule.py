"""
FieldRule model representing one declarative constraint on a record field.
"""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

_SEGMENT = re.compile(r"[^.\s]+")


class RuleKind(str, Enum):
    """Closed set of rule types understood by the dispatcher."""

    NOT_BLANK = "notblank"
    NOT_NULL = "notnull"
    SIZE = "size"
    MIN = "min"
    PATTERN = "pattern"
    ENUM = "enum"

    @classmethod
    def parse(cls, name: Any) -> "RuleKind":
        """
        Look up a kind by name, ignoring case and surrounding whitespace.

        Raises:
            ValueError: If the name is not a known rule type
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise ValueError(f"Rule type must be a string, got {type(name).__name__}")
        try:
            return cls(name.strip().lower())
        except ValueError:
            known = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown rule type '{name}'. Must be one of: {known}") from None


class FieldRule(BaseModel):
    """
    A single rule from a rule document.

    Attributes:
        field: Dot-separated path to the value ("address.zipCode")
        type: Rule kind
        message: Error message reported when the rule fails
        params: Kind-specific parameters (min/max, value, pattern, values)
    """

    field: str = Field(..., min_length=1)
    type: RuleKind
    message: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("field")
    @classmethod
    def check_field_path(cls, v: str) -> str:
        """Every dot-separated segment must be non-empty and free of whitespace."""
        for segment in v.split("."):
            if not _SEGMENT.fullmatch(segment):
                raise ValueError(f"Invalid field path '{v}'")
        return v

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> RuleKind:
        return RuleKind.parse(v)

    @property
    def path(self) -> list[str]:
        return self.field.split(".")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "field": "address.zipCode",
                "type": "size",
                "message": "Zip code must be 5 digits",
                "params": {"min": 5, "max": 5},
            }
        }
