"""
Validator implementations, one per rule kind.

Provides validators for not-blank, not-null, size, min, pattern and enum rules.
"""

from .base_validator import BaseValidator, ValidationError, text_form
from .enum_validator import EnumValidator
from .min_validator import MinValidator
from .not_blank_validator import NotBlankValidator
from .not_null_validator import NotNullValidator
from .pattern_validator import PatternValidator
from .size_validator import SizeValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "text_form",
    "NotBlankValidator",
    "NotNullValidator",
    "SizeValidator",
    "MinValidator",
    "PatternValidator",
    "EnumValidator",
]
