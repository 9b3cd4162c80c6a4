"""
Core data models for the rule-driven validation engine.

All models use Pydantic for runtime validation and are frozen once built.
"""

from .field_rule import FieldRule, RuleKind
from .rule_set import RuleSet
from .validation_result import ValidationResult

__all__ = [
    "FieldRule",
    "RuleKind",
    "RuleSet",
    "ValidationResult",
]
