"""
Rule-driven record validation.

Rule documents (YAML or JSON) declare ordered field rules; the engine resolves
a document by identifier, walks each rule's dot path into a record and reports
every failed rule's message in declaration order.
"""

from datavalidation.config import ValidationSettings
from datavalidation.core.engine import (
    RuleSetRegistry,
    ValidationEngine,
    build_engine,
    validated_by,
)
from datavalidation.core.errors import (
    ConfigurationError,
    DataValidationError,
    InternalValidationError,
    RuleSetLoadError,
    RuleSetMalformed,
    RuleSetNotFound,
)
from datavalidation.core.models import FieldRule, RuleKind, RuleSet, ValidationResult
from datavalidation.repository import RuleRepository

__version__ = "0.1.0"

__all__ = [
    "ValidationEngine",
    "build_engine",
    "RuleSetRegistry",
    "validated_by",
    "ValidationSettings",
    "RuleRepository",
    "FieldRule",
    "RuleKind",
    "RuleSet",
    "ValidationResult",
    "DataValidationError",
    "ConfigurationError",
    "RuleSetLoadError",
    "RuleSetNotFound",
    "RuleSetMalformed",
    "InternalValidationError",
]
