"""
Validation engine, kind registry and engine wiring.
"""

from .factory import build_engine, build_loader
from .registry import RuleSetRegistry, validated_by
from .validation_engine import ValidationEngine

__all__ = [
    "ValidationEngine",
    "RuleSetRegistry",
    "validated_by",
    "build_engine",
    "build_loader",
]
