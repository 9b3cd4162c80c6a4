"""
Rule document storage.
"""

from .rule_repository import RuleRepository

__all__ = ["RuleRepository"]
