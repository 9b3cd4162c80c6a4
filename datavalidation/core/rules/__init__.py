"""
Rule documents: parsing, resolution, caching and dispatch.
"""

from .rule_cache import RuleSetCache
from .rule_config import RuleConfigBuilder, RuleDocumentParser
from .rule_engine import RuleDispatcher
from .rule_loader import RuleSetLoader

__all__ = [
    "RuleDispatcher",
    "RuleDocumentParser",
    "RuleConfigBuilder",
    "RuleSetCache",
    "RuleSetLoader",
]
