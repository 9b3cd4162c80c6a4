"""
Record traversal: field path resolution over mappings and objects.
"""

from .field_resolver import FieldResolver, ValueShape, classify

__all__ = [
    "FieldResolver",
    "ValueShape",
    "classify",
]
