"""
Association of record kinds with rule-set identifiers.

Kinds are classes or plain string names. A class is looked up by itself, then
by its qualified name ("package.module.User"), then by its bare name ("User"),
so a registry populated from configuration can still serve typed records.
"""

from collections.abc import Mapping
from typing import Any


def kind_name(kind: Any) -> str:
    """Human-readable name of a record kind."""
    if isinstance(kind, type):
        return f"{kind.__module__}.{kind.__qualname__}"
    return str(kind)


class RuleSetRegistry:
    """Explicit mapping from record kind to rule-set identifier."""

    def __init__(self, entries: Mapping[Any, str] | None = None):
        self._entries: dict[Any, str] = {}
        for kind, identifier in (entries or {}).items():
            self.register(kind, identifier)

    def register(self, kind: type | str, identifier: str) -> None:
        """
        Associate a kind with a rule-set identifier, replacing any previous one.

        Raises:
            ValueError: If the kind or identifier is empty
        """
        if not isinstance(identifier, str) or not identifier.strip():
            raise ValueError(f"Rule-set identifier for {kind_name(kind)} must be a non-empty string")
        if not isinstance(kind, type) and (not isinstance(kind, str) or not kind.strip()):
            raise ValueError("Record kind must be a class or a non-empty name")
        self._entries[kind] = identifier

    def unregister(self, kind: type | str) -> None:
        self._entries.pop(kind, None)

    def lookup(self, kind: type | str) -> str | None:
        """Return the rule-set identifier for a kind, or None if it has none."""
        if isinstance(kind, type):
            for key in (kind, kind_name(kind), kind.__name__):
                if key in self._entries:
                    return self._entries[key]
            return None
        return self._entries.get(kind)

    def kinds(self) -> list[str]:
        return sorted(kind_name(kind) for kind in self._entries)

    def __contains__(self, kind: object) -> bool:
        return self.lookup(kind) is not None

    def __len__(self) -> int:
        return len(self._entries)


def validated_by(identifier: str, registry: RuleSetRegistry):
    """
    Class decorator registering the decorated class with a rule set.

    Usage:
        registry = RuleSetRegistry()

        @validated_by("user-validation.yml", registry)
        class User:
            ...
    """

    def decorator(cls: type) -> type:
        registry.register(cls, identifier)
        return cls

    return decorator
