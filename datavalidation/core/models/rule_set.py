"""
RuleSet model: the ordered rules loaded from one rule document.
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from .field_rule import FieldRule, RuleKind


class RuleSet(BaseModel):
    """
    Ordered, immutable collection of field rules.

    Rule order defines both evaluation order and the order of reported errors.

    Attributes:
        identifier: Key the rule set was resolved from (file name or path)
        rules: Rules in declaration order
        source: Location the document was read from, if loaded from storage
    """

    identifier: str = Field(..., min_length=1)
    rules: tuple[FieldRule, ...] = ()
    source: str | None = None

    # One built validator per rule, set by the parser at load time
    _validators: tuple[Any, ...] = PrivateAttr(default=())

    def __len__(self) -> int:
        return len(self.rules)

    def fields(self) -> list[str]:
        """Distinct field paths in first-seen order."""
        return list(dict.fromkeys(rule.field for rule in self.rules))

    def count_by_type(self) -> dict[RuleKind, int]:
        counts: dict[RuleKind, int] = {}
        for rule in self.rules:
            counts[rule.type] = counts.get(rule.type, 0) + 1
        return counts

    def bind_validators(self, validators: Iterable[Any]) -> "RuleSet":
        """
        Attach the validators built for this rule set, in rule order.

        Raises:
            ValueError: If there is not exactly one validator per rule
        """
        validators = tuple(validators)
        if len(validators) != len(self.rules):
            raise ValueError(f"Expected {len(self.rules)} validators, got {len(validators)}")
        self._validators = validators
        return self

    @property
    def validators(self) -> tuple[Any, ...]:
        """Validators attached by bind_validators(); empty if none were bound."""
        return self._validators

    class Config:
        frozen = True
