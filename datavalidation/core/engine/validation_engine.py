"""
Validation engine: applies a resolved rule set to a record.

The engine never raises for caller data. A missing record, an unknown record
kind or a rule set that cannot be loaded each produce a result with a single
error. Failures inside the engine itself (InternalValidationError, bad
configuration) propagate.
"""

from collections.abc import Iterable
from typing import Any

from datavalidation.core.errors import RuleSetLoadError
from datavalidation.core.models import RuleSet, ValidationResult
from datavalidation.core.records import FieldResolver
from datavalidation.core.rules import RuleDispatcher, RuleSetLoader
from datavalidation.observability.logger import get_logger
from datavalidation.observability.metrics import record_rule_failure, record_validation

from .registry import RuleSetRegistry, kind_name

logger = get_logger(__name__)

NULL_RECORD_ERROR = "Cannot validate null data"
LOAD_ERROR_PREFIX = "Error during validation: "
UNREGISTERED_KIND_ERROR = "No validation rules specified for class: "


class ValidationEngine:
    """
    Orchestrates rule-set loading, field resolution and rule dispatch.

    Rules run in declaration order and every rule runs; errors are reported in
    rule order, so one field can contribute errors at several positions.
    """

    def __init__(
        self,
        loader: RuleSetLoader | None = None,
        registry: RuleSetRegistry | None = None,
        resolver: FieldResolver | None = None,
        dispatcher: RuleDispatcher | None = None,
    ):
        """
        Initialize the engine.

        Args:
            loader: Rule-set loader (default: bundled rules, no cache)
            registry: Kind to rule-set mapping used by validate_registered()
            resolver: Field path resolver
            dispatcher: Rule dispatcher; defaults to the loader's parser dispatcher
        """
        self.loader = loader or RuleSetLoader()
        self.registry = registry or RuleSetRegistry()
        self.resolver = resolver or FieldResolver()
        self.dispatcher = dispatcher or self.loader.parser.dispatcher

    def load_rule_set(self, identifier: str) -> RuleSet:
        """
        Resolve and parse a rule set.

        Raises:
            RuleSetNotFound: If the document cannot be located
            RuleSetMalformed: If the document is not a valid rule set
        """
        return self.loader.resolve(identifier)

    def validate(self, record: Any, rule_set_id: str) -> ValidationResult:
        """
        Validate a record against the rule set named by rule_set_id.

        Args:
            record: Mapping or object to validate
            rule_set_id: Rule-set identifier passed to the loader

        Returns:
            ValidationResult with errors in rule declaration order
        """
        # Non-string identifiers are reported as text
        label = None if rule_set_id is None else str(rule_set_id)

        if record is None:
            record_validation(label, "error")
            return ValidationResult.failure(NULL_RECORD_ERROR, rule_set=label)

        try:
            rule_set = self.loader.resolve(rule_set_id)
        except RuleSetLoadError as e:
            logger.warning(
                f"Could not load rule set '{label}': {e.reason}",
                extra={"rule_set": label, "error_type": type(e).__name__},
            )
            record_validation(label, "error")
            return ValidationResult.failure(LOAD_ERROR_PREFIX + e.reason, rule_set=label)

        return self.apply(record, rule_set)

    def apply(self, record: Any, rule_set: RuleSet) -> ValidationResult:
        """Evaluate an already-loaded rule set against a record."""
        errors: list[str] = []

        # Rule sets built outside the parser carry no validators
        validators = rule_set.validators or tuple(
            self.dispatcher.build_validator(rule) for rule in rule_set.rules
        )

        for rule, validator in zip(rule_set.rules, validators):
            value = self.resolver.resolve(record, rule.field)
            message = self.dispatcher.evaluate(rule, value, validator)
            if message is not None:
                errors.append(message)
                record_rule_failure(rule_set.identifier, rule.type.value, rule.field)

        result = ValidationResult.from_errors(errors, rule_set=rule_set.identifier)
        record_validation(rule_set.identifier, "valid" if result.valid else "invalid")
        logger.debug(
            f"Validated record against '{rule_set.identifier}': {len(errors)} error(s)",
            extra={"rule_set": rule_set.identifier, "error_count": len(errors)},
        )
        return result

    def validate_registered(self, record: Any, kind: type | str | None = None) -> ValidationResult:
        """
        Validate a record using the rule set registered for its kind.

        Args:
            record: Mapping or object to validate
            kind: Record kind; defaults to type(record)
        """
        if record is None and kind is None:
            record_validation(None, "error")
            return ValidationResult.failure(NULL_RECORD_ERROR)

        kind = kind if kind is not None else type(record)
        identifier = self.registry.lookup(kind)
        if identifier is None:
            record_validation(None, "error")
            return ValidationResult.failure(UNREGISTERED_KIND_ERROR + kind_name(kind))

        return self.validate(record, identifier)

    def validate_many(self, records: Iterable[Any], rule_set_id: str) -> list[ValidationResult]:
        """
        Validate a batch of records against one rule set.

        Returns:
            One ValidationResult per record, in input order
        """
        return [self.validate(record, rule_set_id) for record in records]

    def invalidate(self, identifier: str | None = None) -> int:
        """Drop cached rule sets so the next call reloads them."""
        return self.loader.invalidate(identifier)
