"""
Rule document parsing and programmatic rule-set building.

Parses YAML or JSON rule documents into RuleSet models and provides a builder
for assembling rule sets in code.
"""

import json
from typing import Any

import yaml
from pydantic import ValidationError as ModelValidationError

from datavalidation.core.errors import ConfigurationError, RuleSetMalformed
from datavalidation.core.models import FieldRule, RuleKind, RuleSet
from datavalidation.core.validators import BaseValidator

from .rule_engine import RuleDispatcher

REQUIRED_KEYS = ("field", "type", "message")


class RuleDocumentParser:
    """
    Parses rule documents into RuleSet models.

    Expected format (YAML shown; JSON has the same structure):
    ```yaml
    rules:
      - field: "username"
        type: "pattern"
        pattern: "^[a-zA-Z0-9_]+$"
        message: "Invalid username format"

      - field: "address.zipCode"
        type: "size"
        min: 5
        max: 5
        message: "Zip code must be 5 digits"
    ```

    Every entry is checked here, including its kind-specific parameters, so a
    broken document is rejected as a whole before any record is validated.
    """

    def __init__(self, dispatcher: RuleDispatcher | None = None):
        self.dispatcher = dispatcher or RuleDispatcher()

    def parse(
        self,
        content: str | bytes,
        identifier: str,
        source: str | None = None,
    ) -> RuleSet:
        """
        Parse a rule document.

        Args:
            content: Raw document text
            identifier: Rule-set identifier; a ".json" suffix selects the JSON parser
            source: Where the document was read from (kept for diagnostics)

        Returns:
            The parsed RuleSet

        Raises:
            RuleSetMalformed: If the document or any rule in it is invalid
        """
        document = self._decode(content, identifier, source)
        return self.build_rule_set(document, identifier, source)

    def parse_rules(self, rule_defs: list[dict[str, Any]], identifier: str = "inline") -> RuleSet:
        """Build a RuleSet from already-decoded rule entries."""
        return self.build_rule_set({"rules": rule_defs}, identifier)

    def build_rule_set(self, document: Any, identifier: str, source: str | None = None) -> RuleSet:
        """Validate a decoded document and turn it into a RuleSet."""
        if not isinstance(document, dict) or "rules" not in document:
            raise RuleSetMalformed(identifier, "document must be a mapping with a 'rules' section")

        entries = document["rules"]
        if not isinstance(entries, list):
            raise RuleSetMalformed(identifier, "'rules' must be a list")

        parsed = [
            self._parse_rule(identifier, rule_def, idx)
            for idx, rule_def in enumerate(entries, start=1)
        ]
        rule_set = RuleSet(identifier=identifier, rules=tuple(rule for rule, _ in parsed), source=source)
        return rule_set.bind_validators(validator for _, validator in parsed)

    def _decode(self, content: str | bytes, identifier: str, source: str | None) -> Any:
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8")
            except UnicodeDecodeError as e:
                raise RuleSetMalformed(identifier, f"document is not valid UTF-8: {e}")

        is_json = (source or identifier).lower().endswith(".json")
        try:
            if is_json:
                return json.loads(content)
            return yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise RuleSetMalformed(identifier, f"cannot parse document: {e}")

    def _parse_rule(self, identifier: str, rule_def: Any, idx: int) -> tuple[FieldRule, BaseValidator]:
        """
        Parse a single rule entry and build its validator.

        Args:
            identifier: Rule-set identifier (for error messages)
            rule_def: The entry from the document
            idx: 1-based position of the entry

        Returns:
            The parsed FieldRule and its validator

        Raises:
            RuleSetMalformed: If the entry is invalid
        """
        if not isinstance(rule_def, dict):
            raise RuleSetMalformed(identifier, f"rule #{idx} must be a mapping")

        for key in REQUIRED_KEYS:
            if rule_def.get(key) in (None, ""):
                raise RuleSetMalformed(identifier, f"rule #{idx} is missing '{key}'")

        try:
            kind = RuleKind.parse(rule_def["type"])
        except ValueError as e:
            raise RuleSetMalformed(identifier, f"rule #{idx}: {e}")

        # Extra keys are ignored; only the parameters of this kind are kept
        params = {
            key: rule_def[key]
            for key in self.dispatcher.parameter_keys(kind)
            if key in rule_def
        }

        try:
            rule = FieldRule(
                field=rule_def["field"],
                type=kind,
                message=rule_def["message"],
                params=params,
            )
        except ModelValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise RuleSetMalformed(identifier, f"rule #{idx}: {problems}")

        try:
            validator = self.dispatcher.build_validator(rule)
        except ConfigurationError as e:
            raise RuleSetMalformed(identifier, f"rule #{idx}: {e}")

        return rule, validator


class RuleConfigBuilder:
    """
    Programmatically build rule sets (for testing or dynamic rules).
    """

    def __init__(self, identifier: str = "inline"):
        self.identifier = identifier
        self.rules: list[dict[str, Any]] = []

    def add_not_blank(self, field_name: str, message: str) -> "RuleConfigBuilder":
        self.rules.append({"field": field_name, "type": "notBlank", "message": message})
        return self

    def add_not_null(self, field_name: str, message: str) -> "RuleConfigBuilder":
        self.rules.append({"field": field_name, "type": "notNull", "message": message})
        return self

    def add_size(self, field_name: str, min_length: int, max_length: int, message: str) -> "RuleConfigBuilder":
        """Add a text length rule."""
        self.rules.append({
            "field": field_name,
            "type": "size",
            "min": min_length,
            "max": max_length,
            "message": message,
        })
        return self

    def add_min(self, field_name: str, min_value: int, message: str) -> "RuleConfigBuilder":
        """Add an integer lower-bound rule."""
        self.rules.append({"field": field_name, "type": "min", "value": min_value, "message": message})
        return self

    def add_pattern(self, field_name: str, pattern: str, message: str) -> "RuleConfigBuilder":
        """Add a full-match regex rule."""
        self.rules.append({"field": field_name, "type": "pattern", "pattern": pattern, "message": message})
        return self

    def add_enum(self, field_name: str, values: list[str], message: str) -> "RuleConfigBuilder":
        self.rules.append({"field": field_name, "type": "enum", "values": list(values), "message": message})
        return self

    def to_document(self) -> dict[str, Any]:
        """Return the rules as a rule document mapping."""
        return {"rules": [dict(rule) for rule in self.rules]}

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_document(), sort_keys=False)

    def build(self, parser: RuleDocumentParser | None = None) -> RuleSet:
        """Validate the collected rules and return them as a RuleSet."""
        parser = parser or RuleDocumentParser()
        return parser.parse_rules(self.rules, self.identifier)
