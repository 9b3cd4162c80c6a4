"""
Unit tests for rule document parsing and RuleConfigBuilder.
"""

import pytest
import yaml

from datavalidation.core.errors import ConfigurationError, RuleSetLoadError, RuleSetMalformed
from datavalidation.core.models import RuleKind
from datavalidation.core.rules import RuleConfigBuilder, RuleDocumentParser


@pytest.fixture
def parser():
    return RuleDocumentParser()


@pytest.mark.unit
class TestRuleDocumentParser:
    """Tests for RuleDocumentParser"""

    def test_parse_yaml_document(self, parser):
        content = """
rules:
  - field: "username"
    type: "notBlank"
    message: "Username is required"
  - field: "address.zipCode"
    type: "size"
    min: 5
    max: 5
    message: "Zip code must be 5 digits"
"""
        rule_set = parser.parse(content, "user.yml")

        assert rule_set.identifier == "user.yml"
        assert len(rule_set) == 2
        assert rule_set.rules[0].type is RuleKind.NOT_BLANK
        assert rule_set.rules[1].field == "address.zipCode"
        assert rule_set.rules[1].params == {"min": 5, "max": 5}

    def test_parse_json_document(self, parser):
        content = '{"rules": [{"field": "age", "type": "min", "value": 0, "message": "neg"}]}'
        rule_set = parser.parse(content.encode("utf-8"), "person.json")

        assert rule_set.rules[0].type is RuleKind.MIN
        assert rule_set.rules[0].params == {"value": 0}

    def test_source_suffix_selects_json(self, parser):
        content = '{"rules": []}'
        rule_set = parser.parse(content, "person", source="/tmp/person.json")

        assert rule_set.source == "/tmp/person.json"
        assert len(rule_set) == 0

    def test_type_is_case_insensitive(self, parser):
        rule_set = parser.parse_rules([
            {"field": "a", "type": "NOTBLANK", "message": "m"},
            {"field": "b", "type": "NotNull", "message": "m"},
        ])

        assert [rule.type for rule in rule_set.rules] == [RuleKind.NOT_BLANK, RuleKind.NOT_NULL]

    def test_rule_order_is_preserved(self, parser):
        rule_set = parser.parse_rules([
            {"field": name, "type": "notNull", "message": name} for name in "zyxwv"
        ])

        assert [rule.message for rule in rule_set.rules] == list("zyxwv")

    def test_unrelated_keys_are_dropped(self, parser):
        rule_set = parser.parse_rules([
            {"field": "a", "type": "notNull", "message": "m", "min": 3, "note": "ignored"},
        ])

        assert rule_set.rules[0].params == {}

    @pytest.mark.parametrize("content, problem", [
        ("- just a list", "mapping with a 'rules' section"),
        ("other: 1", "mapping with a 'rules' section"),
        ("rules: 5", "'rules' must be a list"),
        ("rules: [unclosed", "cannot parse document"),
    ])
    def test_malformed_documents(self, parser, content, problem):
        with pytest.raises(RuleSetMalformed) as exc_info:
            parser.parse(content, "broken.yml")

        assert problem in exc_info.value.reason
        assert exc_info.value.identifier == "broken.yml"

    def test_invalid_utf8_is_malformed(self, parser):
        with pytest.raises(RuleSetMalformed, match="UTF-8"):
            parser.parse(b"\xff\xfe rules", "broken.yml")

    @pytest.mark.parametrize("missing", ["field", "type", "message"])
    def test_missing_required_key(self, parser, missing):
        entry = {"field": "a", "type": "notNull", "message": "m"}
        del entry[missing]

        with pytest.raises(RuleSetMalformed, match=f"rule #1 is missing '{missing}'"):
            parser.parse_rules([entry])

    def test_empty_message_rejected(self, parser):
        with pytest.raises(RuleSetMalformed, match="missing 'message'"):
            parser.parse_rules([{"field": "a", "type": "notNull", "message": ""}])

    def test_unknown_type_rejected(self, parser):
        with pytest.raises(RuleSetMalformed, match="Unknown rule type 'email'"):
            parser.parse_rules([{"field": "a", "type": "email", "message": "m"}])

    def test_bad_parameters_rejected_at_load(self, parser):
        with pytest.raises(RuleSetMalformed, match="rule #2"):
            parser.parse_rules([
                {"field": "a", "type": "notNull", "message": "m"},
                {"field": "b", "type": "pattern", "pattern": "(", "message": "m"},
            ])

    @pytest.mark.parametrize("path", ["a..b", ".a", "a.", "first name"])
    def test_invalid_field_path_rejected(self, parser, path):
        with pytest.raises(RuleSetMalformed, match="Invalid field path"):
            parser.parse_rules([{"field": path, "type": "notNull", "message": "m"}])

    def test_non_mapping_entry_rejected(self, parser):
        with pytest.raises(RuleSetMalformed, match="rule #1 must be a mapping"):
            parser.parse_rules(["notNull"])

    def test_yaml_boolean_enum_values_rejected(self, parser):
        content = """
rules:
  - field: "answer"
    type: "enum"
    values: [YES, NO]
    message: "bad answer"
"""
        with pytest.raises(RuleSetMalformed, match="must be strings"):
            parser.parse(content, "answers.yml")

    def test_malformed_is_load_and_configuration_error(self, parser):
        with pytest.raises(RuleSetMalformed) as exc_info:
            parser.parse("rules: 5", "broken.yml")

        assert isinstance(exc_info.value, RuleSetLoadError)
        assert isinstance(exc_info.value, ConfigurationError)


@pytest.mark.unit
class TestRuleConfigBuilder:
    """Tests for RuleConfigBuilder"""

    def test_build_every_kind(self):
        rule_set = (
            RuleConfigBuilder("people")
            .add_not_blank("name", "blank")
            .add_not_null("id", "required")
            .add_size("name", 2, 50, "len")
            .add_min("age", 0, "neg")
            .add_pattern("zip", r"\d{5}", "bad zip")
            .add_enum("state", ["NY", "CA"], "bad state")
            .build()
        )

        assert rule_set.identifier == "people"
        assert [rule.type for rule in rule_set.rules] == [
            RuleKind.NOT_BLANK,
            RuleKind.NOT_NULL,
            RuleKind.SIZE,
            RuleKind.MIN,
            RuleKind.PATTERN,
            RuleKind.ENUM,
        ]
        assert rule_set.rules[5].params == {"values": ["NY", "CA"]}

    def test_build_rejects_invalid_rules(self):
        builder = RuleConfigBuilder().add_size("name", 10, 2, "len")

        with pytest.raises(RuleSetMalformed):
            builder.build()

    def test_to_yaml_round_trips_through_parser(self):
        builder = RuleConfigBuilder("zip.yml").add_pattern("zip", r"\d{5}", "bad zip")

        rule_set = RuleDocumentParser().parse(builder.to_yaml(), "zip.yml")

        assert rule_set.rules[0].params == {"pattern": r"\d{5}"}
        assert yaml.safe_load(builder.to_yaml()) == builder.to_document()
