"""
Unit tests for RuleSetLoader resolution and RuleSetCache.
"""

import threading
from pathlib import Path

import pytest

from datavalidation.core.errors import ConfigurationError, RuleSetMalformed, RuleSetNotFound
from datavalidation.core.models import RuleKind
from datavalidation.core.rules import RuleSetCache, RuleSetLoader
from datavalidation.core.rules.rule_config import RuleConfigBuilder
from datavalidation.core.rules.rule_loader import DEFAULT_RULES_LOCATION, clean_location


@pytest.mark.unit
class TestCleanLocation:

    @pytest.mark.parametrize("location", [None, "", "   "])
    def test_blank_falls_back_to_bundled(self, location):
        assert clean_location(location) == DEFAULT_RULES_LOCATION

    def test_strips_whitespace(self):
        assert clean_location("  file:/etc/rules/ ") == "file:/etc/rules/"


@pytest.mark.unit
class TestRuleSetLoader:
    """Tests for RuleSetLoader"""

    def test_loads_from_file_location(self, loader, rules_dir):
        rule_set = loader.resolve("user.yml")

        assert len(rule_set) == 5
        assert rule_set.source == str(rules_dir / "user.yml")

    def test_loads_json_document(self, loader):
        rule_set = loader.resolve("address.json")

        assert [rule.type for rule in rule_set.rules] == [RuleKind.PATTERN, RuleKind.NOT_NULL]
        assert rule_set.rules[0].params == {"pattern": r"\d{5}"}

    def test_plain_directory_location(self, rules_dir):
        loader = RuleSetLoader(rules_location=str(rules_dir))
        assert len(loader.resolve("user.yml")) == 5

    def test_primary_location_wins_over_bundled(self, loader, write_rules):
        write_rules(
            "user-validation.yml",
            'rules:\n  - field: "x"\n    type: "notNull"\n    message: "local"\n',
        )

        rule_set = loader.resolve("user-validation.yml")

        assert [rule.message for rule in rule_set.rules] == ["local"]

    def test_falls_back_to_bundled_namespace(self, loader):
        rule_set = loader.resolve("user-validation.yml")

        assert len(rule_set) == 8
        assert rule_set.source.startswith("resource:")

    def test_blank_location_uses_bundled_default(self):
        loader = RuleSetLoader(rules_location="  ")
        rule_set = loader.resolve("validation-rules.yml")

        assert rule_set.rules[0].field == "id"

    def test_falls_back_to_direct_path(self, tmp_path, monkeypatch):
        document = tmp_path / "elsewhere" / "direct.yml"
        document.parent.mkdir()
        document.write_text(RuleConfigBuilder().add_not_null("id", "required").to_yaml())
        monkeypatch.chdir(tmp_path)

        loader = RuleSetLoader(rules_location=f"file:{tmp_path / 'missing'}")
        rule_set = loader.resolve("elsewhere/direct.yml")

        assert rule_set.identifier == "elsewhere/direct.yml"
        assert rule_set.source == "elsewhere/direct.yml"
        assert rule_set.rules[0].field == "id"

    def test_candidates_in_resolution_order(self, loader, rules_dir):
        descriptions = [description for description, _ in loader.candidates("user.yml")]

        assert descriptions == [
            str(rules_dir / "user.yml"),
            "resource:datavalidation/validation/user.yml",
            "user.yml",
        ]

    def test_candidates_deduplicated_for_bundled_location(self):
        loader = RuleSetLoader()
        descriptions = [description for description, _ in loader.candidates("x.yml")]

        assert descriptions == ["resource:datavalidation/validation/x.yml", "x.yml"]

    def test_not_found_lists_searched_locations(self, loader):
        with pytest.raises(RuleSetNotFound) as exc_info:
            loader.resolve("nope.yml")

        assert exc_info.value.identifier == "nope.yml"
        assert exc_info.value.reason.startswith("Rule file not found: nope.yml")
        assert len(exc_info.value.searched) == 3

    @pytest.mark.parametrize("identifier", ["", "   ", None])
    def test_empty_identifier_not_found(self, loader, identifier):
        with pytest.raises(RuleSetNotFound):
            loader.resolve(identifier)

    def test_directory_identifier_not_found(self, loader, rules_dir):
        (rules_dir / "folder.yml").mkdir()

        with pytest.raises(RuleSetNotFound):
            loader.resolve("folder.yml")

    def test_malformed_document(self, loader, write_rules):
        write_rules("bad.yml", "rules:\n  - field: a\n    type: bogus\n    message: m\n")

        with pytest.raises(RuleSetMalformed, match="Unknown rule type 'bogus'"):
            loader.resolve("bad.yml")

    def test_without_cache_rereads_document(self, loader, write_rules):
        write_rules("live.yml", RuleConfigBuilder().add_not_null("a", "first").to_yaml())
        assert loader.resolve("live.yml").rules[0].message == "first"

        write_rules("live.yml", RuleConfigBuilder().add_not_null("a", "second").to_yaml())
        assert loader.resolve("live.yml").rules[0].message == "second"

    def test_cache_serves_until_invalidated(self, cached_loader, write_rules):
        write_rules("live.yml", RuleConfigBuilder().add_not_null("a", "first").to_yaml())
        first = cached_loader.resolve("live.yml")

        write_rules("live.yml", RuleConfigBuilder().add_not_null("a", "second").to_yaml())
        assert cached_loader.resolve("live.yml") is first

        assert cached_loader.invalidate("live.yml") == 1
        assert cached_loader.resolve("live.yml").rules[0].message == "second"

    def test_invalidate_without_cache_is_noop(self, loader):
        assert loader.invalidate() == 0

    def test_unknown_resource_package(self):
        loader = RuleSetLoader(resource_package="datavalidation_no_such_package")

        with pytest.raises(ConfigurationError, match="Resource package not found"):
            loader.resolve("user.yml")

    def test_unknown_resource_package_unused_when_primary_location_has_document(self, rules_dir):
        loader = RuleSetLoader(
            rules_location=f"file:{rules_dir}",
            resource_package="datavalidation_no_such_package",
        )

        rule_set = loader.resolve("user.yml")

        assert len(rule_set) == 5
        assert rule_set.source == str(rules_dir / "user.yml")

    def test_candidates_do_not_import_resource_package(self, rules_dir):
        loader = RuleSetLoader(
            rules_location=f"file:{rules_dir}",
            resource_package="datavalidation_no_such_package",
        )

        descriptions = [description for description, _ in loader.candidates("user.yml")]

        assert descriptions[1] == "resource:datavalidation_no_such_package/validation/user.yml"

    def test_timeout_everywhere_is_not_found(self, loader, monkeypatch):
        def timed_out(self):
            raise TimeoutError("read timed out")

        monkeypatch.setattr(Path, "read_bytes", timed_out)

        with pytest.raises(RuleSetNotFound) as exc_info:
            loader.resolve("user.yml")

        assert len(exc_info.value.searched) == 3

    def test_timeout_at_primary_location_falls_back_to_bundled(self, loader, rules_dir, write_rules, monkeypatch):
        write_rules(
            "user-validation.yml",
            'rules:\n  - field: "x"\n    type: "notNull"\n    message: "local"\n',
        )
        read_bytes = Path.read_bytes

        def slow_primary(self):
            if self.parent == rules_dir:
                raise TimeoutError("read timed out")
            return read_bytes(self)

        monkeypatch.setattr(Path, "read_bytes", slow_primary)

        rule_set = loader.resolve("user-validation.yml")

        assert len(rule_set) == 8
        assert rule_set.source.startswith("resource:")


@pytest.mark.unit
class TestRuleSetCache:
    """Tests for RuleSetCache"""

    @pytest.fixture
    def rule_set(self):
        return RuleConfigBuilder("a.yml").add_not_null("a", "m").build()

    def test_put_and_get(self, rule_set):
        cache = RuleSetCache()
        cache.put("a.yml", rule_set)

        assert cache.get("a.yml") is rule_set
        assert "a.yml" in cache
        assert len(cache) == 1

    def test_get_missing_returns_none(self):
        assert RuleSetCache().get("missing.yml") is None

    def test_invalidate_one(self, rule_set):
        cache = RuleSetCache()
        cache.put("a.yml", rule_set)
        cache.put("b.yml", rule_set)

        assert cache.invalidate("a.yml") == 1
        assert cache.identifiers() == ["b.yml"]
        assert cache.invalidate("a.yml") == 0

    def test_invalidate_all(self, rule_set):
        cache = RuleSetCache()
        cache.put("a.yml", rule_set)
        cache.put("b.yml", rule_set)

        assert cache.invalidate() == 2
        assert len(cache) == 0

    def test_concurrent_puts_keep_every_entry(self, rule_set):
        cache = RuleSetCache()

        def fill(offset):
            for i in range(50):
                cache.put(f"{offset}-{i}.yml", rule_set)

        threads = [threading.Thread(target=fill, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(cache) == 200
