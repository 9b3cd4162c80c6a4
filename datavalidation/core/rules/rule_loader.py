"""
Rule set resolution.

Turns a rule-set identifier into a parsed RuleSet by searching, in order:

1. the configured rules location + identifier
2. the bundled "validation/" directory of the resource package + identifier
3. the identifier as a filesystem path

A location is "file:<dir>", "resource:<dir inside the resource package>" or a
plain directory path. A candidate that cannot be read for any OS-level reason,
timeouts included, counts as not found and the search moves on.
"""

from collections.abc import Callable
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path

from datavalidation.core.errors import ConfigurationError, RuleSetMalformed, RuleSetNotFound
from datavalidation.core.models import RuleSet
from datavalidation.observability.logger import get_logger
from datavalidation.observability.metrics import (
    increment_counter,
    rule_set_load_duration_seconds,
    rule_set_loads_total,
    track_duration,
)

from .rule_cache import RuleSetCache
from .rule_config import RuleDocumentParser

logger = get_logger(__name__)

FILE_PREFIX = "file:"
RESOURCE_PREFIX = "resource:"
DEFAULT_RESOURCE_PACKAGE = "datavalidation"
BUNDLED_NAMESPACE = "validation/"
DEFAULT_RULES_LOCATION = RESOURCE_PREFIX + BUNDLED_NAMESPACE


def clean_location(location: str | None) -> str:
    """Normalize a configured location, falling back to the bundled default when blank."""
    if location is None or not location.strip():
        return DEFAULT_RULES_LOCATION
    return location.strip()


def resource_path(package: str, relative: str) -> Traversable:
    """
    Locate a path inside a package's bundled data.

    Raises:
        ConfigurationError: If the package cannot be imported
    """
    try:
        node = files(package)
    except ModuleNotFoundError as e:
        raise ConfigurationError(f"Resource package not found: {package}") from e

    for part in relative.replace("\\", "/").split("/"):
        if part:
            node = node.joinpath(part)
    return node


class RuleSetLoader:
    """
    Resolves rule-set identifiers to parsed rule sets.

    Parsing happens once per load; with a cache attached, once per identifier
    until the entry is invalidated.
    """

    def __init__(
        self,
        rules_location: str | None = DEFAULT_RULES_LOCATION,
        resource_package: str = DEFAULT_RESOURCE_PACKAGE,
        parser: RuleDocumentParser | None = None,
        cache: RuleSetCache | None = None,
    ):
        """
        Initialize the loader.

        Args:
            rules_location: Primary location searched first
            resource_package: Package whose bundled data holds "resource:" locations
            parser: Rule document parser (default: RuleDocumentParser())
            cache: Optional cache of parsed rule sets
        """
        self.rules_location = clean_location(rules_location)
        self.resource_package = resource_package
        self.parser = parser or RuleDocumentParser()
        self.cache = cache

    def resolve(self, identifier: str) -> RuleSet:
        """
        Load the rule set for an identifier.

        Raises:
            RuleSetNotFound: If no resolution step finds a readable document
            RuleSetMalformed: If the document found is not a valid rule set
        """
        if not isinstance(identifier, str) or not identifier.strip():
            increment_counter(rule_set_loads_total, outcome="not_found")
            raise RuleSetNotFound(str(identifier))

        if self.cache is not None:
            cached = self.cache.get(identifier)
            if cached is not None:
                increment_counter(rule_set_loads_total, outcome="cache_hit")
                return cached

        with track_duration(rule_set_load_duration_seconds):
            content, source = self._locate(identifier)
            try:
                rule_set = self.parser.parse(content, identifier, source)
            except RuleSetMalformed:
                increment_counter(rule_set_loads_total, outcome="malformed")
                raise

        increment_counter(rule_set_loads_total, outcome="loaded")
        logger.info(
            f"Loaded rule set '{identifier}' with {len(rule_set)} rules",
            extra={"rule_set": identifier, "source": source, "rule_count": len(rule_set)},
        )

        if self.cache is not None:
            self.cache.put(identifier, rule_set)
        return rule_set

    def invalidate(self, identifier: str | None = None) -> int:
        if self.cache is None:
            return 0
        return self.cache.invalidate(identifier)

    def candidates(self, identifier: str) -> list[tuple[str, Callable[[], bytes]]]:
        """
        List the locations searched for an identifier, in resolution order.

        Returns:
            (description, reader) pairs; reader() returns the document bytes.
            Nothing is opened or imported until a reader is called.
        """
        found: list[tuple[str, Callable[[], bytes]]] = []
        seen: set[str] = set()

        def add(description: str, reader: Callable[[], bytes]) -> None:
            if description not in seen:
                seen.add(description)
                found.append((description, reader))

        # 1. Configured rules location
        add(*self._location_candidate(self.rules_location, identifier))

        # 2. Bundled default namespace
        add(*self._location_candidate(RESOURCE_PREFIX + BUNDLED_NAMESPACE, identifier))

        # 3. Identifier as a filesystem path
        direct = Path(identifier)
        add(str(direct), direct.read_bytes)

        return found

    def _location_candidate(self, location: str, identifier: str) -> tuple[str, Callable[[], bytes]]:
        if location.startswith(RESOURCE_PREFIX):
            relative = location[len(RESOURCE_PREFIX):].rstrip("/")
            relative = f"{relative}/{identifier}" if relative else identifier

            # The package is imported only when this step is reached
            def read_resource() -> bytes:
                return resource_path(self.resource_package, relative).read_bytes()

            return f"{RESOURCE_PREFIX}{self.resource_package}/{relative}", read_resource

        if location.startswith(FILE_PREFIX):
            location = location[len(FILE_PREFIX):]

        path = Path(location) / identifier
        return str(path), path.read_bytes

    def _locate(self, identifier: str) -> tuple[bytes, str]:
        searched = []
        for description, reader in self.candidates(identifier):
            searched.append(description)
            try:
                content = reader()
            except (OSError, ValueError) as e:
                logger.debug(
                    f"Rule file not readable at {description}: {type(e).__name__}",
                    extra={"rule_set": identifier, "candidate": description},
                )
                continue
            return content, description

        increment_counter(rule_set_loads_total, outcome="not_found")
        raise RuleSetNotFound(identifier, searched)
