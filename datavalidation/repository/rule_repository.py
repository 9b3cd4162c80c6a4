"""
Storage for rule documents.

Documents are stored as opaque text files in one directory:

- "file:<dir>" or a plain directory path: that directory, created if needed
  and left in place on close()
- "resource:<dir>": a private temporary directory seeded with the bundled
  default rule file; bundled documents are copied in on first read, and the
  directory is removed on close()
"""

import shutil
import tempfile
from pathlib import Path

from datavalidation.config import ValidationSettings
from datavalidation.core.rules import RuleSetCache
from datavalidation.core.rules.rule_loader import FILE_PREFIX, RESOURCE_PREFIX, resource_path
from datavalidation.observability.logger import get_logger
from datavalidation.utils.validation import is_rule_file, validate_rule_name

logger = get_logger(__name__)

TEMP_DIR_PREFIX = "validation-rules-"


class RuleRepository:
    """
    Lists, reads, writes and deletes rule documents.

    Writes and deletes invalidate the matching entry of an attached
    RuleSetCache, so a changed document is re-parsed on next use.
    """

    def __init__(self, settings: ValidationSettings | None = None, cache: RuleSetCache | None = None):
        """
        Initialize the repository and its directory.

        Args:
            settings: Location and default rule file (default: from environment)
            cache: Cache to invalidate when documents change
        """
        self.settings = settings or ValidationSettings.from_env()
        self.cache = cache
        self.location = self.settings.rules_location
        self._resource_dir: str | None = None
        self._owns_directory = False

        if self.location.startswith(RESOURCE_PREFIX):
            self._resource_dir = self.location[len(RESOURCE_PREFIX):].strip("/")
            self.directory = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
            self._owns_directory = True
            self._seed_default_rules()
        else:
            path = self.location[len(FILE_PREFIX):] if self.location.startswith(FILE_PREFIX) else self.location
            self.directory = Path(path)
            self.directory.mkdir(parents=True, exist_ok=True)

        logger.debug(
            f"Rule repository at {self.directory}",
            extra={"location": self.location, "temporary": self._owns_directory},
        )

    @property
    def location_uri(self) -> str:
        """Location string a RuleSetLoader can use to read this repository."""
        return f"{FILE_PREFIX}{self.directory}"

    def list_rule_names(self) -> list[str]:
        """Names of all rule documents (.json, .yml, .yaml), sorted."""
        self.directory.mkdir(parents=True, exist_ok=True)
        return sorted(
            entry.name
            for entry in self.directory.iterdir()
            if entry.is_file() and is_rule_file(entry.name)
        )

    def load_rule(self, rule_name: str) -> str:
        """
        Read a rule document.

        Raises:
            FileNotFoundError: If the document is neither stored nor bundled
        """
        rule_name = validate_rule_name(rule_name)
        rule_path = self.directory / rule_name

        if rule_path.is_file():
            return rule_path.read_text(encoding="utf-8")

        content = self._read_bundled(rule_name)
        if content is None:
            raise FileNotFoundError(str(rule_path))

        rule_path.write_text(content, encoding="utf-8")
        return content

    def save_rule(self, rule_name: str, content: str) -> Path:
        """Write (or overwrite) a rule document and return its path."""
        rule_name = validate_rule_name(rule_name)
        rule_path = self.directory / rule_name
        rule_path.write_text(content, encoding="utf-8")

        logger.info(f"Saved rule document {rule_name}", extra={"rule_set": rule_name})
        self._invalidate(rule_name)
        return rule_path

    def delete_rule(self, rule_name: str) -> bool:
        """
        Delete a rule document.

        Returns:
            True if a document was removed, False if there was none
        """
        rule_name = validate_rule_name(rule_name)
        rule_path = self.directory / rule_name

        existed = rule_path.is_file()
        rule_path.unlink(missing_ok=True)

        if existed:
            logger.info(f"Deleted rule document {rule_name}", extra={"rule_set": rule_name})
        self._invalidate(rule_name)
        return existed

    def close(self) -> None:
        """Remove the temporary directory, if this repository created one."""
        if self._owns_directory and self.directory.exists():
            shutil.rmtree(self.directory, ignore_errors=True)
            logger.debug(f"Removed temporary rule directory {self.directory}")
        self._owns_directory = False

    def __enter__(self) -> "RuleRepository":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def _seed_default_rules(self) -> None:
        content = self._read_bundled(self.settings.rules_file)
        if content is not None:
            (self.directory / self.settings.rules_file).write_text(content, encoding="utf-8")

    def _read_bundled(self, rule_name: str) -> str | None:
        if self._resource_dir is None:
            return None

        node = resource_path(self.settings.resource_package, f"{self._resource_dir}/{rule_name}")
        try:
            return node.read_text(encoding="utf-8")
        except OSError:
            return None

    def _invalidate(self, rule_name: str) -> None:
        if self.cache is not None:
            self.cache.invalidate(rule_name)
