"""
Input validation utilities for rule document storage.

Rule names end up as file names inside the repository directory, so they are
checked before any filesystem access to keep reads and writes inside it.
"""

import re

RULE_FILE_EXTENSIONS = (".json", ".yml", ".yaml")

MAX_RULE_NAME_LENGTH = 255


class InvalidRuleNameError(ValueError):
    """Raised when a rule document name is not acceptable."""
    pass


def validate_rule_name(rule_name: str, field_name: str = "rule_name") -> str:
    """
    Validate a rule document name.

    Rule names must be plain file names made of alphanumeric characters,
    hyphens, underscores and dots, ending in .json, .yml or .yaml.

    Args:
        rule_name: The rule document name to validate
        field_name: Name of the argument (for error messages)

    Returns:
        The validated name (stripped of whitespace)

    Raises:
        InvalidRuleNameError: If validation fails

    Examples:
        >>> validate_rule_name("user-validation.yml")
        'user-validation.yml'
        >>> validate_rule_name("../etc/passwd")  # doctest: +SKIP
        InvalidRuleNameError: rule_name contains invalid characters
    """
    if not rule_name or not isinstance(rule_name, str):
        raise InvalidRuleNameError(f"{field_name} must be a non-empty string")

    rule_name = rule_name.strip()

    if not rule_name:
        raise InvalidRuleNameError(f"{field_name} cannot be empty or whitespace-only")

    if len(rule_name) > MAX_RULE_NAME_LENGTH:
        raise InvalidRuleNameError(
            f"{field_name} exceeds maximum length of {MAX_RULE_NAME_LENGTH} characters"
        )

    if not re.match(r'^[a-zA-Z0-9_\-\.]+$', rule_name):
        raise InvalidRuleNameError(
            f"{field_name} contains invalid characters. "
            "Only alphanumeric, hyphens, underscores, and dots are allowed."
        )

    if rule_name.startswith("."):
        raise InvalidRuleNameError(f"{field_name} must not start with a dot")

    if not rule_name.lower().endswith(RULE_FILE_EXTENSIONS):
        raise InvalidRuleNameError(
            f"{field_name} must end with one of: {', '.join(RULE_FILE_EXTENSIONS)}"
        )

    return rule_name


def is_rule_file(name: str) -> bool:
    """Whether a file name looks like a rule document."""
    return name.lower().endswith(RULE_FILE_EXTENSIONS)
