"""
Exception hierarchy for the validation engine.

Failed rules are not exceptions: they end up as strings in a ValidationResult.
The classes here cover rule-set loading, configuration and internal failures.
"""


class DataValidationError(Exception):
    """Base class for all errors raised by datavalidation."""


class ConfigurationError(DataValidationError):
    """Raised when settings or rule definitions are invalid."""


class RuleSetLoadError(DataValidationError):
    """Raised when a rule set cannot be produced for an identifier."""

    def __init__(self, identifier: str, reason: str):
        self.identifier = identifier
        self.reason = reason
        super().__init__(reason)


class RuleSetNotFound(RuleSetLoadError):
    """No resolution step located a readable rule document."""

    def __init__(self, identifier: str, searched: list[str] | None = None):
        self.searched = searched or []
        reason = f"Rule file not found: {identifier}"
        if self.searched:
            reason += f" (searched: {', '.join(self.searched)})"
        super().__init__(identifier, reason)


class RuleSetMalformed(RuleSetLoadError, ConfigurationError):
    """A rule document was found but its content is not a valid rule set."""

    def __init__(self, identifier: str, problem: str):
        self.problem = problem
        super().__init__(identifier, f"Malformed rule file '{identifier}': {problem}")


class InternalValidationError(DataValidationError):
    """
    Raised when a rule evaluation fails for a reason other than invalid data.

    Lets callers tell "the record is invalid" apart from "the validator broke".
    """

    def __init__(self, field_name: str, rule_type: str, cause: BaseException):
        self.field_name = field_name
        self.rule_type = rule_type
        self.cause = cause
        super().__init__(
            f"Rule '{rule_type}' on field '{field_name}' failed unexpectedly: "
            f"{type(cause).__name__}: {cause}"
        )
