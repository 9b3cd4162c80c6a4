"""
Settings for the validation engine.

Values come from constructor arguments or, through from_env(), from
environment variables:

    VALIDATION_RULES_LOCATION    primary rules location (default: resource:validation/)
    VALIDATION_RULES_FILE        default rule document name (default: validation-rules.yml)
    VALIDATION_RESOURCE_PACKAGE  package holding bundled rule documents
    VALIDATION_CACHE_ENABLED     cache parsed rule sets (default: true)
    LOG_LEVEL                    DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_FORMAT                   json or text
"""

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from datavalidation.core.errors import ConfigurationError
from datavalidation.core.rules.rule_loader import (
    DEFAULT_RESOURCE_PACKAGE,
    DEFAULT_RULES_LOCATION,
    clean_location,
)

DEFAULT_RULES_FILE = "validation-rules.yml"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class ValidationSettings(BaseModel):
    """
    Engine configuration.

    Attributes:
        rules_location: Primary location for rule documents ("file:", "resource:" or a directory)
        rules_file: Rule document seeded into a fresh repository directory
        resource_package: Package whose bundled data backs "resource:" locations
        cache_enabled: Whether parsed rule sets are cached until invalidated
        log_level: Logging level name
        log_format: "json" for structured logs, "text" for local development
    """

    rules_location: str = DEFAULT_RULES_LOCATION
    rules_file: str = Field(DEFAULT_RULES_FILE, min_length=1)
    resource_package: str = Field(DEFAULT_RESOURCE_PACKAGE, min_length=1)
    cache_enabled: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("rules_location", mode="before")
    @classmethod
    def default_blank_location(cls, v):
        """A blank location falls back to the bundled rules."""
        if v is None or isinstance(v, str):
            return clean_location(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def from_env(cls, **overrides) -> "ValidationSettings":
        """
        Build settings from environment variables.

        Args:
            **overrides: Values taking precedence over the environment (None is ignored)
        """
        values = {
            "rules_location": os.getenv("VALIDATION_RULES_LOCATION"),
            "rules_file": os.getenv("VALIDATION_RULES_FILE"),
            "resource_package": os.getenv("VALIDATION_RESOURCE_PACKAGE"),
            "cache_enabled": _parse_bool(os.getenv("VALIDATION_CACHE_ENABLED")),
            "log_level": os.getenv("LOG_LEVEL"),
            "log_format": os.getenv("LOG_FORMAT"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**{key: value for key, value in values.items() if value is not None})

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "rules_location": "file:/etc/datavalidation/rules/",
                "rules_file": "validation-rules.yml",
                "resource_package": "datavalidation",
                "cache_enabled": True,
                "log_level": "INFO",
                "log_format": "json",
            }
        }


def _parse_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Cannot parse '{value}' as boolean")
