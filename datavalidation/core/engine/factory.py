"""
Wiring of loader, cache and engine from settings.
"""

from datavalidation.config import ValidationSettings
from datavalidation.core.rules import RuleSetCache, RuleSetLoader

from .registry import RuleSetRegistry
from .validation_engine import ValidationEngine


def build_loader(settings: ValidationSettings | None = None) -> RuleSetLoader:
    settings = settings or ValidationSettings.from_env()
    return RuleSetLoader(
        rules_location=settings.rules_location,
        resource_package=settings.resource_package,
        cache=RuleSetCache() if settings.cache_enabled else None,
    )


def build_engine(
    settings: ValidationSettings | None = None,
    registry: RuleSetRegistry | None = None,
) -> ValidationEngine:
    """
    Create a ValidationEngine configured from settings.

    Args:
        settings: Engine settings (default: read from the environment)
        registry: Kind to rule-set mapping for validate_registered()
    """
    return ValidationEngine(loader=build_loader(settings), registry=registry)
