"""
Engine configuration from arguments and environment variables.
"""

from .settings import ValidationSettings

__all__ = ["ValidationSettings"]
