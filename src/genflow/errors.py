"""
Exception hierarchy for genflow.

Every error raised by the library derives from GenflowError so callers can
catch the whole family at once. The HTTP adapter maps each kind to a status
code (ValidationError -> 400, NotFoundError -> 404, GenerationError -> 500).
"""

from __future__ import annotations


class GenflowError(Exception):
    """Base exception for genflow errors."""
    pass


class ConfigurationError(GenflowError):
    """Raised when required configuration is missing or malformed."""
    pass


class GenerationError(GenflowError):
    """Raised when the generation backend fails or returns unusable output."""
    pass


class ValidationError(GenflowError):
    """Raised when flow input does not match the flow's input schema."""
    pass


class RegistryError(GenflowError):
    """Base exception for flow registry errors."""
    pass


class NotFoundError(RegistryError):
    """Raised when a flow is not registered."""
    pass


class DuplicateNameError(RegistryError):
    """Raised when registering a flow under a name that is already taken."""
    pass
