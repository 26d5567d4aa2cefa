"""Post-processing of rendered bindings."""

from .validate import SourceValidator, validate

__all__ = ["SourceValidator", "validate"]
