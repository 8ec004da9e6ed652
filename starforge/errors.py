"""Error taxonomy for cluster generation."""
from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for failures that abort a cluster generation run."""


class InvalidConfiguration(GenerationError, ValueError):
    """Raised when preferences or lookups cannot produce a valid cluster."""


class StructuralInvariantViolation(GenerationError):
    """Raised when a generation step runs against a structure it cannot work with."""


__all__ = ["GenerationError", "InvalidConfiguration", "StructuralInvariantViolation"]
