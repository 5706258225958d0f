"""ideinfo error types for graph validation and aspect execution."""

from __future__ import annotations


class IdeInfoError(Exception):
    """Base class for ideinfo errors."""


class IdeInfoGraphError(IdeInfoError, ValueError):
    """Raised when the target graph is malformed (duplicates, dangling edges, cycles)."""


class IdeInfoContractError(IdeInfoError, RuntimeError):
    """Raised when the traversal contract is violated while processing a target."""


class IdeInfoInputError(IdeInfoError, ValueError):
    """Raised when a target graph payload cannot be decoded."""


__all__ = [
    "IdeInfoContractError",
    "IdeInfoError",
    "IdeInfoGraphError",
    "IdeInfoInputError",
]
