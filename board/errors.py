"""Exceptions for states no sequence of public board operations may reach."""
from __future__ import annotations


class InvariantError(RuntimeError):
    """Raised when a board or transform invariant would be broken."""


__all__ = ["InvariantError"]
