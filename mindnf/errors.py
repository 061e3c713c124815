from __future__ import annotations


class MindnfError(Exception):
    """Base class for all errors raised by mindnf."""


class LimitExceededError(MindnfError):
    """Too many input variables or prime implicants for the configured limits."""


class InvariantViolationError(MindnfError):
    """Raised when the prime-implicant list does not cover a minterm."""


class TruthTableFormatError(MindnfError, ValueError):
    """The input file cannot be turned into a truth table at all."""
