"""
Custom exception types used across mutant.

Defining explicit error classes makes it easier for the CLI entry point
to distinguish between user-facing failures and unexpected bugs.
"""

from __future__ import annotations


class MutantError(Exception):
    """Base class for all mutant specific errors."""


class CLIError(MutantError):
    """Raised when command-line arguments are malformed or incomplete."""


class ExpressionError(MutantError):
    """Raised when a match expression cannot be parsed."""


class IntegrationLookupError(MutantError):
    """Raised when no integration is registered under a requested name."""


class EnvironmentSetupError(MutantError):
    """Raised when the run environment cannot be prepared."""
