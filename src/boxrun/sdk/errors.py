"""SDK error types."""

from __future__ import annotations


class JobValidationError(Exception):
    """Raised when a job YAML fails parsing or validation."""
