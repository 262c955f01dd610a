"""Custom exceptions for the dataknobs_revalid package.

Rules report validation failures as return values, never as exceptions.
These types cover the two places where raising is appropriate: a caller
asking for an invalid result to be raised, and a rule built from bad
parameters or configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dataknobs_common import (
    ConfigurationError,
    DataknobsError,
    ValidationError,
)

if TYPE_CHECKING:
    from dataknobs_revalid.result import ValidationResult

RevalidError = DataknobsError


class RecordValidationError(ValidationError):
    """Raised on request when a record failed validation."""

    def __init__(self, result: ValidationResult):
        self.result = result
        failed = list(result.validation_errors)
        super().__init__(
            f"Record failed validation for fields: {', '.join(failed)}",
            context={"fields": failed, "types": result.error_types()},
        )


class RuleConfigurationError(ConfigurationError):
    """Raised when a rule is built from invalid parameters or configuration."""

    pass
