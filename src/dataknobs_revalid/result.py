"""Record-level validation result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .descriptors import ErrorDescriptor
from .exceptions import RecordValidationError


@dataclass
class ValidationResult:
    """Verdict of a combined validator over one record.

    Only fields whose rule failed appear in ``validation_errors``, and
    ``is_valid`` is True exactly when that mapping is empty.
    """

    is_valid: bool
    validation_errors: dict[str, ErrorDescriptor] = field(default_factory=dict)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.is_valid

    def error_types(self) -> dict[str, str]:
        """Map each failed field to the type tag of its error."""
        return {name: error.type for name, error in self.validation_errors.items()}

    def raise_if_invalid(self) -> ValidationResult:
        """Raise RecordValidationError if any field failed.

        Returns:
            Self, when valid, for chaining

        Raises:
            RecordValidationError: If the record is invalid
        """
        if not self.is_valid:
            raise RecordValidationError(self)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Render as ``{"isValid": ..., "validationErrors": {...}}``."""
        return {
            "isValid": self.is_valid,
            "validationErrors": {
                name: error.to_dict() for name, error in self.validation_errors.items()
            },
        }

    @classmethod
    def success(cls) -> ValidationResult:
        """Create a result with no failed fields."""
        return cls(is_valid=True, validation_errors={})

    @classmethod
    def failure(cls, validation_errors: dict[str, ErrorDescriptor]) -> ValidationResult:
        """Create a result from the failed fields.

        Args:
            validation_errors: Error descriptor per failed field

        Returns:
            ValidationResult, valid only if ``validation_errors`` is empty
        """
        return cls(is_valid=not validation_errors, validation_errors=dict(validation_errors))
