"""DataKnobs Revalid package.

Declarative field validation built from small composable rules:

- **Rules**: ``min_length``, ``max_length``, ``min_value``, ``max_value``,
  ``pattern``, ``equal_to``, ``one_of``, ``matches_field``
- **Combinators**: ``optional``, ``compose_validators`` (first failure wins)
  and ``combine_validators`` (one rule per field, all fields checked)
- **Results**: structured ``ErrorDescriptor`` per failed field, gathered in a
  ``ValidationResult``

Example:
    ```python
    from dataknobs_revalid import (
        combine_validators, compose_validators, matches_field, min_length, pattern,
    )

    password = compose_validators(min_length(8), pattern(r"[0-9]", "containsNumbers"))
    validate = combine_validators({
        "password": password,
        "passwordConfirm": compose_validators(password, matches_field("password")),
    })

    result = validate({"password": "secret", "passwordConfirm": "secret"})
    result.is_valid
    # False
    result.validation_errors["password"].type
    # 'minLength'
    ```
"""

from .compose import combine_validators, compose_validators, optional
from .descriptors import (
    DESCRIPTOR_TYPES,
    EqualToError,
    ErrorDescriptor,
    MatchesFieldError,
    MaxError,
    MaxLengthError,
    MinError,
    MinLengthError,
    OneOfError,
    PatternError,
)
from .exceptions import RecordValidationError, RevalidError, RuleConfigurationError
from .factory import RuleFactory, ValidatorFactory, rule_factory, validator_factory
from .result import ValidationResult
from .rules import (
    PASS,
    Fields,
    Rule,
    RuleResult,
    equal_to,
    is_empty,
    matches_field,
    max_length,
    max_value,
    min_length,
    min_value,
    one_of,
    pattern,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Combinators
    "compose_validators",
    "combine_validators",
    "optional",
    # Rules
    "min_length",
    "max_length",
    "min_value",
    "max_value",
    "pattern",
    "equal_to",
    "one_of",
    "matches_field",
    "is_empty",
    "PASS",
    # Types
    "Fields",
    "Rule",
    "RuleResult",
    # Results
    "ValidationResult",
    "ErrorDescriptor",
    "MinLengthError",
    "MaxLengthError",
    "MinError",
    "MaxError",
    "PatternError",
    "EqualToError",
    "OneOfError",
    "MatchesFieldError",
    "DESCRIPTOR_TYPES",
    # Exceptions
    "RevalidError",
    "RecordValidationError",
    "RuleConfigurationError",
    # Factories
    "RuleFactory",
    "ValidatorFactory",
    "rule_factory",
    "validator_factory",
]
