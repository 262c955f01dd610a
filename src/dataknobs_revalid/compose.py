"""Combinators that build field chains and record validators from rules.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .exceptions import RuleConfigurationError
from .result import ValidationResult
from .rules import PASS, Fields, Rule, RuleResult, is_empty

logger = logging.getLogger(__name__)


def _require_callable(rule: Any, where: str) -> None:
    if not callable(rule):
        raise RuleConfigurationError(
            f"{where} expects a rule callable, got {type(rule).__name__}",
            context={"combinator": where},
        )


def optional(rule: Rule) -> Rule:
    """Skip ``rule`` when the value is empty (None or "").

    Args:
        rule: Rule to apply to non-empty values

    Returns:
        Rule that passes empty values and otherwise returns ``rule``'s result
    """
    _require_callable(rule, "optional")

    def optional_rule(value: Any, fields: Fields | None = None) -> RuleResult:
        if is_empty(value):
            return PASS
        return rule(value, fields)

    return optional_rule


def compose_validators(*rules: Rule) -> Rule:
    """Chain rules for one field, stopping at the first failure.

    Rules run left to right with the same ``(value, fields)``. The first
    failing rule's result is returned and later rules are not called. With
    no rules, or when every rule passes, the chain passes.

    Args:
        *rules: Rules (or chains) to evaluate in order

    Returns:
        A rule usable anywhere a single rule is
    """
    for rule in rules:
        _require_callable(rule, "compose_validators")
    chain = tuple(rules)

    def composed(value: Any, fields: Fields | None = None) -> RuleResult:
        for rule in chain:
            result = rule(value, fields)
            if result:
                return result
        return PASS

    return composed


def combine_validators(validators: Mapping[str, Rule]) -> Callable[[Fields], ValidationResult]:
    """Build a record validator from one rule per field.

    Every field's rule runs regardless of the others, in the mapping's key
    order, with ``(fields.get(name), fields)``. Fields missing from the
    record are validated as None; fields without a rule are ignored.

    Args:
        validators: Mapping from field name to rule

    Returns:
        Callable taking a record and returning a fresh ValidationResult
    """
    for name, rule in validators.items():
        _require_callable(rule, f"combine_validators[{name!r}]")
    entries = tuple(validators.items())

    def validate(fields: Fields) -> ValidationResult:
        validation_errors = {}
        for name, rule in entries:
            result = rule(fields.get(name), fields)
            if result:
                validation_errors[name] = result

        if validation_errors:
            logger.debug(f"Validation failed for fields: {', '.join(validation_errors)}")
            return ValidationResult.failure(validation_errors)
        return ValidationResult.success()

    return validate
