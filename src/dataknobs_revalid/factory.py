"""Factory classes for building rules and record validators from configuration."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from dataknobs_config import FactoryBase

from .compose import combine_validators, compose_validators, optional
from .exceptions import RuleConfigurationError
from .result import ValidationResult
from .rules import (
    Rule,
    equal_to,
    matches_field,
    max_length,
    max_value,
    min_length,
    min_value,
    one_of,
    pattern,
)

logger = logging.getLogger(__name__)

_RULE_TYPES = (
    "minLength",
    "maxLength",
    "min",
    "max",
    "pattern",
    "equalTo",
    "oneOf",
    "matchesField",
    "compose",
    "optional",
)

# Lowercased name -> canonical rule type
_ALIASES = {
    **{name.lower(): name for name in _RULE_TYPES},
    "min_length": "minLength",
    "max_length": "maxLength",
    "min_value": "min",
    "max_value": "max",
    "equal_to": "equalTo",
    "one_of": "oneOf",
    "matches_field": "matchesField",
}


def _param(config: Mapping[str, Any], rule_type: str, *names: str) -> Any:
    for name in names:
        if name in config:
            return config[name]
    raise RuleConfigurationError(
        f"Rule '{rule_type}' requires '{names[0]}'",
        context={"type": rule_type, "config": dict(config)},
    )


class RuleFactory(FactoryBase):
    """Factory for creating a single rule (or rule chain) from configuration.

    Configuration Options:
        type (str): Rule type. One of minLength, maxLength, min, max,
            pattern, equalTo, oneOf, matchesField, compose, optional.
            Matching ignores case, and snake_case aliases (min_length,
            one_of, ...) are accepted.

    Rule Parameters:
        minLength / maxLength: n (int)
        min / max: n (number)
        pattern: pattern (str), label (str, optional)
        equalTo: other (any)
        oneOf: values (list)
        matchesField: field (str)
        compose: rules (list of rule configurations)
        optional: rule (rule configuration)

    Example Configuration:
        rules:
          - name: strong_password
            factory: dataknobs_revalid.factory.rule_factory
            type: compose
            rules:
              - type: minLength
                n: 8
              - type: pattern
                pattern: "[0-9]"
                label: containsNumbers
    """

    def create(self, **config) -> Rule:
        """Create a rule from configuration.

        Args:
            **config: Rule configuration

        Returns:
            Rule callable

        Raises:
            RuleConfigurationError: If the type is unknown or parameters are missing
        """
        raw_type = config.get("type")
        if not raw_type:
            raise RuleConfigurationError("Rule configuration missing 'type'", context=config)
        rule_type = _ALIASES.get(str(raw_type).lower(), raw_type)

        builder = self._builders().get(rule_type)
        if builder is None:
            raise RuleConfigurationError(
                f"Unknown rule type: {raw_type}",
                context={"type": raw_type},
            )

        logger.debug(f"Creating rule: {rule_type}")
        return builder(config)

    def create_many(self, configs: list[dict[str, Any]]) -> list[Rule]:
        """Create rules from a list of configurations, preserving order."""
        return [self.create(**config) for config in configs]

    def _builders(self) -> dict[str, Callable[[Mapping[str, Any]], Rule]]:
        return {
            "minLength": lambda c: min_length(_param(c, "minLength", "n", "minLength", "min_length")),
            "maxLength": lambda c: max_length(_param(c, "maxLength", "n", "maxLength", "max_length")),
            "min": lambda c: min_value(_param(c, "min", "n", "min")),
            "max": lambda c: max_value(_param(c, "max", "n", "max")),
            "pattern": lambda c: pattern(_param(c, "pattern", "pattern"), c.get("label")),
            "equalTo": lambda c: equal_to(_param(c, "equalTo", "other")),
            "oneOf": lambda c: one_of(_param(c, "oneOf", "values")),
            "matchesField": lambda c: matches_field(
                _param(c, "matchesField", "field", "fieldName", "field_name")
            ),
            "compose": lambda c: compose_validators(*self.create_many(c.get("rules", []))),
            "optional": lambda c: optional(self.create(**_param(c, "optional", "rule"))),
        }


class ValidatorFactory(FactoryBase):
    """Factory for creating record validators from configuration.

    Configuration Options:
        name (str): Validator name, used for logging only
        fields (dict | list): Field rule definitions, in evaluation order

    Field Definition Options:
        A field maps to one rule configuration, a list of rule configurations
        (composed in order), or a dict with:
        rules (list): Rule configurations composed in order
        optional (bool): Skip the rules when the value is empty (default: False)

        A single rule dict may carry ``optional`` as well.
        In list form each entry also carries ``name``.

    Example Configuration:
        validators:
          - name: password_form
            factory: dataknobs_revalid.factory.validator_factory
            fields:
              password:
                - type: minLength
                  n: 8
                - type: pattern
                  pattern: "[0-9]"
                  label: containsNumbers
              passwordConfirm:
                - type: matchesField
                  field: password
              nickname:
                optional: true
                rules:
                  - type: maxLength
                    n: 20
    """

    def __init__(self, rule_factory: RuleFactory | None = None):
        self.rule_factory = rule_factory or RuleFactory()

    def create(self, **config) -> Callable[[Mapping[str, Any]], ValidationResult]:
        """Create a combined validator from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Callable taking a record and returning a ValidationResult
        """
        name = config.get("name", "unnamed_validator")
        field_configs = config.get("fields", {})
        logger.info(f"Creating validator: {name}")

        if isinstance(field_configs, Mapping):
            items = list(field_configs.items())
        else:
            items = []
            for field_config in field_configs:
                field_name = field_config.get("name")
                if not field_name:
                    raise RuleConfigurationError(
                        "Field configuration missing 'name'",
                        context={"validator": name, "field": field_config},
                    )
                items.append((field_name, field_config))

        validators = {
            field_name: self._build_field_rule(field_name, field_config)
            for field_name, field_config in items
        }
        return combine_validators(validators)

    def _build_field_rule(self, field_name: str, field_config: Any) -> Rule:
        """Build the rule for one field from its configuration.

        Args:
            field_name: Field the rule applies to
            field_config: Rule dict, list of rule dicts, or field definition dict

        Returns:
            Rule for the field
        """
        is_optional = False
        if isinstance(field_config, list):
            rule_configs = field_config
        elif isinstance(field_config, Mapping) and "type" in field_config:
            is_optional = bool(field_config.get("optional", False))
            rule_configs = [{k: v for k, v in field_config.items() if k != "optional"}]
        elif isinstance(field_config, Mapping):
            rule_configs = field_config.get("rules", [])
            is_optional = bool(field_config.get("optional", False))
        else:
            raise RuleConfigurationError(
                f"Invalid configuration for field '{field_name}'",
                context={"field": field_name},
            )

        rules = self.rule_factory.create_many(rule_configs)
        rule = rules[0] if len(rules) == 1 else compose_validators(*rules)
        if is_optional:
            rule = optional(rule)

        logger.debug(f"Field '{field_name}': {len(rules)} rule(s), optional={is_optional}")
        return rule


# Create singleton instances for registration
rule_factory = RuleFactory()
validator_factory = ValidatorFactory(rule_factory)
