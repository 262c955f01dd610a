"""Test factory integration for rules and record validators."""

import pytest

from dataknobs_revalid import (
    MatchesFieldError,
    MinLengthError,
    RuleConfigurationError,
    RuleFactory,
    ValidatorFactory,
    rule_factory,
    validator_factory,
)


class TestRuleFactory:
    """Test building single rules from configuration."""

    def test_leaf_rules(self):
        """Test every leaf rule type."""
        factory = RuleFactory()

        assert factory.create(type="minLength", n=3)("ab").type == "minLength"
        assert factory.create(type="maxLength", n=3)("abcd").type == "maxLength"
        assert factory.create(type="min", n=0)(-1).type == "min"
        assert factory.create(type="max", n=0)(1).type == "max"
        assert factory.create(type="pattern", pattern="^a", label="startsWithA")("ba").label == "startsWithA"
        assert factory.create(type="equalTo", other="yes")("no").type == "equalTo"
        assert factory.create(type="oneOf", values=["a", "b"])("c").type == "oneOf"
        assert factory.create(type="matchesField", field="x")("1", {"x": "2"}).type == "matchesField"

    def test_aliases(self):
        """snake_case names and alternative parameter keys are accepted."""
        assert rule_factory.create(type="min_length", n=2)("abc") is False
        assert rule_factory.create(type="minLength", minLength=2)("a").min_length == 2
        assert rule_factory.create(type="one_of", values=[1])(1) is False
        assert rule_factory.create(type="matches_field", fieldName="x")(1, {"x": 1}) is False

    def test_compose_and_optional(self):
        """Nested compose and optional configurations."""
        rule = rule_factory.create(
            type="optional",
            rule={
                "type": "compose",
                "rules": [
                    {"type": "minLength", "n": 8},
                    {"type": "pattern", "pattern": "[0-9]", "label": "containsNumbers"},
                ],
            },
        )
        assert rule("") is False
        assert rule("short") == MinLengthError(value="short", min_length=8)
        assert rule("longenough").label == "containsNumbers"
        assert rule("longenough1") is False

    def test_type_case_insensitive(self):
        """Rule types match regardless of case."""
        assert rule_factory.create(type="Pattern", pattern="x")("x") is False
        assert rule_factory.create(type="MIN", n=1)(0).type == "min"
        assert rule_factory.create(type="Compose", rules=[{"type": "MaxLength", "n": 1}])("ab").type == "maxLength"
        assert rule_factory.create(type="ONEOF", values=[1])(1) is False

    def test_unknown_type(self):
        """Unknown and missing types raise instead of being dropped."""
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(type="required")
        with pytest.raises(RuleConfigurationError):
            rule_factory.create(n=3)

    def test_missing_parameters(self):
        """Rules missing their parameter raise with the rule type."""
        with pytest.raises(RuleConfigurationError) as exc_info:
            rule_factory.create(type="minLength")
        assert exc_info.value.context["type"] == "minLength"


class TestValidatorFactory:
    """Test building record validators from configuration."""

    def test_mapping_form(self):
        """Fields given as a mapping of rule lists."""
        validate = validator_factory.create(
            name="password_form",
            fields={
                "password": [
                    {"type": "minLength", "n": 8},
                    {"type": "pattern", "pattern": "[0-9]", "label": "containsNumbers"},
                ],
                "passwordConfirm": {"type": "matchesField", "field": "password"},
                "nickname": {
                    "optional": True,
                    "rules": [{"type": "maxLength", "n": 5}],
                },
            },
        )

        assert validate({"password": "abcdefg12", "passwordConfirm": "abcdefg12"}).is_valid

        result = validate({
            "password": "short",
            "passwordConfirm": "other",
            "nickname": "toolongname",
        })
        assert list(result.validation_errors) == ["password", "passwordConfirm", "nickname"]
        assert result.validation_errors["password"] == MinLengthError(value="short", min_length=8)
        assert result.validation_errors["passwordConfirm"] == MatchesFieldError(
            value="other", field_name="password", other="short"
        )
        assert result.error_types()["nickname"] == "maxLength"

    def test_list_form(self):
        """Fields given as a list of named definitions."""
        factory = ValidatorFactory()
        validate = factory.create(fields=[
            {"name": "age", "rules": [{"type": "min", "n": 18}, {"type": "max", "n": 130}]},
            {"name": "role", "type": "oneOf", "values": ["admin", "user"]},
        ])

        assert validate({"age": "30", "role": "user"}).is_valid
        result = validate({"age": 200, "role": "guest"})
        assert result.error_types() == {"age": "max", "role": "oneOf"}

    def test_single_rule_optional(self):
        """A single rule dict with optional set skips empty values."""
        validate = validator_factory.create(fields={
            "nickname": {"type": "maxLength", "n": 5, "optional": True},
        })

        assert validate({}).is_valid
        assert validate({"nickname": ""}).is_valid
        assert validate({"nickname": "abc"}).is_valid
        assert validate({"nickname": "toolongname"}).error_types() == {"nickname": "maxLength"}

    def test_single_rule_not_optional_by_default(self):
        """Without optional, an empty value fails a single rule."""
        validate = validator_factory.create(fields={"nickname": {"type": "maxLength", "n": 5}})
        assert validate({}).error_types() == {"nickname": "maxLength"}

    def test_field_without_rules(self):
        """A field with an empty rule list always passes."""
        validate = validator_factory.create(fields={"anything": []})
        assert validate({}).is_valid

    def test_invalid_field_configuration(self):
        """Unnamed list entries and non-dict field configs raise."""
        with pytest.raises(RuleConfigurationError):
            validator_factory.create(fields=[{"rules": []}])
        with pytest.raises(RuleConfigurationError):
            validator_factory.create(fields={"a": "minLength"})

    def test_uses_given_rule_factory(self):
        """The validator factory builds rules through its rule factory."""
        rf = RuleFactory()
        assert ValidatorFactory(rf).rule_factory is rf
