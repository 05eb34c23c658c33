"""Tests for YAML rule documents: schema checks, linting and loading."""

import logging
from pathlib import Path
from textwrap import dedent

import pytest

from validata.errors import CompositeValidationError
from validata.registry import ValidatorRegistry, register_builtin_validators
from validata.rules import (
    RuleError,
    RuleIssue,
    build_rule,
    lint_document,
    lint_rules,
    load_rules,
    parse_document,
)

USER_RULES = """
model: User
fields:
  - path: name
    rule: {and: [{count: {min: 5}}, alphanumeric]}
  - path: age
    rule: {range: {min: 18}}
  - path: email
    rule: {or: [nil, email]}
  - path: pet.name
    label: petName
    rule: {count: {max: 10}}
"""


@pytest.fixture(autouse=True)
def clean_registry():
    ValidatorRegistry.clear()
    yield
    ValidatorRegistry.clear()


def write_rules(tmp_path: Path, text: str, name: str = "rules.yaml") -> Path:
    """Helper to write a rule file."""
    path = tmp_path / name
    path.write_text(dedent(text))
    return path


def make_record(**overrides) -> dict:
    record = {"name": "Tanner", "age": 23, "email": None, "pet": {"name": "Zizek"}}
    record.update(overrides)
    return record


# =============================================================================
# Linting
# =============================================================================


class TestLintDocument:
    def test_valid_document(self):
        document = {"fields": [{"path": "name", "rule": "required"}]}
        assert lint_document(document) == []

    def test_empty_document(self):
        (issue,) = lint_document(None)
        assert issue.message == "File is empty or contains only whitespace"

    def test_missing_fields(self):
        (issue,) = lint_document({"model": "User"})
        assert "'fields' is a required property" in issue.message
        assert issue.path == ""

    def test_unknown_top_level_key(self):
        issues = lint_document({"fields": [], "extra": 1})
        assert any("extra" in issue.message for issue in issues)

    def test_field_without_rule(self):
        (issue,) = lint_document({"fields": [{"path": "name"}]})
        assert issue.path == "fields[0]"
        assert "'rule' is a required property" in issue.message

    def test_mixed_combinators_rejected(self):
        document = {"fields": [{"path": "name", "rule": {"and": ["nil"], "or": ["nil"]}}]}
        (issue,) = lint_document(document)
        assert issue.path == "fields[0]/rule"

    def test_empty_and_rejected(self):
        document = {"fields": [{"path": "name", "rule": {"and": []}}]}
        issues = lint_document(document)
        assert issues
        assert issues[0].path.startswith("fields[0]/rule")

    def test_unknown_validator(self):
        document = {"fields": [{"path": "name", "rule": "bogus"}]}
        (issue,) = lint_document(document)
        assert issue.message == "Unknown validator 'bogus'"
        assert issue.path == "fields[0]/rule"

    def test_unknown_nested_validator(self):
        document = {
            "fields": [
                {"path": "name", "rule": "nil"},
                {"path": "age", "rule": {"or": ["nil", {"not": {"bogus": {"x": 1}}}]}},
            ]
        }
        (issue,) = lint_document(document)
        assert issue.path == "fields[1]/rule/or[1]/not"

    def test_params_may_be_null(self):
        document = {"fields": [{"path": "name", "rule": {"email": None}}]}
        assert lint_document(document) == []

    def test_invalid_params_reported(self):
        document = {
            "fields": [
                {"path": "name", "rule": "required"},
                {"path": "password", "rule": {"and": ["required", {"strongPassword": {"minLength": "six"}}]}},
            ]
        }
        (issue,) = lint_document(document)
        assert issue.path == "fields[1]/rule"
        assert "Invalid params for validator 'strongPassword'" in issue.message

    def test_invalid_phone_regex_reported(self):
        document = {"fields": [{"path": "phone", "rule": {"phone": {"regex": "("}}}]}
        (issue,) = lint_document(document)
        assert "invalid phone regex" in issue.message


class TestLintRules:
    def test_valid_file(self, tmp_path):
        assert lint_rules(write_rules(tmp_path, USER_RULES)) == []

    def test_yaml_parse_error(self, tmp_path):
        path = write_rules(tmp_path, "fields: [unclosed\n")
        (issue,) = lint_rules(path)
        assert issue.message.startswith("YAML parse error")
        assert issue.file == path

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_bytes(b"fields: \xff\n")
        (issue,) = lint_rules(path)
        assert issue.message.startswith("YAML parse error")

    def test_issue_str(self, tmp_path):
        path = write_rules(tmp_path, "fields:\n  - path: name\n    rule: bogus\n")
        (issue,) = lint_rules(path)
        assert str(issue) == f"[ERROR] {path} at fields[0]/rule: Unknown validator 'bogus'"

    def test_issue_str_without_file(self):
        issue = RuleIssue(file=None, message="broken")
        assert str(issue) == "[ERROR] <rules>: broken"


# =============================================================================
# Building
# =============================================================================


class TestBuildRule:
    @pytest.fixture(autouse=True)
    def builtins(self):
        register_builtin_validators()

    def test_name(self):
        assert build_rule("nil").readable == "null"

    def test_params(self):
        assert build_rule({"count": {"min": 5, "max": 10}}).readable == "between 5 and 10 characters"

    def test_and(self):
        validator = build_rule({"and": [{"count": {"min": 5}}, "alphanumeric"]})
        assert validator.readable == "at least 5 characters and is alphanumeric"

    def test_or(self):
        validator = build_rule({"or": ["nil", "email"]})
        assert validator.passes(None)
        assert not validator.passes("bad")

    def test_not(self):
        validator = build_rule({"not": "nil"})
        assert validator.readable == "not null"
        assert validator.passes("x")

    def test_single_item_and(self):
        assert build_rule({"and": ["nil"]}).readable == "null"


class TestParseDocument:
    def test_returns_document(self):
        document = parse_document({"model": "User", "fields": [{"path": "name", "rule": "required"}]})
        assert document.model == "User"
        assert document.fields == [{"path": "name", "rule": "required"}]

    def test_raises_with_issues(self):
        with pytest.raises(RuleError) as exc_info:
            parse_document({"fields": [{"path": "name", "rule": "bogus"}]})
        assert len(exc_info.value.issues) == 1
        assert "Unknown validator 'bogus'" in str(exc_info.value)


class TestLoadRules:
    def test_valid_record(self, tmp_path):
        validations = load_rules(write_rules(tmp_path, USER_RULES))
        assert validations.run(make_record()).valid

    def test_fields_in_document_order(self, tmp_path):
        validations = load_rules(write_rules(tmp_path, USER_RULES))
        assert str(validations).splitlines() == [
            "name: is at least 5 characters and is alphanumeric",
            "age: is at least 18",
            "email: is null or is a valid email address",
            "petName: is at most 10 characters",
        ]

    def test_all_failures_reported(self, tmp_path):
        validations = load_rules(write_rules(tmp_path, USER_RULES))
        result = validations.run(
            make_record(name="Al", age=10, email="bad", pet={"name": "Zizek the cat"})
        )
        assert [".".join(error.path) for error in result.errors] == [
            "name",
            "age",
            "email",
            "petName",
        ]

    def test_validate_raises(self, tmp_path):
        validations = load_rules(write_rules(tmp_path, USER_RULES))
        with pytest.raises(CompositeValidationError, match="`age` is not at least 18"):
            validations.validate(make_record(age=10))

    def test_model_type(self, tmp_path):
        validations = load_rules(write_rules(tmp_path, USER_RULES), model_type=dict)
        assert validations.model_type is dict

    def test_invalid_params_raise_rule_error(self, tmp_path):
        path = write_rules(tmp_path, "fields:\n  - path: name\n    rule: {count: {minimum: 5}}\n")
        with pytest.raises(RuleError) as exc_info:
            load_rules(path)
        (issue,) = exc_info.value.issues
        assert issue.path == "fields[0]/rule"
        assert "Invalid params for validator 'count'" in issue.message

    def test_wrong_param_type_raises_rule_error(self, tmp_path):
        path = write_rules(
            tmp_path, "fields:\n  - path: password\n    rule: {strongPassword: {minLength: six}}\n"
        )
        with pytest.raises(RuleError) as exc_info:
            load_rules(path)
        (issue,) = exc_info.value.issues
        assert issue.path == "fields[0]/rule"
        assert "'minLength' must be int, got str" in issue.message

    def test_unknown_validator_raises_rule_error(self, tmp_path):
        path = write_rules(tmp_path, "fields:\n  - path: name\n    rule: bogus\n")
        with pytest.raises(RuleError):
            load_rules(path)

    def test_yaml_error_raises_rule_error(self, tmp_path):
        with pytest.raises(RuleError, match="YAML parse error"):
            load_rules(write_rules(tmp_path, "fields: [unclosed\n"))

    def test_empty_fields_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="validata.rules"):
            validations = load_rules(write_rules(tmp_path, "fields: []\n"))
        assert len(validations) == 0
        assert "declares no fields" in caplog.text
