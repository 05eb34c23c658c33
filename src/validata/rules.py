"""
rules.py: declarative validations loaded from YAML.

A rule document binds validators to field paths:

    model: User
    fields:
      - path: name
        rule: {and: [{count: {min: 5}}, alphanumeric]}
      - path: email
        rule: {or: [nil, email]}
      - path: pet.name
        label: petName
        rule: {count: {max: 20}}

A rule is a registered validator name, a single-key mapping of name to
params, or an ``and``/``or``/``not`` combination of rules. Documents are
checked against a JSON Schema before anything is built.

Usage:
    from validata.rules import lint_rules, load_rules

    for issue in lint_rules(Path("user.yaml")):
        print(issue)

    validations = load_rules(Path("user.yaml"))
    validations.validate(record)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError

from validata.combinators import all_of, any_of, not_
from validata.data import ValidationData
from validata.registry import ValidatorRegistry, register_builtin_validators
from validata.validations import Validations
from validata.validator import Validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_COMBINATORS = ("and", "or", "not")

RULES_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["fields"],
    "additionalProperties": False,
    "properties": {
        "model": {"type": "string"},
        "fields": {"type": "array", "items": {"$ref": "#/$defs/field"}},
    },
    "$defs": {
        "field": {
            "type": "object",
            "required": ["path", "rule"],
            "additionalProperties": False,
            "properties": {
                "path": {"type": "string", "minLength": 1},
                "label": {"type": "string", "minLength": 1},
                "rule": {"$ref": "#/$defs/rule"},
            },
        },
        "rule": {
            "oneOf": [
                {"type": "string", "minLength": 1},
                {
                    "type": "object",
                    "required": ["and"],
                    "additionalProperties": False,
                    "properties": {
                        "and": {"type": "array", "minItems": 1, "items": {"$ref": "#/$defs/rule"}}
                    },
                },
                {
                    "type": "object",
                    "required": ["or"],
                    "additionalProperties": False,
                    "properties": {
                        "or": {"type": "array", "minItems": 1, "items": {"$ref": "#/$defs/rule"}}
                    },
                },
                {
                    "type": "object",
                    "required": ["not"],
                    "additionalProperties": False,
                    "properties": {"not": {"$ref": "#/$defs/rule"}},
                },
                {
                    "type": "object",
                    "minProperties": 1,
                    "maxProperties": 1,
                    "propertyNames": {"not": {"enum": list(_COMBINATORS)}},
                    "additionalProperties": {"type": ["object", "null"]},
                },
            ]
        },
    },
}


# ---------------------------------------------------------------------------
# Public data types
# ---------------------------------------------------------------------------


@dataclass
class RuleIssue:
    """A single problem found in a rule document."""

    file: Path | None
    message: str
    path: str = ""  # location within the document, e.g. "fields[0]/rule"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        source = self.file if self.file is not None else "<rules>"
        return f"[ERROR] {source}{loc}: {self.message}"


class RuleError(ValueError):
    """A rule document could not be turned into validations."""

    def __init__(self, issues: list[RuleIssue]):
        self.issues = issues
        super().__init__("; ".join(str(issue) for issue in issues))


@dataclass
class RuleDocument:
    """A parsed rule document."""

    model: str | None
    fields: list[dict[str, Any]] = field(default_factory=list)
    file: Path | None = None


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _json_path(error: SchemaError) -> str:
    """Convert a jsonschema error path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def _unknown_names(rule: Any, location: str) -> list[tuple[str, str]]:
    """Collect (location, name) for validator names the registry does not know."""
    if isinstance(rule, str):
        return [] if ValidatorRegistry.is_registered(rule) else [(location, rule)]
    if not isinstance(rule, dict):
        return []
    if "and" in rule or "or" in rule:
        op = "and" if "and" in rule else "or"
        found = []
        for index, item in enumerate(rule[op]):
            found.extend(_unknown_names(item, f"{location}/{op}[{index}]"))
        return found
    if "not" in rule:
        return _unknown_names(rule["not"], f"{location}/not")
    (name,) = rule.keys()
    return [] if ValidatorRegistry.is_registered(name) else [(location, name)]


def _check_document(raw: Any, file: Path | None) -> list[RuleIssue]:
    if raw is None:
        return [RuleIssue(file=file, message="File is empty or contains only whitespace")]

    validator = Draft202012Validator(RULES_SCHEMA)
    issues = [
        RuleIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(raw), key=_json_path)
    ]
    if issues:
        return issues

    for index, entry in enumerate(raw["fields"]):
        for location, name in _unknown_names(entry["rule"], f"fields[{index}]/rule"):
            issues.append(
                RuleIssue(file=file, message=f"Unknown validator '{name}'", path=location)
            )
    if issues:
        return issues

    for index, entry in enumerate(raw["fields"]):
        try:
            build_rule(entry["rule"])
        except ValueError as exc:
            issues.append(RuleIssue(file=file, message=str(exc), path=f"fields[{index}]/rule"))
    return issues


def _read_yaml(path: Path) -> tuple[Any, list[RuleIssue]]:
    try:
        with path.open(encoding="utf-8") as fh:
            return yaml.safe_load(fh), []
    except (yaml.YAMLError, UnicodeDecodeError) as exc:
        return None, [RuleIssue(file=path, message=f"YAML parse error: {exc}")]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_rule(rule: Any) -> Validator[ValidationData]:
    """Build a validator from one (already schema-checked) rule."""
    if isinstance(rule, str):
        return ValidatorRegistry.create(rule)
    if "and" in rule:
        return all_of(*(build_rule(item) for item in rule["and"]))
    if "or" in rule:
        return any_of(*(build_rule(item) for item in rule["or"]))
    if "not" in rule:
        return not_(build_rule(rule["not"]))
    ((name, params),) = rule.items()
    return ValidatorRegistry.create(name, params or {})


def lint_document(raw: Any, file: Path | None = None) -> list[RuleIssue]:
    """Check a parsed rule document. An empty list means it is valid."""
    register_builtin_validators()
    return _check_document(raw, file)


def lint_rules(path: Path) -> list[RuleIssue]:
    """Check a rule file. An empty list means it is valid."""
    raw, issues = _read_yaml(path)
    if issues:
        return issues
    return lint_document(raw, path)


def parse_document(raw: Any, file: Path | None = None) -> RuleDocument:
    """Validate a parsed rule document and wrap it.

    Raises:
        RuleError: If the document has schema problems or unknown validators.
    """
    issues = lint_document(raw, file)
    if issues:
        raise RuleError(issues)
    return RuleDocument(model=raw.get("model"), fields=list(raw["fields"]), file=file)


def build_validations(document: RuleDocument, model_type: type | None = None) -> Validations:
    """Turn a rule document into a ``Validations`` set, fields in document order."""
    validations: Validations = Validations(model_type)
    for index, entry in enumerate(document.fields):
        label = entry.get("label")
        try:
            validator = build_rule(entry["rule"])
        except ValueError as exc:
            raise RuleError(
                [RuleIssue(file=document.file, message=str(exc), path=f"fields[{index}]/rule")]
            ) from exc
        validations.add(entry["path"], validator, at=label)
        logger.debug("Loaded rule for %s: is %s", entry["path"], validator.readable)

    if not document.fields:
        logger.warning("Rule document %s declares no fields", document.file or "<rules>")
    return validations


def load_rules(path: Path, model_type: type | None = None) -> Validations:
    """Load a YAML rule file into a ``Validations`` set.

    Raises:
        RuleError: If the file cannot be parsed, fails the schema, or names
            an unknown validator.
    """
    raw, issues = _read_yaml(path)
    if issues:
        raise RuleError(issues)
    return build_validations(parse_document(raw, path), model_type)
