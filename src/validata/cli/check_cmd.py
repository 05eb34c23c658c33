"""Rule CLI commands: check records, lint rule files and list validators."""

import json
from pathlib import Path
from typing import Any

import click
import yaml

from validata.config import get_config
from validata.errors import ConversionError, FieldAccessError
from validata.registry import ValidatorRegistry, register_builtin_validators
from validata.rules import RuleError, lint_rules, load_rules


def _load_record(path: Path) -> Any:
    """Read a record from a JSON or YAML file."""
    with path.open(encoding="utf-8") as fh:
        if path.suffix.lower() == ".json":
            return json.load(fh)
        return yaml.safe_load(fh)


def _resolve_rules(rules_path: Path | None) -> Path:
    if rules_path is not None:
        return rules_path
    configured = get_config().rules_path
    if configured is None:
        click.echo(
            "Error: no rules file given. Pass --rules or set VALIDATA_RULES_PATH.",
            err=True,
        )
        raise SystemExit(2)
    if not configured.exists():
        click.echo(f"Error: rules file not found at {configured}", err=True)
        raise SystemExit(2)
    return configured


@click.command()
@click.argument("record_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--rules",
    "rules_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML rule file (defaults to $VALIDATA_RULES_PATH).",
)
def check(record_path: Path, rules_path: Path | None):
    """Validate a JSON or YAML record against a rule file."""
    rules_file = _resolve_rules(rules_path)

    try:
        validations = load_rules(rules_file)
    except RuleError as e:
        for issue in e.issues:
            click.echo(click.style(str(issue), fg="red"), err=True)
        raise SystemExit(2)

    try:
        record = _load_record(record_path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError, OSError) as e:
        click.echo(click.style(f"Could not parse {record_path}: {e}", fg="red"), err=True)
        raise SystemExit(2)

    try:
        result = validations.run(record)
    except (ConversionError, FieldAccessError) as e:
        click.echo(click.style(f"Validation could not run: {e}", fg="red"), err=True)
        raise SystemExit(2)

    if result.valid:
        click.echo(click.style("Record is valid.", fg="green", bold=True))
        return

    for error in result.errors:
        click.echo(click.style(f"  ✗ {error.reason}", fg="red"))
    click.echo(
        click.style(f"\n{len(result.errors)} field(s) failed validation", fg="red", bold=True)
    )
    raise SystemExit(1)


@click.group()
def rules():
    """Rule file commands."""
    pass


@rules.command()
@click.argument("rules_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def lint(rules_path: Path):
    """Check a rule file against the rule schema and the validator registry."""
    issues = lint_rules(rules_path)

    for issue in issues:
        click.echo(click.style(str(issue), fg="red"))

    if issues:
        click.echo(click.style(f"\n{len(issues)} issue(s) found", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style("Rule file is valid.", fg="green", bold=True))


@click.command()
def validators():
    """List the registered validator names."""
    register_builtin_validators()
    for name in ValidatorRegistry.list_registered():
        click.echo(name)
