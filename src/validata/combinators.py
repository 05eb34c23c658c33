"""Logical combinators over validators.

    name_rule = and_(count(5), alphanumeric())
    email_rule = or_(nil(), email())
    present = not_(nil())

The ``&``, ``|`` and ``~`` operators on ``Validator`` delegate here.
"""

from __future__ import annotations

from functools import reduce
from typing import Any

from validata.errors import BasicValidationError, CompositeValidationError, ValidationError
from validata.validator import T, Validator


def and_(lhs: Validator[T], rhs: Validator[T]) -> Validator[T]:
    """Succeed if both validators succeed.

    Both sides always run so a failure reports every reason. The composite
    error holds only the sides that failed, left first.
    """

    def check(value: Any) -> ValidationError | None:
        left = lhs.check(value)
        right = rhs.check(value)
        failed = [error for error in (left, right) if error is not None]
        if not failed:
            return None
        return CompositeValidationError(failed)

    return Validator(f"{lhs.readable} and is {rhs.readable}", check)


def or_(lhs: Validator[T], rhs: Validator[T]) -> Validator[T]:
    """Succeed if either validator succeeds.

    ``rhs`` only runs when ``lhs`` fails. When both fail the reasons are
    joined with "and": neither condition held.
    """

    def check(value: Any) -> ValidationError | None:
        left = lhs.check(value)
        if left is None:
            return None
        right = rhs.check(value)
        if right is None:
            return None
        return CompositeValidationError([left, right])

    return Validator(f"{lhs.readable} or is {rhs.readable}", check)


def not_(rhs: Validator[T]) -> Validator[T]:
    """Invert a validator: succeed exactly when ``rhs`` fails."""

    def check(value: Any) -> ValidationError | None:
        if rhs.check(value) is None:
            return BasicValidationError(f"is {rhs.readable}")
        return None

    return Validator(f"not {rhs.readable}", check)


def all_of(first: Validator[T], *rest: Validator[T]) -> Validator[T]:
    """Left fold of ``and_`` over one or more validators."""
    return reduce(and_, rest, first)


def any_of(first: Validator[T], *rest: Validator[T]) -> Validator[T]:
    """Left fold of ``or_`` over one or more validators."""
    return reduce(or_, rest, first)
