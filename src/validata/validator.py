"""The ``Validator`` value type and validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from validata.data import Kind, ValidationData, make_validation_data
from validata.errors import (
    BasicValidationError,
    CompositeValidationError,
    ValidationError,
)

T = TypeVar("T")

CheckFn = Callable[[T], "ValidationError | None"]


@dataclass(frozen=True)
class Validator(Generic[T]):
    """A named predicate over values of type ``T``.

    ``check`` returns ``None`` when the input is valid and a
    ``ValidationError`` describing the failure otherwise. Any other exception
    escaping ``check`` means the validation itself could not run and is
    propagated untouched.

    Attributes:
        readable: Clause describing what "valid" means, suitable after both
            "is" and "is not" (e.g. ``"alphanumeric"``).
        fn: The predicate.
        coerce: Optional conversion applied to inputs before ``fn`` runs.
            Leaf validators over ``ValidationData`` use
            ``make_validation_data`` so raw Python values can be passed.
    """

    readable: str
    fn: CheckFn[T]
    coerce: Callable[[Any], T] | None = field(default=None, compare=False)

    def check(self, value: Any) -> ValidationError | None:
        """Run the predicate, returning the failure as a value."""
        if self.coerce is not None:
            value = self.coerce(value)
        return self.fn(value)

    def validate(self, value: Any) -> None:
        """Run the predicate, raising ``ValidationError`` on failure."""
        error = self.check(value)
        if error is not None:
            raise error

    def passes(self, value: Any) -> bool:
        return self.check(value) is None

    def __and__(self, other: Validator[T]) -> Validator[T]:
        from validata.combinators import and_

        return and_(self, other)

    def __or__(self, other: Validator[T]) -> Validator[T]:
        from validata.combinators import or_

        return or_(self, other)

    def __invert__(self) -> Validator[T]:
        from validata.combinators import not_

        return not_(self)

    def __repr__(self) -> str:
        return f"Validator({self.readable!r})"


def data_validator(
    readable: str,
    fn: CheckFn[ValidationData],
) -> Validator[ValidationData]:
    """Build a leaf validator over ``ValidationData``."""
    return Validator(readable, fn, coerce=make_validation_data)


def string_validator(
    readable: str,
    predicate: Callable[[str], bool],
    message: str | None = None,
) -> Validator[ValidationData]:
    """Build a leaf validator that only accepts strings.

    Non-string data (``Null`` included) fails with "is not a string"; a
    string failing ``predicate`` fails with ``message``, which defaults to
    "is not <readable>".
    """
    failure = message or f"is not {readable}"

    def check(data: ValidationData) -> ValidationError | None:
        if data.kind is not Kind.STRING:
            return BasicValidationError("is not a string")
        if not predicate(data.value):
            return BasicValidationError(failure)
        return None

    return data_validator(readable, check)


@dataclass
class ValidationResult:
    """Result of running a ``Validations`` set against one model.

    Attributes:
        valid: True if every binding passed.
        error: The aggregate error when ``valid`` is False.
    """

    valid: bool
    error: CompositeValidationError | None = None

    @property
    def errors(self) -> list[ValidationError]:
        """Per-binding errors, already prefixed with their field paths."""
        if self.error is None:
            return []
        return self.error.children()

    @property
    def reason(self) -> str:
        return self.error.reason if self.error is not None else ""

    def raise_for_errors(self) -> None:
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "reason": self.reason,
            "errors": [e.to_dict() for e in self.errors],
        }
