"""Field bindings and the per-model ``Validations`` runner.

A ``Validations`` value is an ordered list of (field, validator) bindings
for one model type. It holds no per-instance state: the model is passed to
``run``/``validate`` each time, so one value can be shared freely.

    validations = Validations(User)
    validations.add("name", count(5) & alphanumeric())
    validations.add("age", range_(18))
    validations.add(key("pet.name"), count(max=20))

    validations.validate(user)  # raises CompositeValidationError
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from validata.data import ValidationData, make_validation_data
from validata.errors import CompositeValidationError, FieldAccessError, ValidationError
from validata.validator import ValidationResult, Validator

logger = logging.getLogger(__name__)

M = TypeVar("M")

AGGREGATE_SEPARATOR = ", "


# =============================================================================
# Keys
# =============================================================================


@dataclass(frozen=True)
class _PathAccessor:
    """Reads a dotted path, one attribute (or mapping key) at a time."""

    segments: tuple[str, ...]

    def __call__(self, model: Any) -> Any:
        value = model
        for index, segment in enumerate(self.segments):
            if isinstance(value, Mapping):
                if segment not in value:
                    raise FieldAccessError(self.segments[: index + 1], "no such key")
                value = value[segment]
            elif hasattr(value, segment):
                value = getattr(value, segment)
            else:
                raise FieldAccessError(
                    self.segments[: index + 1],
                    f"`{type(value).__name__}` has no attribute {segment!r}",
                )
        return value


class ValidationKey:
    """A field reference plus the readable path shown in errors.

    Keys compare and hash by the accessor, not by the path label: two keys
    for the same field with different labels are equal.
    """

    def __init__(self, accessor: Callable[[Any], Any], path: Sequence[str]):
        self.accessor = accessor
        self.path: list[str] = list(path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationKey):
            return NotImplemented
        return self.accessor == other.accessor

    def __hash__(self) -> int:
        return hash(self.accessor)

    def __repr__(self) -> str:
        return f"ValidationKey({'.'.join(self.path)!r})"


def _segments(path: str | Sequence[str]) -> tuple[str, ...]:
    """Split a dotted path; a sequence is taken as segments already."""
    segments = tuple(path.split(".")) if isinstance(path, str) else tuple(path)
    if not segments or not all(segments):
        raise ValueError(f"invalid field path: {path!r}")
    return segments


def key(path: str | Sequence[str], at: str | Sequence[str] | None = None) -> ValidationKey:
    """Create a key from a dotted path (``"pet.name"``) or a list of segments.

    ``at`` overrides the readable path shown in errors and accepts the same
    two forms.
    """
    segments = _segments(path)
    return ValidationKey(_PathAccessor(segments), _segments(at) if at is not None else segments)


def get_validation_data(model: Any, validation_key: ValidationKey) -> ValidationData:
    """Read a field and convert it to validation data.

    Raises:
        FieldAccessError: If the field cannot be read.
        ConversionError: If the value cannot be converted.
    """
    return make_validation_data(validation_key.accessor(model))


def _as_key(
    field: ValidationKey | str | Sequence[str] | Callable[[Any], Any],
    at: str | Sequence[str] | None,
) -> ValidationKey:
    if isinstance(field, ValidationKey):
        if at is not None:
            return ValidationKey(field.accessor, _segments(at))
        return field
    if callable(field):
        if at is None:
            raise ValueError("a readable path (`at`) is required for accessor functions")
        return ValidationKey(field, _segments(at))
    return key(field, at)


# =============================================================================
# Bindings
# =============================================================================


@dataclass(frozen=True)
class Binding(Generic[M]):
    """One entry of a ``Validations`` set.

    Attributes:
        readable: Description, e.g. ``"name: is at least 5 characters"``.
        run: Validates a model, returning the (path-prefixed) failure or None.
        key: The field this binding reads, or None for whole-model checks.
    """

    readable: str
    run: Callable[[M], ValidationError | None]
    key: ValidationKey | None = None


def _call_custom(fn: Callable[[Any], Any], value: Any) -> ValidationError | None:
    """Run a user check that may either return or raise a ValidationError."""
    try:
        result = fn(value)
    except ValidationError as error:
        return error
    if isinstance(result, ValidationError):
        return result
    return None


# =============================================================================
# Validations
# =============================================================================


class Validations(Generic[M]):
    """Ordered field bindings for one model type.

    Running evaluates every binding, never stopping at the first failure,
    and aggregates all failures into one ``CompositeValidationError`` whose
    reason joins the field reasons with ", ". Errors that are not
    ``ValidationError`` (unreadable or unconvertible fields) abort the run.
    """

    def __init__(self, model_type: type[M] | None = None):
        self.model_type = model_type
        self._bindings: list[Binding[M]] = []

    def add(
        self,
        field: ValidationKey | str | Sequence[str] | Callable[[M], Any],
        validator: Validator[ValidationData],
        at: str | Sequence[str] | None = None,
    ) -> Validations[M]:
        """Bind ``validator`` to a field.

        Args:
            field: A ``ValidationKey``, a dotted path, a list of segments, or
                an accessor function (which then needs ``at``).
            validator: Validator run against the field's validation data.
            at: Readable path shown in errors; defaults to the field path.
        """
        validation_key = _as_key(field, at)

        def run(model: M) -> ValidationError | None:
            data = get_validation_data(model, validation_key)
            error = validator.check(data)
            if error is None:
                return None
            return error.with_path_prefix(validation_key.path)

        label = ".".join(validation_key.path)
        self._bindings.append(
            Binding(f"{label}: is {validator.readable}", run, validation_key)
        )
        return self

    def add_custom(
        self,
        field: ValidationKey | str | Sequence[str] | Callable[[M], Any],
        readable: str,
        fn: Callable[[Any], ValidationError | None],
        at: str | Sequence[str] | None = None,
    ) -> Validations[M]:
        """Bind a custom check that receives the raw field value.

        ``fn`` reports a failure by returning or raising a ``ValidationError``.

            validations.add_custom("name", "is vapor", lambda name:
                None if name == "vapor" else BasicValidationError("is not vapor"))
        """
        validation_key = _as_key(field, at)

        def run(model: M) -> ValidationError | None:
            error = _call_custom(fn, validation_key.accessor(model))
            if error is None:
                return None
            return error.with_path_prefix(validation_key.path)

        label = ".".join(validation_key.path)
        self._bindings.append(Binding(f"{label}: {readable}", run, validation_key))
        return self

    def add_model(
        self,
        readable: str,
        fn: Callable[[M], ValidationError | None],
    ) -> Validations[M]:
        """Add a check over the whole model, e.g. comparing two fields."""
        self._bindings.append(Binding(readable, lambda model: _call_custom(fn, model)))
        return self

    def run(self, model: M) -> ValidationResult:
        """Evaluate every binding and aggregate the failures."""
        errors: list[ValidationError] = []
        for binding in self._bindings:
            error = binding.run(model)
            if error is not None:
                errors.append(error)

        logger.debug(
            "Validated %s: %d binding(s), %d failure(s)",
            type(model).__name__,
            len(self._bindings),
            len(errors),
        )

        if errors:
            return ValidationResult(
                valid=False,
                error=CompositeValidationError(errors, separator=AGGREGATE_SEPARATOR),
            )
        return ValidationResult(valid=True)

    def validate(self, model: M) -> None:
        """Raise the aggregate ``CompositeValidationError`` if any binding fails."""
        self.run(model).raise_for_errors()

    def __iter__(self) -> Iterator[Binding[M]]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __str__(self) -> str:
        return "\n".join(binding.readable for binding in self._bindings)

    def __repr__(self) -> str:
        name = self.model_type.__name__ if self.model_type else "Any"
        return f"Validations[{name}]({len(self)} binding(s))"
