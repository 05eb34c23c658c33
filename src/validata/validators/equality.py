"""Validators comparing data against fixed values."""

from collections.abc import Iterable
from typing import Any

from validata.config import get_config
from validata.data import ValidationData, make_validation_data
from validata.errors import BasicValidationError, ValidationError
from validata.validator import Validator, data_validator


def _show(value: Any) -> str:
    return get_config().shorten(repr(value))


def equal(expectation: Any) -> Validator[ValidationData]:
    """Validate that the data equals ``expectation``."""
    expected = make_validation_data(expectation)
    readable = f"equal to {_show(expectation)}"

    def check(data: ValidationData) -> ValidationError | None:
        if data == expected:
            return None
        return BasicValidationError(f"is not {readable}")

    return data_validator(readable, check)


def different(expectation: Any) -> Validator[ValidationData]:
    """Validate that the data does not equal ``expectation``."""
    expected = make_validation_data(expectation)
    readable = f"different from {_show(expectation)}"

    def check(data: ValidationData) -> ValidationError | None:
        if data != expected:
            return None
        return BasicValidationError(f"is equal to {_show(expectation)}")

    return data_validator(readable, check)


def one_of(options: Iterable[Any]) -> Validator[ValidationData]:
    """Validate that the data is one of ``options``.

        one_of(["draft", "published"])
    """
    options = list(options)
    if not options:
        raise ValueError("one_of() needs at least one option")
    allowed = {make_validation_data(option) for option in options}
    readable = "one of " + get_config().shorten(", ".join(str(o) for o in options))

    def check(data: ValidationData) -> ValidationError | None:
        if data in allowed:
            return None
        return BasicValidationError(f"is not {readable}")

    return data_validator(readable, check)
