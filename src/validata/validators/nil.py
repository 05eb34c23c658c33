"""Presence validators: nil, empty and required."""

from validata.data import Kind, ValidationData
from validata.errors import BasicValidationError, ValidationError
from validata.validator import Validator, data_validator

_COLLECTION_KINDS = (Kind.STRING, Kind.BYTES, Kind.ARRAY, Kind.MAP)


def nil() -> Validator[ValidationData]:
    """Validate that the data is ``Null``.

    Combine with ``not_`` to require a value, or with ``or_`` to make
    another rule optional:

        or_(nil(), email())
    """

    def check(data: ValidationData) -> ValidationError | None:
        if data.is_null:
            return None
        return BasicValidationError("is not null")

    return data_validator("null", check)


def empty() -> Validator[ValidationData]:
    """Validate that a string, byte blob, array or map has no elements."""

    def check(data: ValidationData) -> ValidationError | None:
        if data.kind not in _COLLECTION_KINDS:
            return BasicValidationError("is not a collection")
        if len(data.value) == 0:
            return None
        return BasicValidationError("is not empty")

    return data_validator("empty", check)


def required() -> Validator[ValidationData]:
    """Validate that a value is present: not null, not "", not an empty collection."""

    def check(data: ValidationData) -> ValidationError | None:
        if data.is_null:
            return BasicValidationError("is null")
        if data.kind is Kind.STRING and data.value == "":
            return BasicValidationError("is an empty string")
        if data.kind in (Kind.ARRAY, Kind.MAP) and len(data.value) == 0:
            return BasicValidationError("is an empty collection")
        return None

    return data_validator("present", check)
