"""Tagged data model inspected by validators.

Every value a validator looks at is first converted to a ``ValidationData``:
a closed union of string, integer, unsigned integer, boolean, bytes, date,
double, array, map and null. ``Null`` means "absent" and is distinct from an
empty string or an empty array.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from validata.errors import ConversionError

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1
UINT_MAX = 2**64 - 1


class Kind(Enum):
    """The active variant of a ``ValidationData``."""

    STRING = "string"
    INT = "int"
    UINT = "uint"
    BOOL = "bool"
    BYTES = "bytes"
    DATE = "date"
    DOUBLE = "double"
    ARRAY = "array"
    MAP = "map"
    NULL = "null"


@dataclass(frozen=True)
class ValidationData:
    """One value of the validation universe.

    Use the named constructors rather than building instances directly:

        ValidationData.string("Tanner")
        ValidationData.array([ValidationData.int(1), ValidationData.null()])
    """

    kind: Kind
    value: Any = None

    # -- constructors -------------------------------------------------------

    @classmethod
    def string(cls, value: str) -> ValidationData:
        return cls(Kind.STRING, value)

    @classmethod
    def int(cls, value: int) -> ValidationData:
        if not INT_MIN <= value <= INT_MAX:
            raise ConversionError(f"{value} cannot be represented as an int")
        return cls(Kind.INT, value)

    @classmethod
    def uint(cls, value: int) -> ValidationData:
        if not 0 <= value <= UINT_MAX:
            raise ConversionError(f"{value} cannot be represented as an unsigned int")
        return cls(Kind.UINT, value)

    @classmethod
    def bool(cls, value: bool) -> ValidationData:
        return cls(Kind.BOOL, value)

    @classmethod
    def bytes(cls, value: bytes) -> ValidationData:
        return cls(Kind.BYTES, bytes(value))

    @classmethod
    def date(cls, value: date) -> ValidationData:
        return cls(Kind.DATE, value)

    @classmethod
    def double(cls, value: float) -> ValidationData:
        return cls(Kind.DOUBLE, float(value))

    @classmethod
    def array(cls, items: list[ValidationData]) -> ValidationData:
        return cls(Kind.ARRAY, tuple(items))

    @classmethod
    def map(cls, items: Mapping[str, ValidationData]) -> ValidationData:
        # Stored as sorted pairs so the instance stays hashable.
        return cls(Kind.MAP, tuple(sorted(items.items())))

    @classmethod
    def null(cls) -> ValidationData:
        return cls(Kind.NULL)

    # -- accessors ----------------------------------------------------------

    @property
    def is_null(self) -> bool:
        return self.kind is Kind.NULL

    @property
    def as_string(self) -> str | None:
        return self.value if self.kind is Kind.STRING else None

    @property
    def as_int(self) -> int | None:
        return self.value if self.kind is Kind.INT else None

    @property
    def as_uint(self) -> int | None:
        return self.value if self.kind is Kind.UINT else None

    @property
    def as_bool(self) -> bool | None:
        return self.value if self.kind is Kind.BOOL else None

    @property
    def as_bytes(self) -> bytes | None:
        return self.value if self.kind is Kind.BYTES else None

    @property
    def as_date(self) -> date | None:
        return self.value if self.kind is Kind.DATE else None

    @property
    def as_double(self) -> float | None:
        return self.value if self.kind is Kind.DOUBLE else None

    @property
    def as_array(self) -> list[ValidationData] | None:
        return list(self.value) if self.kind is Kind.ARRAY else None

    @property
    def as_map(self) -> dict[str, ValidationData] | None:
        return dict(self.value) if self.kind is Kind.MAP else None

    @property
    def is_number(self) -> bool:
        return self.kind in (Kind.INT, Kind.UINT, Kind.DOUBLE)

    def to_python(self) -> Any:
        """Unwrap back into plain Python values, recursively."""
        if self.kind is Kind.ARRAY:
            return [item.to_python() for item in self.value]
        if self.kind is Kind.MAP:
            return {key: item.to_python() for key, item in self.value}
        return self.value

    def __repr__(self) -> str:
        if self.kind is Kind.NULL:
            return "ValidationData.null()"
        return f"ValidationData.{self.kind.value}({self.to_python()!r})"


@runtime_checkable
class ValidationDataRepresentable(Protocol):
    """Protocol for host types that know how to convert themselves.

    Implementations may raise ``ConversionError`` when a contained element
    cannot be converted.
    """

    def make_validation_data(self) -> ValidationData:
        ...


def make_validation_data(value: Any) -> ValidationData:
    """Convert a host value into ``ValidationData``.

    Primitives convert directly. Containers convert element by element and
    fail with ``ConversionError`` if any element cannot be converted.
    ``None`` becomes ``Null``.

    Raises:
        ConversionError: If the value (or a contained element) has no
            validation data representation, or an integer is out of range.
    """
    if isinstance(value, ValidationData):
        return value
    if value is None:
        return ValidationData.null()
    # bool is a subclass of int, so it must be checked first
    if isinstance(value, bool):
        return ValidationData.bool(value)
    if isinstance(value, str):
        return ValidationData.string(value)
    if isinstance(value, int):
        if INT_MIN <= value <= INT_MAX:
            return ValidationData.int(value)
        if 0 <= value <= UINT_MAX:
            return ValidationData.uint(value)
        raise ConversionError(
            f"`{type(value).__name__}` value {value} cannot be represented as an int"
        )
    if isinstance(value, (float, Decimal)):
        return ValidationData.double(float(value))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ValidationData.bytes(bytes(value))
    if isinstance(value, date):
        return ValidationData.date(value)
    if isinstance(value, ValidationDataRepresentable):
        return value.make_validation_data()
    if isinstance(value, Mapping):
        items: dict[str, ValidationData] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise ConversionError(f"`{type(key).__name__}` is not `str`")
            items[key] = make_validation_data(item)
        return ValidationData.map(items)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ValidationData.array([make_validation_data(item) for item in value])

    raise ConversionError(
        f"`{type(value).__name__}` is not convertible to validation data"
    )
