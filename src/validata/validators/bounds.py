"""Count and range validators.

Both check optional inclusive bounds. What gets compared depends on the
data:

- strings: character count
- bytes, arrays and maps: element count
- ints, unsigned ints and doubles: the number itself
- dates: the date itself

A missing bound is not checked. Exclusive upper bounds (a Python ``range``
or ``below(x)``) are stored as the inclusive bound one unit below.
"""

from datetime import date, datetime, timedelta
from typing import Any

from validata.data import Kind, ValidationData
from validata.errors import BasicValidationError, ValidationError
from validata.validator import Validator, data_validator

_SIZED_KINDS = (Kind.STRING, Kind.BYTES, Kind.ARRAY, Kind.MAP)
_NUMBER_KINDS = (Kind.INT, Kind.UINT, Kind.DOUBLE)


def below(upper: Any) -> Any:
    """Convert an exclusive upper bound to the inclusive bound one unit below.

    ints and floats step by 1, dates by one day and datetimes by one second.
    """
    if isinstance(upper, bool):
        raise TypeError("bool is not a valid bound")
    if isinstance(upper, datetime):
        return upper - timedelta(seconds=1)
    if isinstance(upper, date):
        return upper - timedelta(days=1)
    if isinstance(upper, (int, float)):
        return upper - 1
    raise TypeError(f"cannot step below a `{type(upper).__name__}` bound")


def _unpack(min: Any, max: Any) -> tuple[Any, Any]:
    if isinstance(min, range):
        if max is not None or min.step != 1:
            raise ValueError("a range bound must have step 1 and no separate max")
        return min.start, below(min.stop)
    return min, max


def _describe(min: Any, max: Any, unit: str = "") -> str:
    suffix = f" {unit}" if unit else ""
    if min is not None and max is not None:
        return f"between {min} and {max}{suffix}"
    if min is not None:
        return f"at least {min}{suffix}"
    if max is not None:
        return f"at most {max}{suffix}"
    return "valid"


def _comparable(bound: Any, kind: Kind, value: Any) -> bool:
    if kind is Kind.DATE:
        # date and datetime do not order against each other
        if not isinstance(bound, date):
            return False
        if isinstance(bound, datetime) != isinstance(value, datetime):
            return False
        if isinstance(bound, datetime):
            # neither do naive and aware datetimes
            return (bound.utcoffset() is None) == (value.utcoffset() is None)
        return True
    if kind in _SIZED_KINDS:
        return isinstance(bound, int) and not isinstance(bound, bool)
    return isinstance(bound, (int, float)) and not isinstance(bound, bool)


def _bounds_validator(min: Any, max: Any, readable: str) -> Validator[ValidationData]:
    def check(data: ValidationData) -> ValidationError | None:
        if data.kind in _SIZED_KINDS:
            measured = len(data.value)
        elif data.kind in _NUMBER_KINDS or data.kind is Kind.DATE:
            measured = data.value
        else:
            return BasicValidationError("is not a string, number, date or collection")

        for bound in (min, max):
            if bound is not None and not _comparable(bound, data.kind, data.value):
                return BasicValidationError(
                    f"is not comparable to {type(bound).__name__}"
                )

        if min is not None and measured < min:
            return BasicValidationError(f"is not {readable}")
        if max is not None and measured > max:
            return BasicValidationError(f"is not {readable}")
        return None

    return data_validator(readable, check)


def count(min: Any = None, max: Any = None) -> Validator[ValidationData]:
    """Validate a character or element count (or a value) against bounds.

        count(5, 10)       # 5 to 10 characters
        count(5)           # at least 5
        count(max=10)      # at most 10
        count(range(5, 10))  # 5 to 9
    """
    min, max = _unpack(min, max)
    return _bounds_validator(min, max, _describe(min, max, "characters"))


def range_(min: Any = None, max: Any = None) -> Validator[ValidationData]:
    """Validate a number or date (or a count) against bounds.

        range_(18)          # 18 or older
        range_(0, 100)
        range_(range(1, 13))  # 1 to 12
    """
    min, max = _unpack(min, max)
    return _bounds_validator(min, max, _describe(min, max))
