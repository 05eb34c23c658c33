"""Phone number validator.

    phone(PhoneType.simple(PhoneFormat.DASH_ONLY))           # 239-777-7777
    phone(PhoneType.country_code(PhoneFormat.PLAIN))         # 1 2397777777
    phone(PhoneType.custom(lambda: r"0[2-478][0-9]{8}"))     # Australian landline
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from validata.data import ValidationData
from validata.validator import Validator, string_validator

COUNTRY_CODE_PATTERN = "[0-9]{1,4}"


class PhoneFormat(Enum):
    """Layout of the area code and the digits after it (USA/Canada style)."""

    PLAIN = "[0-9]{3}[0-9]{3}[0-9]{4}"  # 2397777777
    DASH_WITH_PARENTHESIS = r"\([0-9]{3}\)[0-9]{3}-[0-9]{4}"  # (239)777-7777
    DASH_ONLY = "[0-9]{3}-[0-9]{3}-[0-9]{4}"  # 239-777-7777


@dataclass(frozen=True)
class PhoneType:
    """What a phone number must look like.

    Build one with ``simple``, ``country_code`` or ``custom``. Custom types
    supply their own regex for numbers outside USA/Canada conventions.
    """

    format: PhoneFormat | None = None
    with_country_code: bool = False
    custom_regex: Callable[[], str] | None = None

    @classmethod
    def simple(cls, format: PhoneFormat) -> PhoneType:
        return cls(format=format)

    @classmethod
    def country_code(cls, format: PhoneFormat) -> PhoneType:
        """Numbers prefixed by a 1-4 digit country code and a space: ``1 (239)555-7777``."""
        return cls(format=format, with_country_code=True)

    @classmethod
    def custom(cls, supplier: Callable[[], str]) -> PhoneType:
        return cls(custom_regex=supplier)

    @property
    def regex(self) -> str:
        if self.custom_regex is not None:
            return self.custom_regex()
        if self.format is None:
            raise ValueError("PhoneType needs a format or a custom regex")
        if self.with_country_code:
            return f"{COUNTRY_CODE_PATTERN} {self.format.value}"
        return self.format.value


def phone(type: PhoneType) -> Validator[ValidationData]:
    """Validate that the whole string is a phone number of the given type."""
    pattern = re.compile(type.regex, re.IGNORECASE)
    return string_validator(
        "a valid phone number",
        lambda text: pattern.fullmatch(text) is not None,
    )
