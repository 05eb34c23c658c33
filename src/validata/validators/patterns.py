"""Pattern-based string validators.

Every pattern is matched against the whole input (``re.fullmatch``), never a
substring, and every failure reads "is not a valid <kind>".
"""

import re
from enum import Enum

from validata.data import ValidationData
from validata.validator import Validator, string_validator


# =============================================================================
# Patterns
# =============================================================================

EMAIL_PATTERN = re.compile(r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}", re.IGNORECASE)

HEXADECIMAL_PATTERN = re.compile(r"[a-f0-9]+", re.IGNORECASE)

MD5_PATTERN = re.compile(r"[a-f0-9]{32}", re.IGNORECASE)

MONGO_ID_PATTERN = re.compile(r"[a-f0-9]{24}", re.IGNORECASE)

MAC_ADDRESS_PATTERN = re.compile(
    r"[a-f0-9]{2}([:-]?[a-f0-9]{2}){5}|[a-f0-9]{4}(\.?[a-f0-9]{4}){2}",
    re.IGNORECASE,
)

BASE64_PATTERN = re.compile(
    r"(?:[a-z0-9+/]{4})*(?:[a-z0-9+/]{2}==|[a-z0-9+/]{3}=|[a-z0-9+/]{4})",
    re.IGNORECASE,
)

PRINTABLE_ASCII_PATTERN = re.compile(r"[ -~]+")

URL_PATTERN = re.compile(r"https?://[^\s/$.?#].[^\s]*", re.IGNORECASE)

# A letter, a digit and a symbol; the length floor is checked separately
STRONG_PASSWORD_PATTERN = re.compile(
    r"(?=.*[a-zA-Z])(?=.*[0-9])(?=.*[^a-zA-Z\d\s:]).*", re.DOTALL
)


class UUIDVersion(Enum):
    """UUID version digit; ``ANY`` accepts versions 1 through 5."""

    V1 = "1"
    V2 = "2"
    V3 = "3"
    V4 = "4"
    V5 = "5"
    ANY = "[1-5]"

    @property
    def pattern(self) -> re.Pattern[str]:
        return re.compile(
            rf"[0-9a-f]{{8}}-[0-9a-f]{{4}}-{self.value}[0-9a-f]{{3}}-[89ab][0-9a-f]{{3}}-[0-9a-f]{{12}}",
            re.IGNORECASE,
        )

    @property
    def label(self) -> str:
        if self is UUIDVersion.ANY:
            return "UUID"
        return f"UUIDv{self.value}"


def _matches(pattern: re.Pattern[str]):
    return lambda text: pattern.fullmatch(text) is not None


# =============================================================================
# Validators
# =============================================================================


def email() -> Validator[ValidationData]:
    """Validate that a string is an email address.

        email().passes("tanner@vapor.codes")   # True
        email().passes("tanner@@vapor.codes")  # False
    """
    return string_validator("a valid email address", _matches(EMAIL_PATTERN))


def hexadecimal() -> Validator[ValidationData]:
    return string_validator("a valid hexadecimal", _matches(HEXADECIMAL_PATTERN))


def md5() -> Validator[ValidationData]:
    return string_validator("a valid MD5", _matches(MD5_PATTERN))


def mongo_id() -> Validator[ValidationData]:
    return string_validator("a valid Mongo ID", _matches(MONGO_ID_PATTERN))


def mac_address() -> Validator[ValidationData]:
    """Validate ``aa:bb:cc:dd:ee:ff``, ``aa-bb-...`` and ``aabb.ccdd.eeff`` forms."""
    return string_validator("a valid MAC address", _matches(MAC_ADDRESS_PATTERN))


def uuid(version: UUIDVersion = UUIDVersion.ANY) -> Validator[ValidationData]:
    """Validate a UUID of the given version (any of 1-5 by default)."""
    return string_validator(f"a valid {version.label}", _matches(version.pattern))


def base64() -> Validator[ValidationData]:
    """Validate a padded Base64 string. The empty string is not valid."""

    def predicate(text: str) -> bool:
        return len(text) % 4 == 0 and BASE64_PATTERN.fullmatch(text) is not None

    return string_validator("a valid Base64 string", predicate)


def printable_ascii() -> Validator[ValidationData]:
    """Validate that a non-empty string only holds printable ASCII (space to ``~``)."""
    return string_validator("a valid printable ASCII string", _matches(PRINTABLE_ASCII_PATTERN))


def url() -> Validator[ValidationData]:
    return string_validator("a valid URL", _matches(URL_PATTERN))


def strong_password(min_length: int = 6) -> Validator[ValidationData]:
    """Validate a password of at least ``min_length`` characters.

    It must contain a letter, a digit and a symbol (anything but letters,
    digits, whitespace and ``:``).
    """

    def predicate(text: str) -> bool:
        return len(text) >= min_length and STRONG_PASSWORD_PATTERN.fullmatch(text) is not None

    return string_validator("a valid strong password", predicate)


def numeric() -> Validator[ValidationData]:
    """Validate that a string parses as a number."""

    def predicate(text: str) -> bool:
        try:
            float(text)
        except ValueError:
            return False
        return True

    return string_validator("a valid number", predicate)
