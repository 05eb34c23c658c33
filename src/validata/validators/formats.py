"""Validators that parse strings: JSON syntax, dates and IP addresses."""

import ipaddress
import json
from datetime import datetime
from enum import Enum

from validata.data import ValidationData
from validata.validator import Validator, string_validator


class IPVersion(Enum):
    V4 = "IPv4"
    V6 = "IPv6"
    ANY = "IP"


def json_syntax() -> Validator[ValidationData]:
    """Validate that a string is syntactically valid JSON."""

    def predicate(text: str) -> bool:
        try:
            json.loads(text)
        except ValueError:
            return False
        return True

    return string_validator("valid JSON", predicate)


def date_string(format: str = "%Y-%m-%d") -> Validator[ValidationData]:
    """Validate that a string parses with ``format`` (``strptime`` syntax).

    The empty string passes; pair with ``required()`` to reject it.
    """

    def predicate(text: str) -> bool:
        if not text:
            return True
        try:
            datetime.strptime(text, format)
        except ValueError:
            return False
        return True

    return string_validator("a valid date", predicate)


def ip_address(version: IPVersion = IPVersion.ANY) -> Validator[ValidationData]:
    """Validate an IPv4 or IPv6 address in its textual form."""

    def predicate(text: str) -> bool:
        try:
            address = ipaddress.ip_address(text)
        except ValueError:
            return False
        if version is IPVersion.V4:
            return address.version == 4
        if version is IPVersion.V6:
            return address.version == 6
        return True

    return string_validator(f"a valid {version.value} address", predicate)
