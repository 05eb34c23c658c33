"""Leaf validators shipped with validata.

Each constructor returns a ``Validator[ValidationData]``; combine them with
``and_``, ``or_`` and ``not_`` (or ``&``, ``|`` and ``~``).
"""

from validata.validators.bounds import below, count, range_
from validata.validators.charset import (
    CharacterSet,
    alphanumeric,
    ascii,
    character_set,
)
from validata.validators.equality import different, equal, one_of
from validata.validators.formats import IPVersion, date_string, ip_address, json_syntax
from validata.validators.nil import empty, nil, required
from validata.validators.patterns import (
    UUIDVersion,
    base64,
    email,
    hexadecimal,
    mac_address,
    md5,
    mongo_id,
    numeric,
    printable_ascii,
    strong_password,
    url,
    uuid,
)
from validata.validators.phone import PhoneFormat, PhoneType, phone

__all__ = [
    # Presence
    "empty",
    "nil",
    "required",
    # Bounds
    "below",
    "count",
    "range_",
    # Character sets
    "CharacterSet",
    "alphanumeric",
    "ascii",
    "character_set",
    # Patterns
    "UUIDVersion",
    "base64",
    "email",
    "hexadecimal",
    "mac_address",
    "md5",
    "mongo_id",
    "numeric",
    "printable_ascii",
    "strong_password",
    "url",
    "uuid",
    # Phone
    "PhoneFormat",
    "PhoneType",
    "phone",
    # Parsed formats
    "IPVersion",
    "date_string",
    "ip_address",
    "json_syntax",
    # Equality
    "different",
    "equal",
    "one_of",
]
