"""Character-set validators.

    character_set(CharacterSet.ALPHANUMERICS + CharacterSet.WHITESPACES)
    alphanumeric()
    ascii()
"""

from __future__ import annotations

import string
from dataclasses import dataclass

from validata.config import get_config
from validata.data import Kind, ValidationData
from validata.errors import BasicValidationError, ValidationError
from validata.validator import Validator, data_validator

_NEWLINES = "\n\r\x0b\x0c\x85\u2028\u2029"
_WHITESPACES = " \t"

# (label, representative members) used to describe a set
_TRAITS: list[tuple[str, str]] = [
    ("newlines", _NEWLINES),
    ("whitespace", _WHITESPACES),
    ("A-Z", string.ascii_uppercase),
    ("a-z", string.ascii_lowercase),
    ("0-9", string.digits),
]


@dataclass(frozen=True)
class CharacterSet:
    """A set of allowed characters: explicit members plus code point ranges.

    Sets union with ``+``.
    """

    members: frozenset[str] = frozenset()
    ranges: tuple[tuple[int, int], ...] = ()

    @classmethod
    def of(cls, characters: str) -> CharacterSet:
        return cls(members=frozenset(characters))

    @classmethod
    def between(cls, first: str, last: str) -> CharacterSet:
        """Inclusive code point range."""
        return cls(ranges=((ord(first), ord(last)),))

    def __contains__(self, character: str) -> bool:
        if character in self.members:
            return True
        point = ord(character)
        return any(low <= point <= high for low, high in self.ranges)

    def __add__(self, other: CharacterSet) -> CharacterSet:
        return self.union(other)

    def union(self, other: CharacterSet) -> CharacterSet:
        return CharacterSet(
            members=self.members | other.members,
            ranges=self.ranges + other.ranges,
        )

    def first_invalid(self, text: str) -> str | None:
        """The first character of ``text`` not in this set, in source order."""
        for character in text:
            if character not in self:
                return character
        return None

    @property
    def traits(self) -> list[str]:
        """Labels for the well-known groups this set fully contains."""
        return [
            label
            for label, sample in _TRAITS
            if all(character in self for character in sample)
        ]


CharacterSet.ASCII = CharacterSet.between("\x00", "\x7f")
CharacterSet.LETTERS = CharacterSet.between("A", "Z") + CharacterSet.between("a", "z")
CharacterSet.DIGITS = CharacterSet.between("0", "9")
CharacterSet.ALPHANUMERICS = CharacterSet.LETTERS + CharacterSet.DIGITS
CharacterSet.WHITESPACES = CharacterSet.of(_WHITESPACES)
CharacterSet.NEWLINES = CharacterSet.of(_NEWLINES)


def _describe(characters: CharacterSet) -> str:
    traits = characters.traits
    if traits:
        return "in " + ", ".join(traits)
    return "in required character set"


def character_set(
    characters: CharacterSet,
    readable: str | None = None,
) -> Validator[ValidationData]:
    """Validate that every character of a string belongs to ``characters``.

    Fails on the first disallowed character, in source order.
    """
    readable = readable or _describe(characters)

    def check(data: ValidationData) -> ValidationError | None:
        if data.kind is not Kind.STRING:
            return BasicValidationError("is not a string")
        invalid = characters.first_invalid(data.value)
        if invalid is None:
            return None
        shown = get_config().shorten(invalid)
        return BasicValidationError(
            f"is not {readable} (invalid character: {shown!r})"
        )

    return data_validator(readable, check)


def ascii() -> Validator[ValidationData]:
    """Validate that all characters are ASCII (code points 0-127)."""
    return character_set(CharacterSet.ASCII, "ASCII")


def alphanumeric(whitespaces: bool = False, newlines: bool = False) -> Validator[ValidationData]:
    """Validate that all characters are a-z, A-Z or 0-9, optionally with whitespace."""
    characters = CharacterSet.ALPHANUMERICS
    if whitespaces:
        characters = characters + CharacterSet.WHITESPACES
    if newlines:
        characters = characters + CharacterSet.NEWLINES
    return character_set(characters, "alphanumeric")
