"""Error types for the validata engine.

Two families live here:

- ``ValidationError`` and its subclasses describe invalid data. The engine
  passes them around as values and only raises them at a boundary the
  caller controls.
- ``ConversionError`` and ``FieldAccessError`` describe a misconfigured
  validation (a field that cannot be read or converted). They are never
  aggregated; they abort the run.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Sequence
from typing import Any


class ValidationError(Exception):
    """Base class for errors that carry a field path and a readable reason.

    Attributes:
        path: Segments leading to the invalid value, e.g. ``["user", "pet", "name"]``.
    """

    identifier = "validationFailed"

    def __init__(self) -> None:
        super().__init__()
        self.path: list[str] = []

    @property
    def reason(self) -> str:
        raise NotImplementedError("Subclasses must implement reason")

    def with_path_prefix(self, segments: Sequence[str]) -> ValidationError:
        """Return a copy whose path is ``segments`` followed by this error's path."""
        prefixed = copy.copy(self)
        prefixed.path = list(segments) + list(self.path)
        return prefixed

    def flatten(self) -> Iterator[ValidationError]:
        """Yield the leaf errors below this one with fully composed paths."""
        yield self

    def __copy__(self) -> ValidationError:
        clone = type(self).__new__(type(self))
        clone.__dict__.update(self.__dict__)
        return clone

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": ".".join(self.path),
            "reason": self.reason,
        }

    def __str__(self) -> str:
        return self.reason

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reason!r})"


class BasicValidationError(ValidationError):
    """A single failure message, rendered after the path.

        >>> error = BasicValidationError("is not null")
        >>> error.reason
        'data is not null'
        >>> error.with_path_prefix(["pet", "name"]).reason
        '`pet.name` is not null'
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self.message = message

    @property
    def reason(self) -> str:
        if self.path:
            location = "`" + ".".join(self.path) + "`"
        else:
            location = "data"
        return f"{location} {self.message}"

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["message"] = self.message
        return result


class CompositeValidationError(ValidationError):
    """Aggregates child errors under one path.

    The composite's own path is prepended to each child's path exactly once,
    at render time. Combinators join children with ``" and "``; the
    per-model aggregate joins them with ``", "``.
    """

    def __init__(
        self,
        errors: Sequence[ValidationError],
        separator: str = " and ",
    ) -> None:
        super().__init__()
        self.errors: list[ValidationError] = list(errors)
        self.separator = separator

    def children(self) -> list[ValidationError]:
        """The child errors with this composite's path applied."""
        return [error.with_path_prefix(self.path) for error in self.errors]

    @property
    def reason(self) -> str:
        return self.separator.join(child.reason for child in self.children())

    def flatten(self) -> Iterator[ValidationError]:
        for child in self.children():
            yield from child.flatten()

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = [child.to_dict() for child in self.children()]
        return result


class ConversionError(Exception):
    """A value (or a contained element) has no validation data representation."""


class FieldAccessError(Exception):
    """A field could not be read from the model being validated."""

    def __init__(self, path: Sequence[str], message: str) -> None:
        self.path = list(path)
        super().__init__(f"`{'.'.join(self.path)}`: {message}")
