"""Validator registry for validata.

Maps validator names used in rule documents (``count``, ``email``, ...) to
factories that build a ``Validator`` from a params mapping.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Callable

from validata import validators as v
from validata.data import ValidationData
from validata.validator import Validator

logger = logging.getLogger(__name__)

Params = dict[str, Any]
Factory = Callable[[Params], Validator[ValidationData]]


class ValidatorRegistry:
    """Registry for named validator factories.

    Factories must be explicitly registered before rule documents can use
    them. ``register_builtin_validators()`` registers everything validata
    ships with; applications add their own at startup.

    Example:
        ValidatorRegistry.register("slug", lambda params: character_set(SLUG))
        validator = ValidatorRegistry.create("slug", {})
    """

    _factories: dict[str, Factory] = {}

    @classmethod
    def register(cls, name: str, factory: Factory) -> None:
        """Register a factory by name.

        Idempotent - re-registering the same name is a no-op.
        """
        if name in cls._factories:
            return
        cls._factories[name] = factory

    @classmethod
    def create(cls, name: str, params: Params | None = None) -> Validator[ValidationData]:
        """Build a validator from its registered name and params.

        Raises:
            ValueError: If the name is not registered or the params are invalid.
        """
        if name not in cls._factories:
            raise ValueError(
                f"Validator '{name}' is not registered. "
                "Available validators: " + ", ".join(cls.list_registered())
            )
        try:
            return cls._factories[name](dict(params or {}))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid params for validator '{name}': {exc}") from exc

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._factories

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._factories)

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._factories.clear()


# =============================================================================
# Builtin factories
# =============================================================================


def _param(params: Params, name: str, types: tuple[type, ...], default: Any = None) -> Any:
    """Read one param, rejecting values of the wrong type."""
    value = params.get(name)
    if value is None:
        return default
    # bool is an int subclass; only accept it where asked for
    if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
        expected = " or ".join(t.__name__ for t in types)
        raise TypeError(f"'{name}' must be {expected}, got {type(value).__name__}")
    return value


def _required(params: Params, name: str, types: tuple[type, ...] = (object,)) -> Any:
    if name not in params:
        raise KeyError(name)
    return _param(params, name, types)


def _only(params: Params, *names: str) -> None:
    unknown = sorted(set(params) - set(names))
    if unknown:
        raise TypeError(f"unexpected params {', '.join(unknown)}")


def _no_params(build: Callable[[], Validator[ValidationData]]) -> Factory:
    def factory(params: Params) -> Validator[ValidationData]:
        if params:
            raise TypeError(f"takes no params, got {', '.join(sorted(params))}")
        return build()

    return factory


_BOUND_TYPES = (int, float, date)


def _bounds_factory(build: Callable[..., Validator[ValidationData]]) -> Factory:
    def factory(params: Params) -> Validator[ValidationData]:
        _only(params, "min", "max")
        return build(
            min=_param(params, "min", _BOUND_TYPES),
            max=_param(params, "max", _BOUND_TYPES),
        )

    return factory


def _alphanumeric_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "whitespaces", "newlines")
    return v.alphanumeric(
        whitespaces=_param(params, "whitespaces", (bool,), False),
        newlines=_param(params, "newlines", (bool,), False),
    )


def _characters_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "allowed")
    return v.character_set(v.CharacterSet.of(_required(params, "allowed", (str,))))


def _phone_factory(params: Params) -> Validator[ValidationData]:
    if "regex" in params:
        _only(params, "regex")
        pattern = _required(params, "regex", (str,))
        try:
            re.compile(pattern)
        except re.error as exc:
            raise ValueError(f"invalid phone regex {pattern!r}: {exc}") from exc
        return v.phone(v.PhoneType.custom(lambda: pattern))
    _only(params, "format", "countryCode")
    name = _param(params, "format", (str,), "plain")
    if name.upper() not in v.PhoneFormat.__members__:
        raise ValueError(f"unknown phone format {name!r}")
    phone_format = v.PhoneFormat[name.upper()]
    if _param(params, "countryCode", (bool,), False):
        return v.phone(v.PhoneType.country_code(phone_format))
    return v.phone(v.PhoneType.simple(phone_format))


def _uuid_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "version")
    version = str(_param(params, "version", (int, str), "any"))
    if version == "any":
        return v.uuid(v.UUIDVersion.ANY)
    return v.uuid(v.UUIDVersion(version))


def _ip_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "version")
    version = str(_param(params, "version", (int, str), "any"))
    return v.ip_address({"4": v.IPVersion.V4, "6": v.IPVersion.V6}.get(version, v.IPVersion.ANY))


def _password_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "minLength")
    return v.strong_password(_param(params, "minLength", (int,), 6))


def _date_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "format")
    return v.date_string(_param(params, "format", (str,), "%Y-%m-%d"))


def _one_of_factory(params: Params) -> Validator[ValidationData]:
    _only(params, "options")
    return v.one_of(_required(params, "options", (list,)))


def register_builtin_validators() -> None:
    """Register every leaf validator shipped with validata.

    Should be called once at application startup (the CLI and the rules
    loader call it for you).
    """
    builtins: dict[str, Factory] = {
        "nil": _no_params(v.nil),
        "empty": _no_params(v.empty),
        "required": _no_params(v.required),
        "count": _bounds_factory(v.count),
        "range": _bounds_factory(v.range_),
        "ascii": _no_params(v.ascii),
        "alphanumeric": _alphanumeric_factory,
        "characters": _characters_factory,
        "email": _no_params(v.email),
        "hexadecimal": _no_params(v.hexadecimal),
        "md5": _no_params(v.md5),
        "mongoId": _no_params(v.mongo_id),
        "macAddress": _no_params(v.mac_address),
        "uuid": _uuid_factory,
        "base64": _no_params(v.base64),
        "printableAscii": _no_params(v.printable_ascii),
        "url": _no_params(v.url),
        "strongPassword": _password_factory,
        "numeric": _no_params(v.numeric),
        "phone": _phone_factory,
        "json": _no_params(v.json_syntax),
        "date": _date_factory,
        "ip": _ip_factory,
        "equal": lambda p: v.equal(_required(p, "value")),
        "different": lambda p: v.different(_required(p, "value")),
        "oneOf": _one_of_factory,
    }
    for name, factory in builtins.items():
        ValidatorRegistry.register(name, factory)
    logger.debug("Registered %d builtin validators", len(builtins))
