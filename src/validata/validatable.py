"""Model-level entry point: look up a model's validations and run them.

Two ways to give a type its validations:

    class User(Validatable):
        @classmethod
        def validations(cls):
            return Validations(cls).add("name", count(5)).add("age", range_(18))

    register_validations(Order, build_order_validations)

Either way ``validate(model)`` runs them and raises the aggregate error.
"""

from __future__ import annotations

from typing import Any, Callable

from validata.validations import Validations


class ValidationsRegistry:
    """Validations per model type, built lazily and cached.

    Factories registered here win over a ``Validatable.validations()``
    classmethod.
    """

    _factories: dict[type, Callable[[], Validations]] = {}
    _built: dict[type, Validations] = {}

    @classmethod
    def register(cls, model_type: type, factory: Callable[[], Validations]) -> None:
        """Register (or replace) the factory for ``model_type``."""
        cls._factories[model_type] = factory
        cls._built.pop(model_type, None)

    @classmethod
    def get(cls, model_type: type) -> Validations:
        """Return the validations for ``model_type``, building them on first use.

        Raises:
            LookupError: If the type has no registered factory and is not
                ``Validatable``.
        """
        if model_type in cls._built:
            return cls._built[model_type]

        if model_type in cls._factories:
            validations = cls._factories[model_type]()
        elif issubclass(model_type, Validatable):
            validations = model_type.validations()
        else:
            raise LookupError(
                f"No validations registered for '{model_type.__name__}'. "
                "Register them with register_validations() or subclass Validatable."
            )

        cls._built[model_type] = validations
        return validations

    @classmethod
    def is_registered(cls, model_type: type) -> bool:
        return model_type in cls._factories

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._factories.clear()
        cls._built.clear()


class Validatable:
    """Mixin for models that declare their own validations."""

    @classmethod
    def validations(cls) -> Validations:
        raise NotImplementedError("Subclasses must implement validations()")

    def validate(self) -> None:
        validate(self)


def register_validations(model_type: type, factory: Callable[[], Validations]) -> None:
    ValidationsRegistry.register(model_type, factory)


def validate(model: Any) -> None:
    """Validate ``model`` against its type's validations.

    Raises:
        CompositeValidationError: If any field fails; its reason lists them all.
        ConversionError, FieldAccessError: If a field cannot be read or converted.
        LookupError: If the model's type has no validations.
    """
    ValidationsRegistry.get(type(model)).validate(model)
