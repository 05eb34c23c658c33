"""validata: composable validation over a uniform tagged data model.

This package provides:
- ValidationData: the tagged union every validator inspects
- Validator: a named predicate that reports a structured error
- Combinators: and_, or_, not_ (also ``&``, ``|``, ``~``)
- Validations: per-model field bindings, run as one aggregate
- Rules: YAML documents that declare validations by name

Usage:
    from validata import Validations, and_, validate
    from validata.validators import alphanumeric, count, range_

    validations = Validations(User)
    validations.add("name", and_(count(5), alphanumeric()))
    validations.add("age", range_(18))
    validations.validate(user)
"""

from validata.combinators import all_of, and_, any_of, not_, or_
from validata.config import ValidataConfig, get_config, set_config
from validata.data import (
    Kind,
    ValidationData,
    ValidationDataRepresentable,
    make_validation_data,
)
from validata.errors import (
    BasicValidationError,
    CompositeValidationError,
    ConversionError,
    FieldAccessError,
    ValidationError,
)
from validata.registry import ValidatorRegistry, register_builtin_validators
from validata.validatable import (
    Validatable,
    ValidationsRegistry,
    register_validations,
    validate,
)
from validata.validations import (
    Binding,
    ValidationKey,
    Validations,
    get_validation_data,
    key,
)
from validata.validator import (
    ValidationResult,
    Validator,
    data_validator,
    string_validator,
)

__all__ = [
    # Data
    "Kind",
    "ValidationData",
    "ValidationDataRepresentable",
    "make_validation_data",
    # Errors
    "BasicValidationError",
    "CompositeValidationError",
    "ConversionError",
    "FieldAccessError",
    "ValidationError",
    # Validators
    "ValidationResult",
    "Validator",
    "data_validator",
    "string_validator",
    # Combinators
    "all_of",
    "and_",
    "any_of",
    "not_",
    "or_",
    # Validations
    "Binding",
    "ValidationKey",
    "Validations",
    "get_validation_data",
    "key",
    # Models
    "Validatable",
    "ValidationsRegistry",
    "register_validations",
    "validate",
    # Registry
    "ValidatorRegistry",
    "register_builtin_validators",
    # Config
    "ValidataConfig",
    "get_config",
    "set_config",
]
