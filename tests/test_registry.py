"""Tests for the named validator registry."""

from datetime import date

import pytest

from validata.registry import ValidatorRegistry, register_builtin_validators
from validata.validators import CharacterSet, character_set


@pytest.fixture(autouse=True)
def setup_registry():
    """Register builtin validators before each test."""
    ValidatorRegistry.clear()
    register_builtin_validators()
    yield
    ValidatorRegistry.clear()


class TestRegistration:
    def test_builtins_listed_sorted(self):
        names = ValidatorRegistry.list_registered()
        assert names == sorted(names)
        for name in ("nil", "count", "range", "email", "uuid", "phone", "json", "ip", "oneOf"):
            assert name in names

    def test_register_is_idempotent(self):
        first = ValidatorRegistry.create("nil")
        ValidatorRegistry.register("nil", lambda params: character_set(CharacterSet.DIGITS))
        assert ValidatorRegistry.create("nil").readable == first.readable

    def test_custom_validator(self):
        ValidatorRegistry.register("digits", lambda params: character_set(CharacterSet.DIGITS, "digits"))
        validator = ValidatorRegistry.create("digits")
        assert validator.passes("123")
        assert not validator.passes("12a")

    def test_clear(self):
        ValidatorRegistry.clear()
        assert not ValidatorRegistry.is_registered("nil")
        assert ValidatorRegistry.list_registered() == []


class TestCreate:
    def test_unknown_name(self):
        with pytest.raises(ValueError, match="not registered"):
            ValidatorRegistry.create("bogus")

    def test_no_params_validator(self):
        assert ValidatorRegistry.create("email").passes("tanner@vapor.codes")

    def test_unexpected_params(self):
        with pytest.raises(ValueError, match="Invalid params for validator 'email'"):
            ValidatorRegistry.create("email", {"strict": True})

    def test_count_bounds(self):
        validator = ValidatorRegistry.create("count", {"min": 5, "max": 10})
        assert validator.readable == "between 5 and 10 characters"

    def test_range_lower_only(self):
        validator = ValidatorRegistry.create("range", {"min": 18})
        assert validator.readable == "at least 18"
        assert validator.passes(23)

    def test_bounds_reject_unknown_params(self):
        with pytest.raises(ValueError, match="Invalid params"):
            ValidatorRegistry.create("count", {"minimum": 5})

    def test_params_are_not_mutated(self):
        params = {"min": 5}
        ValidatorRegistry.create("count", params)
        assert params == {"min": 5}

    def test_alphanumeric_with_whitespace(self):
        validator = ValidatorRegistry.create("alphanumeric", {"whitespaces": True})
        assert validator.passes("Tan ner")

    def test_characters(self):
        validator = ValidatorRegistry.create("characters", {"allowed": "abc"})
        assert validator.passes("cab")
        assert not validator.passes("cabd")

    def test_characters_requires_allowed(self):
        with pytest.raises(ValueError, match="Invalid params"):
            ValidatorRegistry.create("characters", {})

    def test_uuid_version(self):
        validator = ValidatorRegistry.create("uuid", {"version": 4})
        assert validator.readable == "a valid UUIDv4"

    def test_phone_format(self):
        validator = ValidatorRegistry.create("phone", {"format": "dash_only", "countryCode": True})
        assert validator.passes("1 239-777-7777")

    def test_phone_unknown_format(self):
        with pytest.raises(ValueError, match="Invalid params"):
            ValidatorRegistry.create("phone", {"format": "dotted"})

    def test_phone_custom_regex(self):
        validator = ValidatorRegistry.create("phone", {"regex": r"0[2-478][0-9]{8}"})
        assert validator.passes("0298765432")

    def test_ip_version(self):
        validator = ValidatorRegistry.create("ip", {"version": 6})
        assert validator.passes("::")
        assert not validator.passes("0.0.0.0")

    def test_one_of(self):
        validator = ValidatorRegistry.create("oneOf", {"options": ["draft", "published"]})
        assert validator.passes("draft")

    def test_strong_password_length(self):
        validator = ValidatorRegistry.create("strongPassword", {"minLength": 12})
        assert not validator.passes("Passw0rd!")

    def test_phone_invalid_regex(self):
        with pytest.raises(ValueError, match="invalid phone regex"):
            ValidatorRegistry.create("phone", {"regex": "("})

    def test_uuid_unknown_version(self):
        with pytest.raises(ValueError, match="Invalid params for validator 'uuid'"):
            ValidatorRegistry.create("uuid", {"version": 9})


class TestParamTypes:
    @pytest.mark.parametrize(
        "name, params",
        [
            ("strongPassword", {"minLength": "six"}),
            ("strongPassword", {"minLength": True}),
            ("count", {"min": "5"}),
            ("range", {"max": [1]}),
            ("alphanumeric", {"whitespaces": "yes"}),
            ("characters", {"allowed": 5}),
            ("date", {"format": 20}),
            ("phone", {"countryCode": "1"}),
            ("phone", {"regex": 5}),
            ("oneOf", {"options": "draft"}),
            ("uuid", {"version": 4.0}),
        ],
    )
    def test_wrong_type_rejected(self, name, params):
        with pytest.raises(ValueError, match=f"Invalid params for validator '{name}'"):
            ValidatorRegistry.create(name, params)

    def test_message_names_the_param(self):
        with pytest.raises(ValueError, match="'minLength' must be int, got str"):
            ValidatorRegistry.create("strongPassword", {"minLength": "six"})

    def test_float_and_date_bounds_accepted(self):
        assert ValidatorRegistry.create("range", {"min": 0.5}).passes(1)
        assert ValidatorRegistry.create("range", {"max": date(2020, 1, 1)}).passes(date(2019, 1, 1))

    def test_unknown_param_rejected(self):
        with pytest.raises(ValueError, match="unexpected params minlength"):
            ValidatorRegistry.create("strongPassword", {"minlength": 8})
