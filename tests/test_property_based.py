"""
Property-based tests for user request validation.
Uses Hypothesis to generate test cases and verify properties hold across all inputs.
"""

import copy

import pytest
from hypothesis import given, strategies as st, assume, settings
from hypothesis.strategies import composite

from users_validation import (
    validate_id_param,
    validate_user_update,
    validate_email_format,
    EMPTY_UPDATE_MESSAGE
)


json_scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(),
    st.floats(),
    st.text(max_size=50)
)

json_values = st.recursive(
    json_scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=5),
        st.dictionaries(st.text(max_size=10), children, max_size=5)
    ),
    max_leaves=10
)


@composite
def valid_email(draw):
    """Generate valid email addresses."""
    local_part = draw(st.text(
        alphabet='abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.+-_',
        min_size=1,
        max_size=64
    ))
    label = st.text(
        alphabet='abcdefghijklmnopqrstuvwxyz0123456789',
        min_size=1,
        max_size=20
    )
    labels = draw(st.lists(label, min_size=2, max_size=4))
    return f"{local_part}@{'.'.join(labels)}"


@composite
def valid_name(draw):
    """Generate names whose trimmed length is within bounds."""
    name = draw(st.text(min_size=2, max_size=255))
    assume(2 <= len(name.strip()) <= 255)
    return name


@composite
def valid_update(draw):
    """Generate valid update payloads with at least one field."""
    fields = {
        'name': valid_name(),
        'email': valid_email(),
        'role': st.sampled_from(['user', 'admin'])
    }
    chosen = draw(st.lists(st.sampled_from(sorted(fields)), min_size=1, max_size=3, unique=True))
    return {field: draw(fields[field]) for field in chosen}


class TestIdParamProperties:
    """Property-based tests for ID parameter validation."""

    @given(st.integers(min_value=1, max_value=10 ** 18))
    @settings(max_examples=100)
    def test_positive_digit_strings_are_coerced(self, number):
        """
        Property: Any digit string for an integer > 0 validates to that integer.
        """
        assert validate_id_param({'id': str(number)}).value == {'id': number}

    @given(st.integers(max_value=0))
    @settings(max_examples=100)
    def test_non_positive_values_fail(self, number):
        """
        Property: Zero and negative values always fail on the id field.
        """
        for value in (number, str(number)):
            result = validate_id_param({'id': value})
            assert not result.ok
            assert [e['field'] for e in result.errors] == ['id']

    @given(st.floats(allow_nan=False, allow_infinity=False))
    @settings(max_examples=100)
    def test_fractional_values_fail(self, number):
        """
        Property: Values with a fractional part never validate.
        """
        assume(not number.is_integer())
        assert not validate_id_param({'id': number}).ok
        assert not validate_id_param({'id': repr(number)}).ok

    @given(st.text(max_size=30))
    @settings(max_examples=100)
    def test_arbitrary_text_never_crashes(self, text):
        """
        Property: Any string either validates to a positive int or fails on id.
        """
        result = validate_id_param({'id': text})
        if result.ok:
            assert isinstance(result.value['id'], int)
            assert result.value['id'] > 0
        else:
            assert [e['field'] for e in result.errors] == ['id']


class TestUserUpdateProperties:
    """Property-based tests for user update validation."""

    @given(valid_update())
    @settings(max_examples=100)
    def test_valid_updates_pass(self, payload):
        """
        Property: Valid payloads validate and keep exactly their own fields.
        """
        result = validate_user_update(payload)
        assert result.ok, f"Valid update failed validation: {result.errors}"
        assert set(result.value) == set(payload)

    @given(valid_update())
    @settings(max_examples=100)
    def test_revalidation_is_fixed_point(self, payload):
        """
        Property: Re-validating a normalized output yields the same output.
        """
        first = validate_user_update(payload).value
        assert validate_user_update(first).value == first

    @given(st.dictionaries(st.text(max_size=20), json_values, max_size=8))
    @settings(max_examples=200)
    def test_validation_never_crashes(self, payload):
        """
        Property: Validation never raises and always reports structured errors.
        """
        result = validate_user_update(payload)
        assert result.ok != bool(result.errors)
        for error in result.errors:
            assert set(error) == {'field', 'code', 'message'}

    @given(st.dictionaries(st.text(max_size=20), json_values, max_size=8))
    @settings(max_examples=100)
    def test_validation_never_modifies_input(self, payload):
        """
        Property: Validation never modifies the input payload.
        """
        original = copy.deepcopy(payload)
        validate_user_update(payload)
        assert payload == original

    @given(st.dictionaries(
        st.text(max_size=20).filter(lambda key: key not in ('name', 'email', 'role')),
        json_values,
        max_size=8
    ))
    @settings(max_examples=100)
    def test_unrecognized_keys_alone_fail_cross_field_rule(self, payload):
        """
        Property: Payloads without recognized keys fail only the cross-field rule.
        """
        result = validate_user_update(payload)
        assert result.errors == [
            {'field': 'name', 'code': 'CROSS_FIELD_INVALID', 'message': EMPTY_UPDATE_MESSAGE}
        ]

    @given(st.text(max_size=20))
    @settings(max_examples=100)
    def test_only_literal_roles_pass(self, role):
        """
        Property: A role passes only when it is exactly 'user' or 'admin'.
        """
        result = validate_user_update({'role': role})
        assert result.ok == (role in ('user', 'admin'))

    @given(valid_email())
    @settings(max_examples=100)
    def test_emails_are_lower_cased_and_trimmed(self, email):
        """
        Property: Accepted emails come back trimmed and lower-cased.
        """
        result = validate_user_update({'email': f'  {email.upper()} '})
        assert result.value == {'email': email.lower()}


class TestEmailFormatProperties:
    """Property-based tests for email format validation."""

    @given(st.text(min_size=1, max_size=100))
    @settings(max_examples=100)
    def test_strings_without_at_are_invalid(self, text):
        """
        Property: Strings without @ are never valid emails.
        """
        assume('@' not in text)
        assert not validate_email_format(text)

    @given(st.one_of(st.none(), st.integers(), st.floats(), st.booleans(), st.lists(st.text())))
    @settings(max_examples=50)
    def test_non_string_inputs_are_invalid(self, value):
        """
        Property: Non-string inputs are always invalid.
        """
        assert not validate_email_format(value)


if __name__ == '__main__':
    pytest.main([__file__, '-v', '--hypothesis-show-statistics'])
