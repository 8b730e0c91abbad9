"""Tests for step values and their coercion."""

import pytest

from cascada.core.values import (
    NONE,
    BoolValue,
    FailureValue,
    NoValue,
    NumberValue,
    ResultValue,
    TextValue,
    coerce,
    parse_step_value,
    text_of,
)


class TestCoerce:
    """Tests for wrapping plain Python values."""

    def test_none_becomes_no_value(self):
        assert coerce(None) == NONE

    def test_string_becomes_text_value(self):
        assert coerce("Lima") == TextValue(text="Lima")

    def test_bool_is_not_mistaken_for_number(self):
        """
        GIVEN True (an int subclass)
        WHEN coerced
        THEN a BoolValue is produced, not a NumberValue
        """
        assert coerce(True) == BoolValue(value=True)

    def test_numbers_become_number_value(self):
        assert coerce(3) == NumberValue(value=3)
        assert coerce(2.5) == NumberValue(value=2.5)

    def test_step_values_pass_through(self):
        failure = FailureValue(error="too_many_retries")
        assert coerce(failure) is failure

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            coerce(object())


class TestParseStepValue:
    """Tests for restoring dumped values."""

    @pytest.mark.parametrize(
        "value",
        [
            NoValue(),
            TextValue(text="hola"),
            ResultValue(type="booking_details", payload={"destination": "Lima"}),
            FailureValue(error="too_many_retries", dialog_id="booking"),
        ],
    )
    def test_dumped_value_restores_same_member(self, value):
        restored = parse_step_value(value.model_dump(mode="json"))

        assert type(restored) is type(value)
        assert restored == value

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValueError):
            parse_step_value({"kind": "mystery"})


def test_text_of_only_reads_text_values():
    assert text_of(TextValue(text="x")) == "x"
    assert text_of(NONE) is None
    assert text_of(BoolValue(value=True)) is None
