"""Tests for prompt recognizers."""

from datetime import date

import pytest

from cascada.core.constants import PromptType
from cascada.core.types import PromptSpec
from cascada.core.values import BoolValue, NumberValue, TextValue
from cascada.dm.prompts import recognize

REFERENCE = date(2024, 4, 1)


def spec(prompt_type: PromptType, **kwargs) -> PromptSpec:
    return PromptSpec(prompt_type=prompt_type, message="?", **kwargs)


class TestConfirm:
    @pytest.mark.parametrize("reply", ["yes", "Yes!", "sí", "claro", " ok "])
    def test_affirmative(self, reply):
        assert recognize(spec(PromptType.confirm), reply) == BoolValue(value=True)

    @pytest.mark.parametrize("reply", ["no", "No.", "nope"])
    def test_negative(self, reply):
        assert recognize(spec(PromptType.confirm), reply) == BoolValue(value=False)

    def test_other_text_is_unrecognized(self):
        assert recognize(spec(PromptType.confirm), "maybe later") is None


class TestNumber:
    def test_decimal_comma(self):
        assert recognize(spec(PromptType.number), "12,5") == NumberValue(value=12.5)

    def test_words_are_unrecognized(self):
        assert recognize(spec(PromptType.number), "twelve") is None

    def test_thousands_separator_is_not_a_decimal(self):
        assert recognize(spec(PromptType.number), "1,000") is None
        assert recognize(spec(PromptType.number), "3,75") == NumberValue(value=3.75)


class TestDate:
    def test_relative_word_uses_reference(self):
        value = recognize(spec(PromptType.date), "tomorrow", REFERENCE)

        assert value == TextValue(text="2024-04-02")

    def test_garbage_is_unrecognized(self):
        assert recognize(spec(PromptType.date), "someday", REFERENCE) is None


class TestChoice:
    def test_match_is_case_insensitive_and_returns_canonical_choice(self):
        choice_spec = spec(PromptType.choice, choices=["Cash", "Card"])

        assert recognize(choice_spec, "card") == TextValue(text="Card")
        assert recognize(choice_spec, "bitcoin") is None


class TestText:
    def test_text_is_stripped(self):
        assert recognize(spec(PromptType.text), "  Lima ") == TextValue(text="Lima")

    def test_blank_text_is_unrecognized(self):
        assert recognize(spec(PromptType.text), "   ") is None


def test_missing_text_is_never_recognized():
    assert recognize(spec(PromptType.text), None) is None
