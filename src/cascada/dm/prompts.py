"""Prompt recognizers.

Turn the raw text of a reply into the value a prompt expects. Recognition
never raises: an unrecognized reply yields None and the engine re-prompts.
"""

import logging
import re
from collections.abc import Callable
from datetime import date

from cascada.core.constants import PromptType
from cascada.core.types import PromptSpec
from cascada.core.values import BoolValue, NumberValue, StepValue, TextValue
from cascada.utils.timex import recognize_date

logger = logging.getLogger(__name__)

YES_WORDS = frozenset(
    {"yes", "y", "yeah", "yep", "sure", "ok", "okay", "correct", "si", "sí", "claro", "correcto"}
)
NO_WORDS = frozenset({"no", "n", "nope", "nah", "incorrect", "incorrecto"})

_NUMBER_RE = re.compile(r"^[-+]?\d+(?:\.\d+|,\d{1,2})?$")

Recognizer = Callable[[PromptSpec, str, date | None], StepValue | None]


def _normalize(text: str) -> str:
    return text.strip().lower().rstrip(".!?")


def recognize_text(spec: PromptSpec, text: str, reference: date | None) -> StepValue | None:
    stripped = text.strip()
    return TextValue(text=stripped) if stripped else None


def recognize_confirm(spec: PromptSpec, text: str, reference: date | None) -> StepValue | None:
    normalized = _normalize(text)
    if normalized in YES_WORDS:
        return BoolValue(value=True)
    if normalized in NO_WORDS:
        return BoolValue(value=False)
    return None


def recognize_number(spec: PromptSpec, text: str, reference: date | None) -> StepValue | None:
    normalized = _normalize(text)
    if not _NUMBER_RE.match(normalized):
        return None
    return NumberValue(value=float(normalized.replace(",", ".")))


def recognize_date_value(spec: PromptSpec, text: str, reference: date | None) -> StepValue | None:
    timex = recognize_date(text, reference)
    return TextValue(text=timex) if timex else None


def recognize_choice(spec: PromptSpec, text: str, reference: date | None) -> StepValue | None:
    normalized = _normalize(text)
    for choice in spec.choices:
        if choice.lower() == normalized:
            return TextValue(text=choice)
    return None


RECOGNIZERS: dict[PromptType, Recognizer] = {
    PromptType.text: recognize_text,
    PromptType.confirm: recognize_confirm,
    PromptType.number: recognize_number,
    PromptType.date: recognize_date_value,
    PromptType.choice: recognize_choice,
}


def recognize(spec: PromptSpec, text: str | None, reference: date | None = None) -> StepValue | None:
    """Recognize ``text`` against ``spec``.

    Args:
        spec: The pending prompt's spec.
        text: Raw inbound text (None for non-text activity).
        reference: Date relative expressions are resolved against (defaults to today).

    Returns:
        The recognized value, or None if the reply does not match.
    """
    if text is None:
        return None

    value = RECOGNIZERS[spec.prompt_type](spec, text, reference)
    if value is None:
        logger.debug(f"Reply {text!r} not recognized as {spec.prompt_type.value}")
    return value
