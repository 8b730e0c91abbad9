"""Step values passed between waterfall steps.

Every value a step receives or produces is one member of a discriminated
union keyed on ``kind``, so steps branch with an exhaustive ``match``
instead of probing types at runtime. Values are persisted with the frame
that holds them and must stay JSON-serializable.
"""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter


class NoValue(BaseModel):
    """Absence of a value (the ``null`` seed)."""

    kind: Literal["none"] = "none"


class TextValue(BaseModel):
    """Raw or recognized text."""

    kind: Literal["text"] = "text"
    text: str


class BoolValue(BaseModel):
    """Yes/no answer."""

    kind: Literal["bool"] = "bool"
    value: bool


class NumberValue(BaseModel):
    """Numeric answer."""

    kind: Literal["number"] = "number"
    value: float


class ResultValue(BaseModel):
    """Structured payload returned by a dialog, tagged with its type name."""

    kind: Literal["result"] = "result"
    type: str = Field(description="Payload type tag, e.g. 'booking_details'")
    payload: dict[str, Any] = Field(default_factory=dict)


class FailureValue(BaseModel):
    """Failure marker delivered to a parent instead of a value."""

    kind: Literal["failure"] = "failure"
    error: str = Field(description="Machine-readable failure label")
    dialog_id: str | None = Field(default=None, description="Dialog that failed")
    message: str | None = None


StepValue = Annotated[
    NoValue | TextValue | BoolValue | NumberValue | ResultValue | FailureValue,
    Field(discriminator="kind"),
]

_step_value_adapter: TypeAdapter[StepValue] = TypeAdapter(StepValue)

NONE = NoValue()

_VALUE_TYPES = (NoValue, TextValue, BoolValue, NumberValue, ResultValue, FailureValue)


def parse_step_value(data: Any) -> StepValue:
    """Validate a dumped step value back into its union member."""
    return _step_value_adapter.validate_python(data)


def coerce(value: Any) -> StepValue:
    """Wrap plain Python values so steps may pass ``None`` or ``str`` directly."""
    if value is None:
        return NONE
    if isinstance(value, _VALUE_TYPES):
        return value
    if isinstance(value, str):
        return TextValue(text=value)
    if isinstance(value, bool):
        return BoolValue(value=value)
    if isinstance(value, int | float):
        return NumberValue(value=value)
    raise TypeError(f"Cannot use {type(value).__name__} as a step value")


def text_of(value: StepValue) -> str | None:
    """Return the text carried by a value, if any."""
    if isinstance(value, TextValue):
        return value.text
    return None
