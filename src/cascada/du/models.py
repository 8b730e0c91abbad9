"""
Pydantic models for the intent classifier.

DSPy uses Pydantic for output validation and type coercion.
"""

from pydantic import BaseModel, Field

from cascada.core.constants import NONE_INTENT


class IntentResult(BaseModel):
    """Top intent for a piece of user text."""

    top_intent: str = Field(default=NONE_INTENT, description="Intent label")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Confidence 0.0-1.0")
    entities: dict[str, str] = Field(
        default_factory=dict, description="Entities mentioned in the text (name -> value)"
    )


class IntentPrediction(BaseModel):
    """Raw structured output requested from the language model."""

    intent: str = Field(description="One of the available intents, or 'None'")
    confidence: float = Field(ge=0.0, le=1.0, description="How sure the prediction is")
    entities: dict[str, str] = Field(default_factory=dict)
