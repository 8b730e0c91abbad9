"""DSPy signatures for intent classification."""

import dspy

from cascada.du.models import IntentPrediction


class ClassifyIntent(dspy.Signature):
    """Classify a customer's message to a restaurant ordering assistant.

    Pick exactly one label from `intents`. If none of them fits the message,
    answer 'None'. Report how confident you are between 0.0 and 1.0 and list
    any entities the message mentions (addresses, dishes, payment methods).
    """

    text: str = dspy.InputField(desc="The customer's message")
    intents: list[str] = dspy.InputField(desc="Allowed intent labels")

    result: IntentPrediction = dspy.OutputField(desc="Chosen intent, confidence and entities")
