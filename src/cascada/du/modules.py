"""Intent classification module using DSPy."""

import logging

import dspy

from cascada.du.base import OptimizableDSPyModule, safe_extract_result
from cascada.du.models import IntentPrediction
from cascada.du.signatures import ClassifyIntent

logger = logging.getLogger(__name__)


def _unknown() -> IntentPrediction:
    return IntentPrediction(intent="None", confidence=0.0)


class IntentModule(OptimizableDSPyModule):
    """Predicts one intent label for a message.

    Features:
    - Native async with .acall()
    - Optional ChainOfThought reasoning
    - Pydantic output validation
    """

    optimized_files = [
        "intent_classifier_miprov2.json",
        "intent_classifier.json",
    ]

    def _create_predictor(self, use_cot: bool) -> dspy.Module:
        if use_cot:
            return dspy.ChainOfThought(ClassifyIntent)
        return dspy.Predict(ClassifyIntent)

    async def aforward(self, text: str, intents: list[str]) -> IntentPrediction:
        """Classify ``text`` (async)."""
        result = await self.predictor.acall(text=text, intents=intents)
        return safe_extract_result(
            result.result, IntentPrediction, default_factory=_unknown, context="Intent"
        )

    def forward(self, text: str, intents: list[str]) -> IntentPrediction:
        """Sync version (for testing/optimization)."""
        result = self.predictor(text=text, intents=intents)
        return safe_extract_result(
            result.result, IntentPrediction, default_factory=_unknown, context="Intent"
        )
