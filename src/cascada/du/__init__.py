"""Dialogue understanding: intent classification."""

from cascada.du.classifier import DSPyIntentClassifier
from cascada.du.models import IntentPrediction, IntentResult

__all__ = ["DSPyIntentClassifier", "IntentPrediction", "IntentResult"]
