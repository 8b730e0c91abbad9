"""Shared fixtures for Cascada tests.

Classifier doubles keep every test deterministic and offline: nothing here
talks to a language model.
"""

import logging
from datetime import datetime

import pytest

from cascada.config.models import BotConfig
from cascada.core.constants import NONE_INTENT
from cascada.core.errors import ClassifierError
from cascada.core.turn import TurnContext
from cascada.core.types import DialogStack
from cascada.dialogs import build_registry
from cascada.dm.engine import WaterfallEngine
from cascada.du.models import IntentResult

FIXED_NOW = datetime(2024, 4, 1, 9, 30)


def fixed_clock() -> datetime:
    return FIXED_NOW


class FakeClassifier:
    """Deterministic stand-in for the DSPy classifier.

    Returns ``intent`` for every message, or raises when ``error`` is set.
    """

    def __init__(
        self,
        configured: bool = True,
        intent: str = NONE_INTENT,
        error: Exception | None = None,
    ):
        self.configured = configured
        self.intent = intent
        self.error = error
        self.calls: list[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def classify(self, text: str) -> IntentResult:
        self.calls.append(text)
        if not self.configured:
            raise ClassifierError("Intent classifier is not configured")
        if self.error is not None:
            raise self.error
        return IntentResult(top_intent=self.intent, confidence=0.9)


@pytest.fixture
def clock():
    return fixed_clock


@pytest.fixture
def unconfigured_classifier() -> FakeClassifier:
    return FakeClassifier(configured=False)


@pytest.fixture
def price_classifier() -> FakeClassifier:
    return FakeClassifier(intent="Precio")


@pytest.fixture
def bot_config() -> BotConfig:
    return BotConfig()


@pytest.fixture
def stack() -> DialogStack:
    return DialogStack()


@pytest.fixture
def make_turn():
    """Factory for turn contexts bound to one test session."""

    def _make(text: str | None = None) -> TurnContext:
        return TurnContext(text, session_id="test-session")

    return _make


@pytest.fixture
def assistant_engine(unconfigured_classifier, bot_config) -> WaterfallEngine:
    """Engine over the real main and booking dialogs, classifier unconfigured."""
    registry = build_registry(unconfigured_classifier, bot_config, clock=fixed_clock)
    return WaterfallEngine(registry, clock=fixed_clock)


@pytest.fixture(autouse=True)
def reset_cascada_logger():
    """Undo setup_logging() so caplog keeps seeing cascada records."""
    root_handlers = list(logging.getLogger().handlers)
    yield
    logging.getLogger().handlers = root_handlers
    cascada_logger = logging.getLogger("cascada")
    for handler in list(cascada_logger.handlers):
        cascada_logger.removeHandler(handler)
        handler.close()
    cascada_logger.propagate = True
    cascada_logger.setLevel(logging.NOTSET)


@pytest.fixture
def fake_classifier():
    """The FakeClassifier class, for tests that need a custom double."""
    return FakeClassifier
