"""DSPy-backed intent classifier."""

import logging
from pathlib import Path

from cascada.config.models import ClassifierConfig
from cascada.core.constants import NONE_INTENT
from cascada.core.errors import ClassifierError
from cascada.du.models import IntentResult
from cascada.du.modules import IntentModule

logger = logging.getLogger(__name__)


class DSPyIntentClassifier:
    """Maps free text to one of the configured intents.

    An unconfigured classifier never calls the language model; callers are
    expected to check ``is_configured`` and take their fallback path.
    """

    def __init__(
        self,
        config: ClassifierConfig,
        module: IntentModule | None = None,
    ) -> None:
        self.config = config
        self._module = module

    @classmethod
    def from_config(cls, config: ClassifierConfig) -> "DSPyIntentClassifier":
        """Build a classifier, loading an optimized program when configured."""
        module = None
        if config.is_configured:
            optimized_dir = Path(config.optimized_dir) if config.optimized_dir else None
            module = IntentModule.create_with_best_model(
                use_cot=config.use_reasoning, optimized_dir=optimized_dir
            )
        return cls(config, module)

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured and self._module is not None

    async def classify(self, text: str) -> IntentResult:
        """Classify ``text``.

        Predictions outside the configured intents, or below
        ``min_confidence``, are reported as the ``None`` intent.

        Raises:
            ClassifierError: If the classifier is unconfigured or the provider fails.
        """
        if self._module is None or not self.config.is_configured:
            raise ClassifierError("Intent classifier is not configured")

        try:
            prediction = await self._module.acall(text=text, intents=self.config.intents)
        except Exception as e:
            logger.error(f"Intent classification failed: {e}", exc_info=True)
            raise ClassifierError(f"Intent classification failed: {e}") from e

        intent = prediction.intent
        if intent not in self.config.intents or prediction.confidence < self.config.min_confidence:
            logger.debug(
                f"Intent '{intent}' ({prediction.confidence:.2f}) not accepted, using None"
            )
            intent = NONE_INTENT

        return IntentResult(
            top_intent=intent,
            confidence=prediction.confidence,
            entities=prediction.entities,
        )
