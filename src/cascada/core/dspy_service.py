"""DSPy Configuration Service.

Handles bootstrapping DSPy with the language model settings from CascadaConfig.
"""

import logging

import dspy

from cascada.config import CascadaConfig

logger = logging.getLogger(__name__)


class DSPyBootstrapper:
    """Bootstrapper for DSPy configuration."""

    def __init__(self, config: CascadaConfig):
        self.config = config

    @staticmethod
    def bootstrap(config: CascadaConfig) -> dspy.LM | None:
        """Static helper to bootstrap DSPy from config."""
        return DSPyBootstrapper(config).configure()

    def configure(self) -> dspy.LM | None:
        """Configure DSPy with the classifier's model.

        Returns None without touching DSPy when the classifier is disabled.
        """
        classifier = self.config.settings.classifier
        if not classifier.is_configured:
            logger.info("Intent classifier not configured; skipping DSPy setup")
            return None

        lm = dspy.LM(f"{classifier.provider}/{classifier.model}", temperature=classifier.temperature)
        dspy.configure(lm=lm)
        logger.info(f"DSPy configured with {classifier.provider}/{classifier.model}")
        return lm
