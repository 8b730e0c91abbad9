"""Configuration module for Cascada."""

from cascada.config.loader import ConfigLoader
from cascada.config.models import (
    BotConfig,
    CancellationConfig,
    CascadaConfig,
    ClassifierConfig,
    EngineConfig,
    PersistenceConfig,
    SettingsConfig,
)

__all__ = [
    "BotConfig",
    "CancellationConfig",
    "CascadaConfig",
    "ClassifierConfig",
    "ConfigLoader",
    "EngineConfig",
    "PersistenceConfig",
    "SettingsConfig",
]
