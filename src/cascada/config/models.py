"""Configuration models.

Global settings for the engine, classifier, persistence and the bot's
scripted content. Every field has a default so an empty file is valid.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

SUPPORTED_VERSIONS = frozenset({"1.0"})
CURRENT_VERSION = "1.0"

DEFAULT_INTENTS = ["Saludos", "Precio", "TipoPago", "Solicitud", "EnviarDireccion"]

DEFAULT_INTENT_RESPONSES = {
    "Saludos": "Hola Como estas, ¿ deseas algun Pedido?",
    "Precio": "El costo total de su pedido es de 50 soles, ¿ Cual es su metodo de pago?",
    "TipoPago": (
        "Tu pedido ya esta saliendo estaremos en comunicacion con usted, "
        "Muchas Gracias por preferirnos."
    ),
    "Solicitud": "Si anotaremos tu pedido cual es tu direccion!?",
    "EnviarDireccion": (
        "Esta bien estamos procesando tu pedido lo mas rapido que podemos, Desea algo mas? "
    ),
}


class EngineConfig(BaseModel):
    """Waterfall engine limits."""

    max_steps_per_turn: int = Field(
        default=64, ge=1, description="Step invocations allowed per turn before aborting"
    )
    default_max_retries: int = Field(
        default=3, ge=0, description="Invalid answers tolerated by prompts that set no limit"
    )
    max_stack_depth: int = Field(default=16, ge=1, description="Maximum nested dialogs")


class ClassifierConfig(BaseModel):
    """Intent classifier configuration."""

    enabled: bool = Field(default=True, description="Set false to run in degraded mode")
    provider: str = Field(default="openai", description="Model provider (openai, anthropic, etc.)")
    model: str | None = Field(default="gpt-4o-mini", description="Model identifier")
    temperature: float = Field(default=0.0, description="Temperature for generation")
    use_reasoning: bool = Field(default=False, description="Use ChainOfThought for reasoning")
    min_confidence: float = Field(
        default=0.5, ge=0.0, le=1.0, description="Below this the intent becomes 'None'"
    )
    intents: list[str] = Field(default_factory=lambda: list(DEFAULT_INTENTS))
    optimized_dir: str | None = Field(
        default=None, description="Directory holding optimized DSPy programs"
    )

    @property
    def is_configured(self) -> bool:
        return self.enabled and bool(self.model)


class PersistenceConfig(BaseModel):
    """Persistence configuration."""

    backend: Literal["memory", "sqlite", "postgres"] = Field(
        default="memory", description="Session store backend"
    )
    path: str = Field(default="cascada.db", description="SQLite path or Postgres connection string")


class CancellationConfig(BaseModel):
    """Configuration for user-initiated cancellation."""

    enabled: bool = True
    keywords: list[str] = Field(default_factory=lambda: ["cancel", "quit", "cancelar", "salir"])
    response_message: str = Field(
        default="Okay, I've cancelled that.", description="Response after cancellation"
    )

    @field_validator("keywords")
    @classmethod
    def _lowercase(cls, value: list[str]) -> list[str]:
        return [keyword.strip().lower() for keyword in value]


class BotConfig(BaseModel):
    """Scripted content of the main dialog."""

    greeting: str = "Hola somos la polleria Pontifice? estamos a tu servicio."
    reprompt: str = "esperando respuesta."
    unconfigured_notice: str = (
        "NOTE: the intent classifier is not configured. To enable all capabilities, "
        "set 'settings.classifier.model' and the provider API key."
    )
    intent_responses: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_INTENT_RESPONSES)
    )
    fallback_template: str = "Disculpanos no podemos entender lo que intentas decir {intent})"
    failure_message: str = Field(
        default="Lo sentimos, no pudimos completar tu solicitud. Escribenos de nuevo.",
        description="Sent when the whole conversation ends with a failure",
    )
    booking_dialog_id: str = Field(
        default="booking", description="Dialog started when the classifier is unavailable"
    )


class SettingsConfig(BaseModel):
    """Global settings configuration."""

    log_level: str = Field(default="INFO", description="DEBUG, INFO, WARNING or ERROR")
    log_file: str | None = Field(default=None, description="Optional JSON log file")
    engine: EngineConfig = Field(default_factory=EngineConfig)
    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    persistence: PersistenceConfig = Field(default_factory=PersistenceConfig)
    cancellation: CancellationConfig = Field(default_factory=CancellationConfig)
    bot: BotConfig = Field(default_factory=BotConfig)


class CascadaConfig(BaseModel):
    """Root configuration."""

    version: str = Field(default=CURRENT_VERSION, description="Config format version")
    settings: SettingsConfig = Field(default_factory=SettingsConfig)

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        if value not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported config version '{value}'. Supported: {sorted(SUPPORTED_VERSIONS)}"
            )
        return value
