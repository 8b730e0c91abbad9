"""Main dialog: greet, answer the classified intent, loop forever."""

import logging
from collections.abc import Callable
from datetime import datetime

from cascada.config.models import BotConfig
from cascada.core.interfaces import IIntentClassifier
from cascada.core.values import (
    BoolValue,
    FailureValue,
    NoValue,
    NumberValue,
    ResultValue,
    TextValue,
    text_of,
)
from cascada.dialogs.models import BOOKING_DETAILS, BookingDetails
from cascada.dm.context import StepContext
from cascada.dm.directives import Directive
from cascada.dm.registry import Waterfall
from cascada.utils.timex import to_natural_language

logger = logging.getLogger(__name__)

MAIN_DIALOG_ID = "main"


class MainDialog:
    """Intro → Act → Final, then replace itself with a fresh Intro."""

    def __init__(
        self,
        classifier: IIntentClassifier,
        bot: BotConfig | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.classifier = classifier
        self.bot = bot or BotConfig()
        self.clock = clock

    def waterfall(self) -> Waterfall:
        return Waterfall(MAIN_DIALOG_ID, (self.intro_step, self.act_step, self.final_step))

    async def intro_step(self, step: StepContext) -> Directive:
        if not self.classifier.is_configured:
            await step.send(self.bot.unconfigured_notice)
            return step.next(None)

        # Text handed over by the final step, or the greeting on the first pass.
        message = text_of(step.options) or self.bot.greeting
        return step.prompt(message, speak=message)

    async def act_step(self, step: StepContext) -> Directive:
        if not self.classifier.is_configured:
            return step.begin_child(self.bot.booking_dialog_id, BookingDetails().to_value())

        text = text_of(step.result) or step.turn.text or ""
        intent = (await self.classifier.classify(text)).top_intent
        logger.info(f"Classified intent '{intent}'", extra={"session_id": step.turn.session_id})

        reply = self.bot.intent_responses.get(intent)
        if reply is None:
            reply = self.bot.fallback_template.format(intent=intent)
        await step.send(reply, speak=reply)

        # TODO: start the booking dialog from the classified path once order taking is modelled
        return step.next(None)

    async def final_step(self, step: StepContext) -> Directive:
        match step.result:
            case ResultValue(type=type_, payload=payload) if type_ == BOOKING_DETAILS:
                details = BookingDetails.from_payload(payload)
                message = (
                    f"I have you booked to {details.destination} from {details.origin} "
                    f"on {self._render_date(details.travel_date)}"
                )
                await step.send(message, speak=message)
            case FailureValue(error=error, dialog_id=dialog_id):
                logger.warning(f"Child dialog '{dialog_id}' failed: {error}")
                await step.send("Lo sentimos, no pudimos completar tu solicitud.")
            case NoValue() | TextValue() | BoolValue() | NumberValue() | ResultValue():
                pass

        return step.replace(MAIN_DIALOG_ID, self.bot.reprompt)

    def _render_date(self, timex: str | None) -> str:
        if not timex:
            return "an unspecified date"
        try:
            return to_natural_language(timex, self.clock())
        except ValueError:
            return timex
