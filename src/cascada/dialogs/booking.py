"""Booking dialog: fill in missing booking details, then confirm them."""

import logging
from collections.abc import Callable
from datetime import datetime

from cascada.core.constants import PromptType
from cascada.core.values import BoolValue, ResultValue, text_of
from cascada.dialogs.models import BOOKING_DETAILS, BookingDetails
from cascada.dm.context import StepContext
from cascada.dm.directives import Directive
from cascada.dm.registry import Waterfall
from cascada.utils.timex import to_natural_language

logger = logging.getLogger(__name__)

BOOKING_DIALOG_ID = "booking"

DESTINATION_PROMPT = "Where would you like to travel to?"
ORIGIN_PROMPT = "Where are you traveling from?"
TRAVEL_DATE_PROMPT = "On what date would you like to travel?"
TRAVEL_DATE_RETRY = (
    "I'm sorry, for best results, please enter your travel date including the month, "
    "day and year."
)
CONFIRM_TEMPLATE = (
    "Please confirm, I have you traveling to: {destination} from: {origin} on: {date}. "
    "Is this correct?"
)
CONFIRM_RETRY = "Please answer yes or no."


class BookingDialog:
    """Asks only for the details the caller did not already supply."""

    def __init__(
        self,
        dialog_id: str = BOOKING_DIALOG_ID,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.dialog_id = dialog_id
        self.clock = clock

    def waterfall(self) -> Waterfall:
        return Waterfall(
            self.dialog_id,
            (
                self.destination_step,
                self.origin_step,
                self.travel_date_step,
                self.confirm_step,
                self.final_step,
            ),
        )

    def _details(self, step: StepContext) -> BookingDetails:
        return BookingDetails.model_validate(step.values.get("details") or {})

    def _store(self, step: StepContext, details: BookingDetails) -> None:
        step.values["details"] = details.model_dump()

    async def destination_step(self, step: StepContext) -> Directive:
        match step.options:
            case ResultValue(type=type_, payload=payload) if type_ == BOOKING_DETAILS:
                details = BookingDetails.from_payload(payload)
            case _:
                details = BookingDetails()
        self._store(step, details)

        if details.destination is None:
            return step.prompt(DESTINATION_PROMPT, speak=DESTINATION_PROMPT)
        return step.next(details.destination)

    async def origin_step(self, step: StepContext) -> Directive:
        details = self._details(step)
        details.destination = text_of(step.result)
        self._store(step, details)

        if details.origin is None:
            return step.prompt(ORIGIN_PROMPT, speak=ORIGIN_PROMPT)
        return step.next(details.origin)

    async def travel_date_step(self, step: StepContext) -> Directive:
        details = self._details(step)
        details.origin = text_of(step.result)
        self._store(step, details)

        if details.travel_date is None:
            return step.prompt(
                TRAVEL_DATE_PROMPT,
                PromptType.date,
                speak=TRAVEL_DATE_PROMPT,
                retry_message=TRAVEL_DATE_RETRY,
            )
        return step.next(details.travel_date)

    async def confirm_step(self, step: StepContext) -> Directive:
        details = self._details(step)
        details.travel_date = text_of(step.result)
        self._store(step, details)

        try:
            date_text = to_natural_language(details.travel_date or "", self.clock())
        except ValueError:
            date_text = details.travel_date or ""
        message = CONFIRM_TEMPLATE.format(
            destination=details.destination, origin=details.origin, date=date_text
        )
        return step.prompt(message, PromptType.confirm, speak=message, retry_message=CONFIRM_RETRY)

    async def final_step(self, step: StepContext) -> Directive:
        match step.result:
            case BoolValue(value=True):
                details = self._details(step)
                logger.info(f"Booking confirmed: {details.destination} from {details.origin}")
                return step.end(details.to_value())
            case _:
                logger.info("Booking not confirmed")
                return step.end(None)
