"""Domain payloads exchanged between dialogs."""

from typing import Any

from pydantic import BaseModel, Field

from cascada.core.values import ResultValue

BOOKING_DETAILS = "booking_details"


class BookingDetails(BaseModel):
    """Details gathered by the booking dialog."""

    destination: str | None = None
    origin: str | None = None
    travel_date: str | None = Field(default=None, description="TIMEX date, e.g. 2024-05-01")

    def to_value(self) -> ResultValue:
        return ResultValue(type=BOOKING_DETAILS, payload=self.model_dump())

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BookingDetails":
        return cls.model_validate(payload)
