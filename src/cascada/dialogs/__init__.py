"""Scripted dialogs of the Pontifice assistant."""

from collections.abc import Callable
from datetime import datetime

from cascada.config.models import BotConfig
from cascada.core.interfaces import IIntentClassifier
from cascada.dialogs.booking import BOOKING_DIALOG_ID, BookingDialog
from cascada.dialogs.main import MAIN_DIALOG_ID, MainDialog
from cascada.dialogs.models import BookingDetails
from cascada.dm.registry import DialogRegistry


def build_registry(
    classifier: IIntentClassifier,
    bot: BotConfig | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> DialogRegistry:
    """Register the main dialog and the booking sub-dialog."""
    bot = bot or BotConfig()
    return DialogRegistry(
        [
            MainDialog(classifier, bot, clock=clock).waterfall(),
            BookingDialog(bot.booking_dialog_id, clock=clock).waterfall(),
        ]
    )


__all__ = [
    "BOOKING_DIALOG_ID",
    "MAIN_DIALOG_ID",
    "BookingDetails",
    "BookingDialog",
    "MainDialog",
    "build_registry",
]
