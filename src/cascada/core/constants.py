"""Core constants and enums."""

from enum import Enum


class FrameState(str, Enum):
    """Lifecycle state of a dialog frame on the stack."""

    created = "created"
    active = "active"
    awaiting_input = "awaiting_input"
    ended = "ended"


class TurnStatus(str, Enum):
    """Outcome of processing one inbound turn."""

    waiting = "waiting"
    complete = "complete"
    cancelled = "cancelled"
    empty = "empty"


class InputHint(str, Enum):
    """Hint sent with each outbound message about whether a reply is expected."""

    expecting_input = "expecting_input"
    ignoring_input = "ignoring_input"
    accepting_input = "accepting_input"


class PromptType(str, Enum):
    """Kinds of raw input a prompt can recognize."""

    text = "text"
    confirm = "confirm"
    number = "number"
    date = "date"
    choice = "choice"


# Error label carried by FailureValue when a prompt exhausts its retries
TOO_MANY_RETRIES = "too_many_retries"

# Intent label used when the classifier returns nothing usable
NONE_INTENT = "None"
