"""Dialog registry.

Maps dialog ids to their waterfall definitions. A registry is an explicit
value handed to the engine at construction; there is no process-wide
default instance.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from cascada.core.errors import UnknownDialogError
from cascada.dm.context import StepContext
from cascada.dm.directives import Directive

logger = logging.getLogger(__name__)

# Type alias for waterfall steps
StepFunction = Callable[[StepContext], Awaitable[Directive]]


@dataclass(frozen=True)
class Waterfall:
    """An ordered, fixed list of steps run under one dialog id."""

    dialog_id: str
    steps: tuple[StepFunction, ...]

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError(f"Waterfall '{self.dialog_id}' needs at least one step")

    def __len__(self) -> int:
        return len(self.steps)

    def step_name(self, index: int) -> str:
        step = self.steps[index]
        return getattr(step, "__name__", repr(step))


class DialogRegistry:
    """Registry of waterfall dialogs.

    Usage:
        registry = DialogRegistry()
        registry.add(Waterfall("greet", (hello_step, goodbye_step)))
        waterfall = registry.resolve("greet")
    """

    def __init__(self, waterfalls: Iterable[Waterfall] = ()) -> None:
        self._dialogs: dict[str, Waterfall] = {}
        for waterfall in waterfalls:
            self.add(waterfall)

    def add(self, waterfall: Waterfall) -> "DialogRegistry":
        """Register a waterfall, replacing any dialog with the same id."""
        if waterfall.dialog_id in self._dialogs:
            logger.warning(f"Dialog '{waterfall.dialog_id}' already registered, overwriting")
        self._dialogs[waterfall.dialog_id] = waterfall
        logger.debug(f"Registered dialog '{waterfall.dialog_id}' ({len(waterfall)} steps)")
        return self

    def register(self, dialog_id: str, *steps: StepFunction) -> "DialogRegistry":
        """Register steps under ``dialog_id``."""
        return self.add(Waterfall(dialog_id, tuple(steps)))

    def resolve(self, dialog_id: str) -> Waterfall:
        """Look up a dialog.

        Raises:
            UnknownDialogError: If ``dialog_id`` is not registered.
        """
        try:
            return self._dialogs[dialog_id]
        except KeyError:
            raise UnknownDialogError(dialog_id, sorted(self._dialogs)) from None

    def list_dialogs(self) -> list[str]:
        return list(self._dialogs)

    def __contains__(self, dialog_id: str) -> bool:
        return dialog_id in self._dialogs
