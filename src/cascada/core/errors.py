"""Core orchestration errors."""


class CascadaError(Exception):
    """Base class for all Cascada errors."""

    pass


class ConfigError(CascadaError):
    """Raised when configuration is invalid."""


class DialogError(CascadaError):
    """Raised when dialog execution fails."""

    pass


class UnknownDialogError(DialogError):
    """Raised when a dialog id is not registered."""

    def __init__(self, dialog_id: str, available: list[str] | None = None):
        self.dialog_id = dialog_id
        self.available = available or []
        super().__init__(
            f"Dialog '{dialog_id}' is not registered. Available: {self.available}"
        )


class DialogStackError(DialogError):
    """Raised when dialog stack operations fail."""

    pass


class DialogLoopError(DialogError):
    """Raised when a single turn invokes too many steps without suspending."""

    pass


class ClassifierError(CascadaError):
    """Raised when intent classification fails."""

    pass


class PersistenceError(CascadaError):
    """Raised when session state cannot be loaded or saved."""

    pass
