"""Error types surfaced to the wizard.

Neither is fatal: the wizard reports them and keeps the session alive.
"""


class ComputationFailed(ValueError):
    """The projection could not run (a field failed to parse or is out of range)."""

    def __init__(self, field: str, value: str | None, reason: str = "not a number"):
        self.field = field
        self.value = value
        self.reason = reason
        if value is None:
            detail = f"{field} {reason}"
        else:
            detail = f"{field} {value!r} is {reason}"
        super().__init__(f"Could not compute mortgage: {detail}")


class ExportFailed(OSError):
    """The export destination could not be written."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not export to {path}: {cause}")
