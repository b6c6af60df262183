"""Exceptions raised by the Diagnostic Progress Tracker."""


class UnknownDiagnosticError(KeyError):
    """No questions are configured for the requested diagnostic."""

    def __init__(self, tool_name: str) -> None:
        super().__init__(tool_name)
        self.tool_name = tool_name

    def __str__(self) -> str:
        return f"Unknown diagnostic: {self.tool_name}"


class DiagnosticAlreadyCompletedError(ValueError):
    """An answer was submitted for a diagnostic that is already finished."""


class ReportDataError(ValueError):
    """Report data was requested for a diagnostic that cannot be reported on."""
