# src/refenv/exceptions.py

"""
Custom exceptions for refenv.
"""


class RefEnvError(Exception):
    """Base class for all refenv errors."""

    pass


class ConfigurationError(RefEnvError):
    """Raised when the configuration file or its values are invalid."""

    pass


# --- Execution errors ---
class ExecutionError(RefEnvError):
    """Base class for failures while running the interpreter process."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        details: Exception | None = None,
    ):
        self.command = command
        self.details = details
        full_message = f"[Execution] {message}"
        if command:
            full_message += f" (Command: '{' '.join(command)}')"
        super().__init__(full_message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class LaunchError(ExecutionError):
    """Raised when the interpreter process cannot be started."""

    pass


class CaptureError(ExecutionError):
    """Raised when reading the process streams fails."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        details: Exception | None = None,
        partial_stderr: bytes | None = None,
    ):
        super().__init__(message, command=command, details=details)
        self.partial_stderr = partial_stderr


# --- Protocol errors ---
class ProtocolError(RefEnvError):
    """Base class for structural problems in the tagged output stream."""

    pass


class MissingSizeMarkerError(ProtocolError):
    """The stream ended before the case count marker was seen."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"missing size marker: no line equal to '{marker}'")


class InvalidCaseCountError(ProtocolError):
    """The line after the size marker is missing or not an integer."""

    def __init__(self, line: str | None):
        self.line = line
        if line is None:
            super().__init__("invalid case count: stream ended after size marker")
        else:
            super().__init__(f"invalid case count: {line!r}")


class TagMismatchError(ProtocolError):
    """A field line did not start with the tag expected at that position."""

    def __init__(self, expected_tag: str, line: str):
        self.expected_tag = expected_tag
        self.line = line
        super().__init__(f"tag mismatch: line didn't start with {expected_tag}:{line}")


class TruncatedStreamError(ProtocolError):
    """The stream ended before the declared number of cases was read."""

    def __init__(self, case_index: int, total_cases: int):
        self.case_index = case_index
        self.total_cases = total_cases
        super().__init__(
            f"truncated stream: ended in case {case_index + 1} of {total_cases}"
        )


# 🔼⚙️
