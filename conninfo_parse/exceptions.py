# Base exception for all conninfo-parse errors
class ConninfoException(Exception):
    """Base class for all exceptions raised by conninfo-parse."""


# --- Invocation Errors ---


class ConninfoUsageError(ConninfoException):
    """Exception raised for a malformed command invocation."""


class ConninfoUnavailableError(ConninfoException):
    """Exception raised when the requested output format is not available."""


# --- Configuration Errors ---


class ConninfoConfigError(ConninfoException):
    """Exception raised for errors in the conninfo-parse configuration."""


# --- Parsing Errors ---


class ConninfoParseError(ConninfoException):
    """Exception raised when a conninfo string cannot be parsed.

    Attributes:
        message: Human readable description of the problem.
        position: Character offset in the input near which the problem was found, if known.
            The offset is advisory only.

    """

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        return self.message
