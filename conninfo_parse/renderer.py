"""Renderers turning parsed parameters into text output."""

import abc
import json
from collections.abc import Iterable
from enum import Enum

from .exceptions import ConninfoUnavailableError, ConninfoUsageError
from .parameter import ParsedParameter

DEFAULT_DELIMITER = "\t"


class OutputFormat(Enum):
    DELIMITED = "delimited"
    SHELL = "shell"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


def escape_shell_arg(arg: str) -> str:
    """Escape a string for use as a shell argument.

    The value is wrapped in single quotes and each embedded single quote is
    replaced by ``'\\''`` (close the quote, an escaped quote, reopen the quote).

    Example:
        >>> escape_shell_arg("it's")
        "'it'\\\\''s'"

    """
    return "'" + arg.replace("'", "'\\''") + "'"


class Renderer(abc.ABC):
    """Base class for output renderers.

    Only the parameters having a value are rendered, in the order they are given.
    """

    format: OutputFormat

    @staticmethod
    def present(parameters: Iterable[ParsedParameter]) -> list[ParsedParameter]:
        """Return the parameters which have a value."""
        return [parameter for parameter in parameters if parameter.is_present]

    @abc.abstractmethod
    def render(self, parameters: Iterable[ParsedParameter]) -> str:
        """Render the parameters.

        Args:
            parameters: The parsed parameters, in catalog order.

        Returns:
            The output text, including its trailing newline if there is any output.

        """
        pass


class DelimitedRenderer(Renderer):
    """One ``keyword<delimiter>value`` line per parameter."""

    format = OutputFormat.DELIMITED

    def __init__(self, delimiter: str = DEFAULT_DELIMITER) -> None:
        if not delimiter:
            raise ConninfoUsageError("invalid delimiter spec")
        self.delimiter = delimiter

    def render(self, parameters: Iterable[ParsedParameter]) -> str:
        return "".join(
            f"{parameter.keyword}{self.delimiter}{parameter.value}\n"
            for parameter in self.present(parameters)
        )


class ShellRenderer(Renderer):
    """One ``keyword='value'`` line per parameter, safe to evaluate in a POSIX shell."""

    format = OutputFormat.SHELL

    def render(self, parameters: Iterable[ParsedParameter]) -> str:
        return "".join(
            f"{parameter.keyword}={escape_shell_arg(parameter.value)}\n"
            for parameter in self.present(parameters)
        )


class JsonRenderer(Renderer):
    """A single JSON object mapping keywords to values."""

    format = OutputFormat.JSON

    def render(self, parameters: Iterable[ParsedParameter]) -> str:
        obj = {parameter.keyword: parameter.value for parameter in self.present(parameters)}
        return json.dumps(obj) + "\n"


def get_renderer(
    format: OutputFormat,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    unavailable: Iterable[OutputFormat] = (),
) -> Renderer:
    """Return the renderer for an output format.

    Args:
        format: The requested output format.
        delimiter: The column delimiter of the delimited format.
        unavailable: Formats which are disabled.

    Raises:
        ConninfoUnavailableError: If the format is disabled.
        ConninfoUsageError: If the delimiter is empty.

    """
    if format in set(unavailable):
        raise ConninfoUnavailableError(f"{format.name} support not available")

    if format == OutputFormat.DELIMITED:
        return DelimitedRenderer(delimiter)
    elif format == OutputFormat.SHELL:
        return ShellRenderer()
    elif format == OutputFormat.JSON:
        return JsonRenderer()
    raise ValueError(f"Unknown output format: {format}")
