from .catalog import Catalog, DEFAULT_CATALOG
from .config import ConninfoConfig
from .exceptions import (
    ConninfoConfigError,
    ConninfoException,
    ConninfoParseError,
    ConninfoUnavailableError,
    ConninfoUsageError,
)
from .parameter import ParameterSpec, ParsedParameter, ValueSource
from .parser import parse
from .renderer import (
    DelimitedRenderer,
    JsonRenderer,
    OutputFormat,
    Renderer,
    ShellRenderer,
    escape_shell_arg,
    get_renderer,
)

__all__ = [
    "Catalog",
    "ConninfoConfig",
    "ConninfoConfigError",
    "ConninfoException",
    "ConninfoParseError",
    "ConninfoUnavailableError",
    "ConninfoUsageError",
    "DEFAULT_CATALOG",
    "DelimitedRenderer",
    "JsonRenderer",
    "OutputFormat",
    "ParameterSpec",
    "ParsedParameter",
    "Renderer",
    "ShellRenderer",
    "ValueSource",
    "escape_shell_arg",
    "get_renderer",
    "parse",
]
