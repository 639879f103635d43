"""Parse PostgreSQL connection info strings.

Two forms are accepted, and the form is detected automatically:

* keyword/value strings such as ``host=localhost port=5432 dbname='my db'``;
* URIs such as ``postgresql://user@localhost:5432/mydb?sslmode=require``.

Whatever the form, the result covers every keyword of the catalog, in catalog
order. Each keyword is resolved from, in order: the string itself, the
connection service file (when enabled), the environment and the compiled-in
default.
"""

import logging
import os
from collections.abc import Iterator, Mapping

from .catalog import DEFAULT_CATALOG, Catalog
from .exceptions import ConninfoParseError
from .parameter import ParsedParameter, ValueSource
from .service import read_service
from .uri import looks_like_uri, parse_uri

logger = logging.getLogger(__name__)

WHITESPACE = " \t\n\r\f\v"


def _skip_whitespace(conninfo: str, pos: int) -> int:
    while pos < len(conninfo) and conninfo[pos] in WHITESPACE:
        pos += 1
    return pos


def _read_quoted(conninfo: str, pos: int) -> tuple[str, int]:
    """Read a single-quoted value starting at the opening quote.

    Inside the quotes a backslash makes the next character literal, so ``\\'``
    is a quote and ``\\\\`` a backslash.

    Returns:
        The unquoted value and the position after the closing quote.

    """
    start = pos
    pos += 1
    chars = []
    while True:
        if pos >= len(conninfo):
            raise ConninfoParseError(
                "unterminated quoted string in connection info string", position=start
            )
        c = conninfo[pos]
        if c == "\\":
            pos += 1
            if pos >= len(conninfo):
                raise ConninfoParseError(
                    "unterminated quoted string in connection info string", position=start
                )
            chars.append(conninfo[pos])
        elif c == "'":
            return "".join(chars), pos + 1
        else:
            chars.append(c)
        pos += 1


def tokenize(conninfo: str) -> Iterator[tuple[str, str, int]]:
    """Split a keyword/value connection string into its tokens.

    Args:
        conninfo: The connection string.

    Yields:
        Tuples of (keyword, value, position of the keyword).

    Raises:
        ConninfoParseError: If a keyword is not followed by ``=``, a quoted value
            is not terminated or a quoted value is not followed by whitespace.

    """
    pos = _skip_whitespace(conninfo, 0)
    while pos < len(conninfo):
        start = pos
        while pos < len(conninfo) and conninfo[pos] not in WHITESPACE and conninfo[pos] != "=":
            pos += 1
        keyword = conninfo[start:pos]

        pos = _skip_whitespace(conninfo, pos)
        if pos >= len(conninfo) or conninfo[pos] != "=":
            raise ConninfoParseError(
                f'missing "=" after "{keyword}" in connection info string', position=start
            )
        pos = _skip_whitespace(conninfo, pos + 1)

        if pos < len(conninfo) and conninfo[pos] == "'":
            value, pos = _read_quoted(conninfo, pos)
            if pos < len(conninfo) and conninfo[pos] not in WHITESPACE:
                raise ConninfoParseError(
                    "missing whitespace after quoted value in connection info string",
                    position=pos,
                )
        else:
            value_start = pos
            while pos < len(conninfo) and conninfo[pos] not in WHITESPACE:
                pos += 1
            value = conninfo[value_start:pos]

        yield keyword, value, start
        pos = _skip_whitespace(conninfo, pos)


def parse_keyword_value(conninfo: str, catalog: Catalog) -> dict[str, str]:
    """Parse a keyword/value connection string into the explicit values it defines.

    When a keyword is repeated, the last value wins.

    Raises:
        ConninfoParseError: If the string is malformed or uses an unknown keyword.

    """
    values = {}
    for keyword, value, position in tokenize(conninfo):
        if keyword not in catalog:
            raise ConninfoParseError(f'invalid connection option "{keyword}"', position=position)
        values[keyword] = value
    return values


def _environment_value(envvar: str | None, environ: Mapping[str, str]) -> str | None:
    if not envvar:
        return None
    return environ.get(envvar) or None


def parse(
    conninfo: str,
    catalog: Catalog = DEFAULT_CATALOG,
    environ: Mapping[str, str] | None = None,
    *,
    use_defaults: bool = True,
    service_file_lookup: bool = False,
) -> list[ParsedParameter]:
    """Parse a connection info string and resolve every keyword of the catalog.

    Args:
        conninfo: The keyword/value string or URI to parse.
        catalog: The recognized parameters. Defaults to the libpq parameters.
        environ: The environment to read fallback values from. Defaults to a
            snapshot of ``os.environ`` taken at call time. It is never modified.
        use_defaults: Whether to fall back to the service file, the environment
            and the compiled-in defaults. If False, only explicit values are set.
        service_file_lookup: Whether to read the parameters of the ``service``
            keyword from the connection service files.

    Returns:
        One ParsedParameter per catalog keyword, in catalog order. Parameters
        without any value have a value of None.

    Raises:
        ConninfoParseError: If the string is empty, malformed or uses an unknown keyword.

    """
    if not conninfo or conninfo.isspace():
        raise ConninfoParseError("no connection parameters in connection info string")
    if environ is None:
        environ = dict(os.environ)

    if looks_like_uri(conninfo):
        logger.debug("Parsing conninfo as URI")
        explicit = parse_uri(conninfo, catalog)
    else:
        logger.debug("Parsing conninfo as keyword/value string")
        explicit = parse_keyword_value(conninfo, catalog)

    service_values = {}
    if use_defaults and service_file_lookup:
        service_spec = catalog.lookup("service")
        service_name = explicit.get("service")
        if service_name is None and service_spec is not None:
            service_name = _environment_value(service_spec.envvar, environ)
        if service_name:
            service_values = read_service(service_name, catalog, environ)

    parameters = []
    for spec in catalog:
        if spec.keyword in explicit:
            parameter = ParsedParameter(spec.keyword, explicit[spec.keyword], ValueSource.CONNINFO)
        elif not use_defaults:
            parameter = ParsedParameter(spec.keyword, None)
        elif spec.keyword in service_values:
            parameter = ParsedParameter(
                spec.keyword, service_values[spec.keyword], ValueSource.SERVICE
            )
        elif _environment_value(spec.envvar, environ) is not None:
            parameter = ParsedParameter(
                spec.keyword, environ[spec.envvar], ValueSource.ENVIRONMENT
            )
        elif spec.compiled_default is not None:
            parameter = ParsedParameter(spec.keyword, spec.compiled_default, ValueSource.DEFAULT)
        else:
            parameter = ParsedParameter(spec.keyword, None)
        logger.debug("%s resolved from %s", spec.keyword, parameter.source.value)
        parameters.append(parameter)

    return parameters
