"""Parsing of ``postgresql://`` connection URIs."""

import logging

from .catalog import Catalog
from .exceptions import ConninfoParseError

logger = logging.getLogger(__name__)

URI_PREFIXES = ("postgresql://", "postgres://")
URI_SCHEMES = ("postgresql:", "postgres:")

HEX_DIGITS = "0123456789abcdefABCDEF"


def uri_prefix_length(conninfo: str) -> int:
    """Return the length of the URI prefix of a conninfo string, or 0 if it has none."""
    for prefix in URI_PREFIXES:
        if conninfo.startswith(prefix):
            return len(prefix)
    return 0


def looks_like_uri(conninfo: str) -> bool:
    """Whether the conninfo string starts with a recognized URI scheme.

    A string such as ``postgresql:foo`` is a URI with a missing ``//``
    separator rather than a keyword/value string.
    """
    return conninfo.startswith(URI_SCHEMES)


def percent_decode(value: str, position: int | None = None) -> str:
    """Decode the percent-encoded sequences of a URI component.

    ``+`` is not treated as a space.

    Args:
        value: The component to decode.
        position: The offset of the component in the URI.

    Returns:
        The decoded component.

    Raises:
        ConninfoParseError: If a sequence is malformed, encodes a NUL byte or
            the decoded bytes are not valid UTF-8.

    """
    if "%" not in value:
        return value

    decoded = bytearray()
    i = 0
    while i < len(value):
        c = value[i]
        if c != "%":
            decoded.extend(c.encode("utf-8"))
            i += 1
            continue
        digits = value[i + 1 : i + 3]
        if len(digits) != 2 or digits[0] not in HEX_DIGITS or digits[1] not in HEX_DIGITS:
            raise ConninfoParseError(
                f'invalid percent-encoded token: "{value}"',
                position=None if position is None else position + i,
            )
        byte = int(digits, 16)
        if byte == 0:
            raise ConninfoParseError(
                f'forbidden value %00 in percent-encoded value: "{value}"',
                position=None if position is None else position + i,
            )
        decoded.append(byte)
        i += 3

    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError:
        raise ConninfoParseError(
            f'invalid percent-encoded token: "{value}"', position=position
        ) from None


def _find_any(uri: str, start: int, stops: str) -> int:
    """Return the index of the first character of `stops` at or after `start`, or len(uri)."""
    pos = start
    while pos < len(uri) and uri[pos] not in stops:
        pos += 1
    return pos


def _parse_hosts(uri: str, pos: int) -> tuple[list[str], list[str], int]:
    """Parse a comma separated list of ``host[:port]`` pairs.

    Returns:
        The decoded hosts, the decoded ports and the position after the list.

    """
    hosts = []
    ports = []
    while True:
        if pos < len(uri) and uri[pos] == "[":
            close = uri.find("]", pos + 1)
            if close == -1:
                raise ConninfoParseError(
                    "end of string reached when looking for matching "
                    f'"]" in IPv6 host address in URI: "{uri}"',
                    position=pos,
                )
            if close == pos + 1:
                raise ConninfoParseError(
                    f'IPv6 host address may not be empty in URI: "{uri}"', position=pos
                )
            host = percent_decode(uri[pos + 1 : close], pos + 1)
            pos = close + 1
            if pos < len(uri) and uri[pos] not in ":/?,":
                raise ConninfoParseError(
                    f'unexpected character "{uri[pos]}" at position {pos + 1} '
                    f'in URI (expected ":" or "/"): "{uri}"',
                    position=pos,
                )
        else:
            end = _find_any(uri, pos, ":/?,")
            host = percent_decode(uri[pos:end], pos)
            pos = end
        hosts.append(host)

        port = ""
        if pos < len(uri) and uri[pos] == ":":
            end = _find_any(uri, pos + 1, "/?,")
            port = percent_decode(uri[pos + 1 : end], pos + 1)
            pos = end
        ports.append(port)

        if pos < len(uri) and uri[pos] == ",":
            pos += 1
            continue
        return hosts, ports, pos


def _parse_query(uri: str, pos: int, catalog: Catalog) -> dict[str, str]:
    """Parse the ``key=value&...`` query part starting at `pos`."""
    values = {}
    params = uri[pos:].split("&")
    # A trailing "&" (or an empty query) ends the list.
    if params[-1] == "":
        params.pop()
    for param in params:
        if "=" not in param:
            raise ConninfoParseError(
                f'missing key/value separator "=" in URI query parameter: "{param}"',
                position=pos,
            )
        if param.count("=") > 1:
            raise ConninfoParseError(
                f'extra key/value separator "=" in URI query parameter: "{param}"',
                position=pos,
            )
        raw_keyword, raw_value = param.split("=")
        keyword = percent_decode(raw_keyword, pos)
        value = percent_decode(raw_value, pos + len(raw_keyword) + 1)

        # Accepted for JDBC compatibility.
        if keyword == "ssl" and value == "true":
            keyword, value = "sslmode", "require"

        if keyword not in catalog:
            raise ConninfoParseError(f'invalid URI query parameter: "{keyword}"', position=pos)
        values[keyword] = value
        pos += len(param) + 1
    return values


def parse_uri(uri: str, catalog: Catalog) -> dict[str, str]:
    """Parse a connection URI into the explicit values it defines.

    The accepted form is::

        postgresql://[user[:password]@][host][:port][,...][/dbname][?param1=value1&...]

    Multiple hosts are kept as a single comma separated value for ``host``
    and for ``port``.

    Args:
        uri: The connection URI.
        catalog: The catalog the query parameters are checked against.

    Returns:
        The explicitly given values, keyed by catalog keyword.

    Raises:
        ConninfoParseError: If the URI is malformed or uses an unknown query parameter.

    """
    prefix_length = uri_prefix_length(uri)
    if not prefix_length:
        raise ConninfoParseError(
            f'missing "//" scheme separator in URI: "{uri}"', position=uri.find(":") + 1
        )

    values = {}
    pos = prefix_length

    # user[:password]@ only counts if the @ comes before the path and query.
    end = _find_any(uri, pos, "@/?")
    if end < len(uri) and uri[end] == "@":
        user, separator, password = uri[pos:end].partition(":")
        if user:
            values["user"] = percent_decode(user, pos)
        if separator and password:
            values["password"] = percent_decode(password, pos + len(user) + 1)
        pos = end + 1

    hosts, ports, pos = _parse_hosts(uri, pos)
    host = ",".join(hosts)
    port = ",".join(ports)
    if host:
        values["host"] = host
    if port:
        values["port"] = port

    if pos < len(uri) and uri[pos] == "/":
        end = _find_any(uri, pos + 1, "?")
        dbname = uri[pos + 1 : end]
        if dbname:
            values["dbname"] = percent_decode(dbname, pos + 1)
        pos = end

    if pos < len(uri) and uri[pos] == "?":
        values.update(_parse_query(uri, pos + 1, catalog))

    logger.debug("URI defines keywords: %s", ", ".join(values))
    return values
