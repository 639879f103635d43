"""Lookup of connection services defined in ``pg_service.conf`` files."""

import logging
from collections.abc import Mapping
from pathlib import Path

from .catalog import Catalog
from .exceptions import ConninfoParseError

logger = logging.getLogger(__name__)

SERVICE_FILE_ENVVAR = "PGSERVICEFILE"
SYSCONFDIR_ENVVAR = "PGSYSCONFDIR"
USER_SERVICE_FILE = "~/.pg_service.conf"
SYSTEM_SERVICE_FILE = "pg_service.conf"


def service_files(environ: Mapping[str, str]) -> list[Path]:
    """Return the candidate service files, in lookup order.

    ``PGSERVICEFILE`` replaces the per-user file. The system-wide file is only
    consulted when ``PGSYSCONFDIR`` is set.
    """
    files = []
    if environ.get(SERVICE_FILE_ENVVAR):
        files.append(Path(environ[SERVICE_FILE_ENVVAR]))
    else:
        files.append(Path(USER_SERVICE_FILE).expanduser())
    if environ.get(SYSCONFDIR_ENVVAR):
        files.append(Path(environ[SYSCONFDIR_ENVVAR]) / SYSTEM_SERVICE_FILE)
    return files


def _read_group(file: Path, name: str, catalog: Catalog) -> dict[str, str] | None:
    """Read the ``[name]`` group of a service file.

    Lines are stripped of surrounding blanks, empty lines and ``#`` comments are
    skipped. Only the lines of the requested group are checked, the rest of the
    file is ignored.

    Returns:
        The parameters of the group, or None if the file does not define it.

    """
    try:
        with file.open(encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise ConninfoParseError(f'could not read service file "{file}": {e}') from e

    values = None
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("["):
            if values is not None:
                # next group, the requested one is complete
                break
            if line[1:].split("]", 1)[0] == name:
                values = {}
            continue

        if values is None:
            continue

        keyword, separator, value = line.partition("=")
        if not separator:
            raise ConninfoParseError(f'syntax error in service file "{file}", line {lineno}')
        if keyword == "service":
            raise ConninfoParseError(
                f'nested service specifications not supported in service file "{file}", line {lineno}'
            )
        if keyword not in catalog:
            raise ConninfoParseError(
                f'invalid connection option "{keyword}" in service file "{file}", line {lineno}'
            )
        values[keyword] = value

    return values


def read_service(name: str, catalog: Catalog, environ: Mapping[str, str]) -> dict[str, str]:
    """Read the parameters of a connection service.

    The service files are searched in the order given by :func:`service_files`,
    the first one defining the service wins.

    Args:
        name: The service name, i.e. the section of the service file.
        catalog: The catalog the keywords of the service are checked against.
        environ: The environment used to locate the service files.

    Returns:
        The parameters defined for the service.

    Raises:
        ConninfoParseError: If no file defines the service or if a file is malformed.

    """
    for file in service_files(environ):
        if not file.is_file():
            continue
        values = _read_group(file, name, catalog)
        if values is None:
            logger.debug("Service %s not defined in %s", name, file)
            continue
        logger.info("Using service %s from %s", name, file)
        return values

    raise ConninfoParseError(f'definition of service "{name}" not found')
