#!/usr/bin/env python3

import argparse
import logging
import sys

from .config import CONNINFO_PARSE_VERSION, ConninfoConfig
from .exceptions import (
    ConninfoConfigError,
    ConninfoParseError,
    ConninfoUnavailableError,
    ConninfoUsageError,
)
from .parser import parse
from .renderer import OutputFormat, get_renderer

PROG = "conninfo-parse"
DESCRIPTION = "Parse a PostgreSQL conninfo string and output the result"
USAGE = "%(prog)s [-h|-V] [-q] [-v] [-c FILE] [-n] [-S] [-d <dc>|-j|-s] <conninfo>"

# Adapted from sysexits.h
EX_OK = 0
EX_ERR = 1
EX_USAGE = 64
EX_UNAVAILABLE = 69


def setup_logging(verbosity: int = 0):
    """Setup logging based on verbosity level (0=WARNING, 1=INFO, 2+=DEBUG) with colored output."""
    level = logging.WARNING  # default

    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    class ColorFormatter(logging.Formatter):
        COLORS = {
            logging.ERROR: "\033[31m",  # Red
            logging.WARNING: "\033[33m",  # Yellow
            logging.INFO: "\033[36m",  # Cyan
            logging.DEBUG: "\033[35m",  # Magenta
        }
        RESET = "\033[0m"

        def format(self, record):
            color = self.COLORS.get(record.levelno, "")
            message = super().format(record)
            # scripts parse stderr, only color terminals
            if color and sys.stderr.isatty():
                message = f"{color}{message}{self.RESET}"
            return message

    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(message)s"))
    logging.basicConfig(
        level=level,
        handlers=[handler],
        format="%(message)s",
        force=True,
    )


class ArgumentParser(argparse.ArgumentParser):
    """An argument parser exiting with EX_USAGE on invalid invocations."""

    def error(self, message: str):
        sys.stderr.write(f"{self.prog}: {message}\n")
        self.print_usage(sys.stderr)
        self.exit(EX_USAGE)


class DelimitedAction(argparse.Action):
    """Select the delimited output format with the given column delimiter."""

    def __call__(self, parser, namespace, values, option_string=None):
        if not values:
            parser.error("invalid delimiter spec")
        namespace.output = OutputFormat.DELIMITED
        namespace.delimiter = values


def create_parser() -> argparse.ArgumentParser:
    """Creates the command line parser"""
    parser = ArgumentParser(prog=PROG, usage=USAGE, description=DESCRIPTION)

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s version {CONNINFO_PARSE_VERSION}",
        help="Display version information and exit",
    )
    parser.add_argument(
        "-q", "--quiet", help="Suppress normal output (validate only)", action="store_true"
    )
    parser.add_argument(
        "-d",
        "--delimited",
        "--delimiter",
        metavar="<dc>",
        dest="delimiter",
        action=DelimitedAction,
        help="Output in delimited format, where <dc> delimits columns and \\n delimits rows",
    )
    parser.add_argument(
        "-j",
        "--json",
        dest="output",
        action="store_const",
        const=OutputFormat.JSON,
        help="Output in JSON format",
    )
    parser.add_argument(
        "-s",
        "--shell",
        dest="output",
        action="store_const",
        const=OutputFormat.SHELL,
        help="Output in shell variable format",
    )
    parser.add_argument(
        "-n",
        "--no-defaults",
        help="Only output the parameters given in the conninfo string",
        action="store_true",
    )
    parser.add_argument(
        "-S",
        "--service-file",
        help="Read the parameters of the service from the connection service file",
        action="store_true",
    )
    parser.add_argument("-c", "--config-file", help="set the config file")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase output verbosity (e.g. -v, -vv)",
    )
    parser.add_argument("conninfo", nargs="?", help="conninfo string to parse")
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)

    return parser


def cli(argv: list[str] | None = None) -> int:
    """Main function to run the command line interface."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        if args.conninfo is None:
            raise ConninfoUsageError("expected conninfo string")
        if args.extra:
            raise ConninfoUsageError(f"unexpected argument: {args.extra[0]}")

        if args.config_file:
            config = ConninfoConfig.from_yaml(args.config_file)
        else:
            config = ConninfoConfig()

        renderer = get_renderer(
            args.output or config.output_format,
            delimiter=args.delimiter or config.delimiter,
            unavailable=config.unavailable_formats,
        )
        logger.debug(f"Rendering as {renderer.format}")
    except ConninfoUsageError as e:
        logger.error(f"{PROG}: {e}")
        parser.print_usage(sys.stderr)
        return EX_USAGE
    except ConninfoUnavailableError as e:
        logger.error(f"{PROG}: {e}")
        return EX_UNAVAILABLE
    except ConninfoConfigError as e:
        logger.error(f"{PROG}: {e}")
        return EX_ERR

    try:
        parameters = parse(
            args.conninfo,
            use_defaults=config.use_defaults and not args.no_defaults,
            service_file_lookup=config.service_file_lookup or args.service_file,
        )
    except ConninfoParseError as e:
        if not args.quiet:
            logger.error(f"{PROG}: parse error: {e}")
            if e.position is not None:
                logger.info(f"{PROG}: error near position {e.position}")
        return EX_ERR

    if args.quiet:
        return EX_OK

    sys.stdout.write(renderer.render(parameters))
    return EX_OK


if __name__ == "__main__":
    sys.exit(cli())
