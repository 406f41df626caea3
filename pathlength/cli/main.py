#!/usr/bin/env python
"""
Command line interface for pathlength
=====================================

Checks the lengths of paths beneath a directory and writes them in the
requested style.

Usage:
    pathlength                              # Entries of the working directory
    pathlength -r -f "gt 200" /srv          # Every path under /srv over 200 chars
    pathlength -s json -p -l 10 ~/projects  # First 10 results as pretty JSON
"""

import argparse
import asyncio
import logging
import os
import sys
import traceback
from typing import List, Optional, TextIO

from .. import __version__
from ..aio import PathLength
from ..errors import InvalidArgumentError
from .styles import StyleRegistry, create_default_registry

LOG_FORMAT = "%(name)s %(levelname)s: %(message)s"

logger = logging.getLogger(__name__)


class CLI:
    """Parses command line arguments and runs a scan.

    Output and error streams can be replaced, which is how the tests
    capture what would be written to the terminal.
    """

    def __init__(
        self,
        output_stream: Optional[TextIO] = None,
        error_stream: Optional[TextIO] = None,
        registry: Optional[StyleRegistry] = None
    ):
        self.output_stream = output_stream or sys.stdout
        self.error_stream = error_stream or sys.stderr
        self.registry = registry or create_default_registry()

    def build_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="pathlength",
            description="Check the lengths of file system paths.",
        )
        parser.add_argument("file", nargs="?", help="directory to check (default: working directory)")
        parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
        parser.add_argument("-d", "--debug", action="store_true", help="enable debug level logging")
        parser.add_argument("-f", "--filter", metavar="<expression>", help="filter paths by length")
        parser.add_argument("-F", "--force", action="store_true",
                            help="ignore errors for individual path checks")
        parser.add_argument("-l", "--limit", metavar="<max>", type=int, help="limit number of results")
        parser.add_argument("-p", "--pretty", action="store_true",
                            help="enable pretty formatting for supporting styles")
        parser.add_argument("-r", "--recursive", action="store_true", help="search directories recursively")
        parser.add_argument("--stack", action="store_true", help="print stack traces for errors")
        parser.add_argument("-s", "--style", metavar="<name>",
                            help=f"use style for output ({', '.join(self.registry.names())})")
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the command line.

        Args:
            argv: Arguments excluding the program name (default: sys.argv[1:])

        Returns:
            Exit status: 0 on success, 1 if the scan failed
        """
        args = self.build_parser().parse_args(argv)

        self._configure_logging(args.debug)
        logger.debug("Parsed arguments: %s", args)

        try:
            engine = PathLength()
            style = self._get_style(args.style)
            style.apply(engine, self.output_stream, pretty=args.pretty)

            asyncio.run(engine.check(
                cwd=os.path.abspath(args.file or os.getcwd()),
                filter=args.filter,
                force=args.force,
                limit=args.limit,
                recursive=args.recursive,
            ))
        except Exception as error:
            self._report_error(error, args.stack)
            return 1

        return 0

    def _get_style(self, name: Optional[str]):
        if not name:
            return self.registry.get_default()

        style = self.registry.lookup(name)
        if style is None:
            raise InvalidArgumentError(f"Invalid style: {name}")
        return style

    def _configure_logging(self, debug: bool):
        # No-op when the root logger already has handlers
        logging.basicConfig(stream=self.error_stream, format=LOG_FORMAT)
        logging.getLogger("pathlength").setLevel(logging.DEBUG if debug else logging.WARNING)

    def _report_error(self, error: Exception, stack: bool):
        if stack:
            message = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        else:
            message = str(error)

        self.error_stream.write(f"\npathlength failed: {message.rstrip()}\n")

        if not stack:
            self.error_stream.write("Try again with the --stack option to print the full stack trace\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    return CLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
