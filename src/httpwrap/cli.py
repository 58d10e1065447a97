#!/usr/bin/env python3
"""
httpwrap CLI - inspect status codes, derived headers and redirects
"""
import argparse
import dataclasses
import json
import os
import sys
from typing import Callable, Dict, List, Optional

from httpwrap.config import get_config
from httpwrap.exceptions import RequestTerminated, UnknownStatus
from httpwrap.http import BufferTransport, Request, Response, lookup_status, reason_phrase
from httpwrap.logging import configure_logging


class HttpWrapCLI:
    """Command Line Interface for httpwrap"""

    def __init__(self, stdout=None):
        self.stdout = stdout or sys.stdout
        self.commands: Dict[str, Callable[[argparse.Namespace], int]] = {
            'status': self.cmd_status,
            'headers': self.cmd_headers,
            'redirect': self.cmd_redirect,
        }
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create and configure the argument parser"""
        parser = argparse.ArgumentParser(
            prog='httpwrap',
            description="httpwrap CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""Examples:
  httpwrap status 404
  httpwrap status "Not Found"
  httpwrap headers
  httpwrap redirect /login --method Refresh --code 302
            """
        )
        parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        status_parser = subparsers.add_parser('status', help='Resolve a status code or reason phrase')
        status_parser.add_argument('value', help='Code ("404") or reason phrase ("Not Found")')

        subparsers.add_parser('headers', help='Print the request headers derived from the environment')

        redirect_parser = subparsers.add_parser('redirect', help='Print the wire output of a redirect')
        redirect_parser.add_argument('path', help='Redirect target')
        redirect_parser.add_argument('--method', default='Location', choices=['Location', 'Refresh'],
                                     help='Redirect header to use')
        redirect_parser.add_argument('--code', type=int, default=301, help='Redirect status code')

        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI"""
        args = self.parser.parse_args(argv)

        logging_config = get_config().logging
        if args.verbose:
            logging_config = dataclasses.replace(logging_config, level='DEBUG')
        configure_logging(logging_config)

        if not args.command:
            self.parser.print_help(self.stdout)
            return 1

        return self.commands[args.command](args)

    def _print(self, text: str) -> None:
        print(text, file=self.stdout)

    def cmd_status(self, args) -> int:
        """Resolve a status identifier"""
        value = args.value
        code = int(value) if value.isdecimal() else lookup_status(value)
        if code is None or code not in Response.STATUS_CODES:
            self._print(f"Unknown status: {value}")
            return 1
        self._print(f"{code} {reason_phrase(code)}")
        return 0

    def cmd_headers(self, args) -> int:
        """Print headers of the request described by the process environment"""
        request = Request.from_environ(os.environ)
        self._print(json.dumps(request.headers, indent=2, sort_keys=True))
        return 0

    def cmd_redirect(self, args) -> int:
        """Print the redirect response"""
        transport = BufferTransport(http_version=get_config().http.http_version)
        try:
            Response.redirect(args.path, args.method, args.code, transport=transport)
        except UnknownStatus as exc:
            self._print(exc.message)
            return 1
        except RequestTerminated:
            pass
        self._print(transport.output.rstrip("\r\n"))
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    return HttpWrapCLI().run(argv)


if __name__ == '__main__':
    sys.exit(main())
