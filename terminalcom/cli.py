import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any

from .api import TerminalAPI
from .config import Settings, get_settings
from .endpoints import ENDPOINTS
from .facade import INSTANCE_TYPES, apply_instance_type
from .logging_utils import configure_logging
from .service_client import TerminalAPIError
from .validation import InvalidParameter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REMOTE = 1
EXIT_USAGE = 2


def parse_value(raw: str) -> Any:
    """Decode ``raw`` as JSON when it is valid JSON, else keep the string.

    Quote a value (``'"500"'``) to send digits as a string.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def parse_option(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key, parse_value(value)


def _json_default(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="terminalcom", description="Terminal.com API command line client")
    parser.add_argument("operation", nargs="?", help="endpoint name, e.g. list_terminals")
    parser.add_argument(
        "args",
        nargs="*",
        type=parse_value,
        help="positional endpoint parameters, tokens excluded; parsed as JSON when possible",
    )
    parser.add_argument(
        "-o",
        "--option",
        dest="options",
        action="append",
        type=parse_option,
        default=[],
        metavar="KEY=VALUE",
        help="optional endpoint parameter; VALUE is parsed as JSON when possible",
    )
    parser.add_argument("--instance", choices=list(INSTANCE_TYPES), help="instance size for start/edit operations")
    parser.add_argument("--user-token", default=None, help="defaults to TERMINALCOM_USER_TOKEN")
    parser.add_argument("--access-token", default=None, help="defaults to TERMINALCOM_ACCESS_TOKEN")
    parser.add_argument("--log-level", default=None, help="defaults to TERMINALCOM_LOG_LEVEL")
    parser.add_argument("--list", action="store_true", help="list every operation and exit")
    return parser


def main(argv: list[str] | None = None, *, settings: Settings | None = None, api: TerminalAPI | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = settings or get_settings()
    configure_logging(args.log_level or settings.log_level)

    if args.list:
        for endpoint in ENDPOINTS.values():
            print(endpoint.signature)
        return EXIT_OK

    if not args.operation:
        parser.print_usage(sys.stderr)
        print("error: an operation is required (see --list)", file=sys.stderr)
        return EXIT_USAGE

    endpoint = ENDPOINTS.get(args.operation)
    if endpoint is None:
        print(f"error: unknown operation {args.operation!r} (see --list)", file=sys.stderr)
        return EXIT_USAGE

    call_args: list[Any] = list(args.args)
    if endpoint.authenticated:
        user_token = args.user_token or settings.user_token
        access_token = args.access_token or settings.access_token
        if not user_token or not access_token:
            print(f"error: {endpoint.name} needs a user token and an access token", file=sys.stderr)
            return EXIT_USAGE
        call_args = [user_token, access_token, *call_args]

    options = dict(args.options)
    if args.instance:
        options["instance"] = args.instance

    owns_api = api is None
    if api is None:
        api = TerminalAPI(settings=settings)
    try:
        result = api.invoke(endpoint.name, *call_args, **apply_instance_type(options))
    except InvalidParameter as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except TerminalAPIError as exc:
        logger.debug("%s failed", endpoint.name, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_REMOTE
    finally:
        if owns_api:
            api.close()

    print(json.dumps(result, indent=2, default=_json_default))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
