from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

import uvicorn
from dotenv import load_dotenv

from spreceiver.app import clean_site, reconcile_site
from spreceiver.config import configure_logging, get_server_config
from spreceiver.domain.model import Failure
from spreceiver.web import create_app

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from spreceiver.domain.model import Outcome

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SharePoint remote event receiver")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Serve the remote event endpoint")
    serve.add_argument(
        "--host",
        type=str,
        default=None,
        help="Interface to bind (defaults to config)",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind (defaults to config)",
    )

    install = subparsers.add_parser(
        "install",
        help="Register the receivers on the configured site",
    )
    install.add_argument(
        "--endpoint",
        type=str,
        required=True,
        help="URL the registered receivers should call",
    )

    subparsers.add_parser("uninstall", help="Remove the receivers from the configured site")

    return parser.parse_args(list(argv))


def _validate_endpoint(value: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"Endpoint must be an http(s) URL: {value}")
    return value


def _report(outcome: Outcome) -> None:
    if isinstance(outcome, Failure):
        log.error("Reconciliation failed:\n%s", outcome.message)
        sys.exit(1)
    log.info("Done")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        endpoint = None
        if parsed_args.command == "install":
            endpoint = _validate_endpoint(parsed_args.endpoint)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "serve":
            server = get_server_config()
            uvicorn.run(
                create_app(),
                host=parsed_args.host or server.host,
                port=parsed_args.port or server.port,
                log_level="debug" if parsed_args.verbose else "info",
            )
        elif parsed_args.command == "install" and endpoint is not None:
            _report(reconcile_site(endpoint=endpoint))
        elif parsed_args.command == "uninstall":
            _report(clean_site())
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
