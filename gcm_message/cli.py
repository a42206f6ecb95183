#!/usr/bin/env python3
"""
GCM message rendering tool.

Prints the document that would be POSTed to the send endpoint, to help debug
payload issues without sending anything:

    gcm-message --to /topics/news --notification title=Hi --data event_id=42 --pretty
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from gcm_message.core.logging_config import setup_logging
from gcm_message.message import InvalidRecipientError, Message


class Colors:
    RED = '\033[91m'
    END = '\033[0m'


def print_error(msg: str):
    print(f"{Colors.RED}✗{Colors.END} {msg}", file=sys.stderr)


def parse_pairs(pairs: List[str]) -> Dict[str, str]:
    """Parse repeated key=value arguments into a dictionary.

    Raises:
        argparse.ArgumentTypeError: If an item has no '='
    """
    result: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Expected key=value, got '{pair}'")
        result[key] = value
    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Render a GCM message document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--to",
        action="append",
        required=True,
        help="Registration token or topic; repeat for multicast",
    )
    parser.add_argument("--collapse-key", default="", help="Collapse key")
    parser.add_argument("--ttl", type=int, default=None, help="Time to live in seconds")
    parser.add_argument(
        "--delay-while-idle",
        action="store_true",
        help="Hold the message until the device is active",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Ask the backend to validate without delivering",
    )
    parser.add_argument(
        "--restricted-package-name",
        default="",
        help="Only deliver to this application package",
    )
    parser.add_argument(
        "--data",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Custom payload entry; repeatable",
    )
    parser.add_argument(
        "--notification",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Notification field (title, body, icon...); repeatable",
    )
    parser.add_argument("--pretty", action="store_true", help="Indent the output")
    parser.add_argument("--log-level", default=None, help="Log level (default LOG_LEVEL)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level)

    try:
        notification = parse_pairs(args.notification)
        data = parse_pairs(args.data)
    except argparse.ArgumentTypeError as e:
        print_error(str(e))
        return 2

    options = {
        "collapseKey": args.collapse_key,
        "delayWhileIdle": args.delay_while_idle,
        "dryRun": args.dry_run,
        "restrictedPackageName": args.restricted_package_name,
    }
    if args.ttl is not None:
        options["timeToLive"] = args.ttl

    message = Message(notification, options)
    if data:
        message.data(data)

    # A single --to renders as "to", several as "registration_ids"
    recipients = args.to[0] if len(args.to) == 1 else args.to

    try:
        document = message.to_dict(recipients)
    except InvalidRecipientError as e:
        print_error(f"Invalid recipients: {e}")
        return 2

    if args.pretty:
        print(json.dumps(document, indent=2))
    else:
        print(message.build(recipients))
    return 0


if __name__ == "__main__":
    sys.exit(main())
