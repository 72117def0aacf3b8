"""
Command-line access to the Resend list helpers.

Usage:
    resend-node list /emails --limit 5
    resend-node list /contacts --all --before ctc_123
    resend-node options templates
    resend-node variables tmpl_123
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import Any, List, Optional

from .base import ListOptions, ResendConfig, ResendError
from .config import ResendConfigLoader
from .credentials import EnvCredentialSource, resolve_api_key
from .http import ResendHttpClient
from .logging_config import LogContext, configure_logging
from .options import get_segments, get_template_variables, get_templates, get_topics
from .pagination import fetch_collection

logger = logging.getLogger(__name__)

OPTION_LOADERS = {
    "templates": get_templates,
    "segments": get_segments,
    "topics": get_topics,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resend-node", description="Resend list helpers")
    parser.add_argument("--env-file", default=None, help="Path to a .env file")
    parser.add_argument("--log-level", default=None, help="Override RESEND_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="Fetch a list endpoint")
    list_parser.add_argument("path", help="Collection path, e.g. /emails")
    list_parser.add_argument("--all", dest="return_all", action="store_true",
                             help="Follow cursors until the collection is exhausted")
    list_parser.add_argument("--limit", type=int, default=None)
    cursor = list_parser.add_mutually_exclusive_group()
    cursor.add_argument("--after", default=None)
    cursor.add_argument("--before", default=None)

    options_parser = subparsers.add_parser("options", help="Print selector options")
    options_parser.add_argument("resource", choices=sorted(OPTION_LOADERS))

    variables_parser = subparsers.add_parser("variables", help="Print template variables")
    variables_parser.add_argument("template_id")

    return parser


async def run(args: argparse.Namespace, config: ResendConfig) -> Any:
    api_key = await resolve_api_key(EnvCredentialSource(config))

    async with ResendHttpClient(config) as client:
        if args.command == "list":
            response = await fetch_collection(
                client,
                client.build_url(args.path),
                ListOptions(after=args.after, before=args.before),
                api_key,
                return_all=args.return_all,
                limit=args.limit,
            )
            return response.to_dict()

        if args.command == "options":
            options = await OPTION_LOADERS[args.resource](client, api_key)
            return [option.to_dict() for option in options]

        options = await get_template_variables(client, api_key, args.template_id)
        return [option.to_dict() for option in options]


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ResendConfigLoader(args.env_file).load_config()
    configure_logging(
        "resend-node",
        log_level=args.log_level or config.log_level,
        json_output=config.json_logs,
    )

    with LogContext(command=args.command):
        try:
            result = asyncio.run(run(args, config))
        except ResendError as e:
            logger.error(f"{args.command} failed: {e}")
            return 1

    json.dump(result, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0
