# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""StatusProbe CLI."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from ..config import HttpSettings, load_http_settings
from ..errors import ConfigError
from ..http import create_default_http_client, is_http_url
from ..loader import load_batch_spec
from ..log import setup_logging
from ..models.batch import DEFAULT_SUCCESS_CODES, DEFAULT_TIMEOUT_MS, BatchSpec, ProbeSpec
from ..models.probe import ProbeResult
from ..runtime import StatusProbe
from ..version import __version__

logger = logging.getLogger("statusprobe")

EPILOG = """\
examples:
  statusprobe config.json
  statusprobe --url https://example.com --timeout 10000
  statusprobe --url https://api.github.com/users/octocat --header "User-Agent:StatusProbe/1.0" --success 200 --success 403
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statusprobe",
        description="Probe HTTP(S) endpoints and evaluate declarative checks against each response",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("config", nargs="?", help="JSON configuration file listing the URLs to check")
    parser.add_argument("--url", help="Check a single URL instead of using a config file")
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT_MS,
        help=f"Timeout in milliseconds for --url (default: {DEFAULT_TIMEOUT_MS})",
    )
    parser.add_argument(
        "--header",
        action="append",
        default=[],
        metavar="NAME:VALUE",
        help="Add a request header for --url (repeatable)",
    )
    parser.add_argument(
        "--success",
        action="append",
        default=[],
        metavar="CODE",
        help="Add a success status code for --url (repeatable)",
    )
    parser.add_argument("--method", default="GET", help="HTTP method for --url (default: GET)")
    parser.add_argument("--sync", action="store_true", help="Run checks one after another")
    parser.add_argument("--quiet", action="store_true", help="Suppress per-URL output except the summary and errors")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--log-level", help="Log level: error, warn, info or debug")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--version", action="version", version=f"StatusProbe v{__version__}")
    return parser


def parse_header_args(values: list[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            logger.warning('Invalid header format: %s. Expected format: "Name:Value"', raw)
            continue
        headers[name.strip()] = value.strip()
    return headers


def parse_success_args(values: list[str]) -> tuple[int, ...]:
    codes: list[int] = []
    for raw in values:
        try:
            codes.append(int(raw))
        except ValueError:
            logger.warning("Invalid status code: %s", raw)
    return tuple(codes)


def build_single_url_batch(args: argparse.Namespace) -> BatchSpec:
    if not is_http_url(args.url):
        raise ConfigError(f"Invalid URL: {args.url}")
    success_codes = parse_success_args(args.success) or None
    probe = ProbeSpec(
        url=args.url,
        timeout_ms=args.timeout,
        success_codes=success_codes,
        headers=parse_header_args(args.header),
        method=args.method,
    )
    return BatchSpec(probes=(probe,), global_success_codes=success_codes or DEFAULT_SUCCESS_CODES)


def _print_json(results: list[ProbeResult]) -> None:
    payload: list[dict[str, Any]] = [result.to_dict() for result in results]
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _summarize(results: list[ProbeResult]) -> int:
    failed = [result for result in results if not result.success]
    if failed:
        logger.error("%d of %d checks failed", len(failed), len(results))
        return 1
    logger.info("All %d checks passed", len(results))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.config and not args.url:
        logger.error("Error: No configuration file or URL specified")
        parser.print_usage(sys.stderr)
        return 1

    try:
        if args.url:
            logger.info("Checking URL: %s", args.url)
            batch = build_single_url_batch(args)
        else:
            logger.info("Checking URLs from configuration: %s", args.config)
            batch = load_batch_spec(args.config)
            setup_logging(args.log_level or batch.log_level, batch.log_file)
    except ConfigError as exc:
        logger.error("Error: %s", exc)
        return 1

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    http_client = create_default_http_client(settings)

    with StatusProbe(http_client=http_client, settings=settings) as probe:
        results = probe.run(batch, concurrent=not args.sync, emit_log=not args.quiet)

    if args.json:
        _print_json(results)
    return _summarize(results)


if __name__ == "__main__":
    raise SystemExit(main())
