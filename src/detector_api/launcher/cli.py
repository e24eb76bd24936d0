from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from pydantic import BaseModel

from detector_api.client import DetectorClient
from detector_api.config.settings import ClientConfig, get_settings
from detector_api.observability.logging import configure_logging
from detector_api.transport.errors import APIError, DecodeError, TransportError

EXIT_OK = 0
EXIT_API_ERROR = 1
EXIT_TRANSPORT_ERROR = 2
EXIT_DECODE_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="detector-api",
        description="Query and manage detectors and incidents",
    )
    parser.add_argument("--api-url", help="API base URL (default: DETECTOR_API_API_URL)")
    parser.add_argument("--token", help="Auth token (default: DETECTOR_API_AUTH_TOKEN)")
    parser.add_argument("--timeout", type=float, help="Per-call deadline in seconds")
    parser.add_argument("--log-level", help="Logging level (default: DETECTOR_API_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    get_detector = sub.add_parser("get-detector", help="Show one detector")
    get_detector.add_argument("detector_id")

    list_detectors = sub.add_parser("list-detectors", help="List or search detectors")
    list_detectors.add_argument("--limit", type=int, default=50)
    list_detectors.add_argument("--offset", type=int, default=0)
    list_detectors.add_argument("--name")
    list_detectors.add_argument("--tags")

    events = sub.add_parser("detector-events", help="List events for a detector")
    events.add_argument("detector_id")
    events.add_argument("--from", dest="start", type=int)
    events.add_argument("--to", dest="end", type=int)
    events.add_argument("--limit", type=int, default=50)
    events.add_argument("--offset", type=int, default=0)

    incidents = sub.add_parser("detector-incidents", help="List incidents for a detector")
    incidents.add_argument("detector_id")
    incidents.add_argument("--limit", type=int, default=50)
    incidents.add_argument("--offset", type=int, default=0)

    get_incident = sub.add_parser("get-incident", help="Show one incident")
    get_incident.add_argument("incident_id")

    list_incidents = sub.add_parser("list-incidents", help="List incidents")
    list_incidents.add_argument("--include-resolved", action="store_true")
    list_incidents.add_argument("--query")
    list_incidents.add_argument("--limit", type=int, default=50)
    list_incidents.add_argument("--offset", type=int, default=0)

    delete = sub.add_parser("delete-detector", help="Delete a detector")
    delete.add_argument("detector_id")

    for name, verb in (("enable-detector", "Enable"), ("disable-detector", "Disable")):
        toggle = sub.add_parser(name, help=f"{verb} detector rules by label")
        toggle.add_argument("detector_id")
        toggle.add_argument("labels", nargs="*")

    return parser


async def run_command(client: DetectorClient, args: argparse.Namespace) -> Any:
    timeout = args.timeout
    command = args.command
    if command == "get-detector":
        return await client.get_detector(args.detector_id, timeout=timeout)
    if command == "list-detectors":
        return await client.search_detectors(
            limit=args.limit, name=args.name, offset=args.offset, tags=args.tags, timeout=timeout
        )
    if command == "detector-events":
        return await client.get_detector_events(
            args.detector_id, start=args.start, end=args.end, offset=args.offset, limit=args.limit, timeout=timeout
        )
    if command == "detector-incidents":
        return await client.get_detector_incidents(
            args.detector_id, offset=args.offset, limit=args.limit, timeout=timeout
        )
    if command == "get-incident":
        return await client.get_incident(args.incident_id, timeout=timeout)
    if command == "list-incidents":
        return await client.get_incidents(
            include_resolved=args.include_resolved,
            limit=args.limit,
            query=args.query,
            offset=args.offset,
            timeout=timeout,
        )
    if command == "delete-detector":
        return await client.delete_detector(args.detector_id, timeout=timeout)
    if command == "enable-detector":
        return await client.enable_detector(args.detector_id, args.labels, timeout=timeout)
    if command == "disable-detector":
        return await client.disable_detector(args.detector_id, args.labels, timeout=timeout)
    raise ValueError(f"unknown command: {command}")


async def _execute(config: ClientConfig, args: argparse.Namespace) -> Any:
    async with DetectorClient(config) as client:
        return await run_command(client, args)


def _to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(result, list):
        return [_to_jsonable(item) for item in result]
    return result


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)
    config = ClientConfig.from_settings(settings, base_url=args.api_url, auth_token=args.token)

    try:
        result = asyncio.run(_execute(config, args))
    except APIError as exc:
        print(f"API error {exc.status_code}: {exc.message or exc.text}", file=sys.stderr)
        return EXIT_API_ERROR
    except TransportError as exc:
        print(f"Transport error: {exc}", file=sys.stderr)
        return EXIT_TRANSPORT_ERROR
    except DecodeError as exc:
        print(f"Unexpected response: {exc}", file=sys.stderr)
        return EXIT_DECODE_ERROR

    if result is not None:
        print(json.dumps(_to_jsonable(result), indent=2))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
