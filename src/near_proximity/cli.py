"""Command-line wrapper around the proximity window enumerator."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

import orjson
from pydantic import ValidationError

from near_proximity.benchmark import SCENARIOS, run_all, run_scenario
from near_proximity.config import Settings, get_settings
from near_proximity.models import WindowsRequest, enumerate_request
from near_proximity.observability import (
    ENUMERATION_LATENCY,
    KEYWORD_COUNT,
    WINDOWS_EMITTED,
    configure_logging,
    create_span,
    get_metrics,
    get_trace_context,
    init_metrics,
    init_tracing,
    set_trace_context,
    track_latency,
)


logger = logging.getLogger(__name__)


def build_argument_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="near-proximity",
        description="Enumerate term-proximity windows from keyword position lists",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Write Prometheus metrics to stderr when the command finishes",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    windows = subparsers.add_parser("windows", help="Enumerate windows for one document")
    windows.add_argument(
        "--input",
        type=Path,
        help="JSON request file (reads stdin when omitted)",
    )

    bench = subparsers.add_parser("bench", help="Run enumeration micro-benchmarks")
    bench.add_argument(
        "--scenario",
        choices=sorted(SCENARIOS),
        help="Run a single scenario (default: all)",
    )
    bench.add_argument(
        "--iterations",
        type=int,
        default=settings.bench_iterations,
        help=f"Iterations per scenario (default: {settings.bench_iterations})",
    )
    return parser


def _load_request(raw: bytes) -> WindowsRequest:
    payload = orjson.loads(raw)
    # A bare list of position lists is accepted as shorthand.
    if isinstance(payload, list):
        payload = {"keywords": payload}
    return WindowsRequest.model_validate(payload)


def _write_json(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload).decode("utf-8") + "\n")


def _run_windows(args: argparse.Namespace) -> int:
    try:
        raw = args.input.read_bytes() if args.input else sys.stdin.buffer.read()
        request = _load_request(raw)
    except OSError as exc:
        logger.error("Cannot read windows request: %s", exc)
        return 1
    except orjson.JSONDecodeError as exc:
        logger.error("Invalid JSON input: %s", exc)
        return 1
    except ValidationError as exc:
        logger.error("Invalid windows request: %s", exc)
        return 1

    KEYWORD_COUNT.labels(command="windows").observe(len(request.keywords))
    with track_latency(ENUMERATION_LATENCY, command="windows"):
        response = enumerate_request(request)
    WINDOWS_EMITTED.labels(command="windows").inc(response.window_count)

    _write_json(response.model_dump(exclude_none=True))
    return 0


def _run_bench(args: argparse.Namespace) -> int:
    if args.iterations < 1:
        logger.error("--iterations must be >= 1")
        return 1

    results = [run_scenario(args.scenario, args.iterations)] if args.scenario else run_all(args.iterations)
    for result in results:
        WINDOWS_EMITTED.labels(command="bench").inc(result.window_count)
        _write_json(result.to_dict())
    return 0


_COMMANDS = {
    "windows": _run_windows,
    "bench": _run_bench,
}


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(
        settings.log_level,
        settings.log_json,
        logger_levels=settings.logger_levels,
        stream=sys.stderr,
    )
    args = build_argument_parser(settings).parse_args(argv)

    init_metrics(service_name=settings.service_name)
    ctx = get_trace_context()
    set_trace_context(ctx["trace_id"], ctx["span_id"], command=args.command)

    handler = _COMMANDS[args.command]
    if settings.tracing_enabled:
        init_tracing(service_name=settings.service_name)
        with create_span(f"near_proximity.{args.command}", attributes={"cli.command": args.command}):
            exit_code = handler(args)
    else:
        exit_code = handler(args)

    if args.metrics:
        sys.stderr.write(get_metrics().decode("utf-8"))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
