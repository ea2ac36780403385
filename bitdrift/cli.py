#!/usr/bin/env python3
"""bit CLI: capture baselines and check JSON data for behavioral drift.

This is the installable CLI entrypoint (console_scripts).

Subcommands:
- bit capture   → Store a JSON document as the baseline for a key
- bit monitor   → Report MATCH/DRIFT against the baseline
- bit detect    → Print a unified diff between baseline and current data
- bit details   → Print a JSON drift report (summary + per-field details)
- bit show      → Print the stored baseline for a key
- bit list      → List captured baseline keys
- bit about     → Print package identity and baseline directory info

Exit codes:
- 0: success / no drift
- 1: drift detected
- 3: usage/internal error (including a missing baseline)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from importlib.metadata import PackageNotFoundError, metadata, version
from pathlib import Path
from typing import Any

from bitdrift.config import Settings, load_settings
from bitdrift.core.diff_render import BASELINE_HEADER, CURRENT_HEADER
from bitdrift.core.json_pretty import dumps_tree, tree_sha256
from bitdrift.profiler import Stopwatch
from bitdrift.service import DriftService
from bitdrift.store import BaselineNotFound, FileBaselineStore


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )


def _read_input(path_arg: str) -> Any:
    if path_arg == "-":
        return json.loads(sys.stdin.read())
    return json.loads(Path(path_arg).read_text(encoding="utf-8", errors="strict"))


def _service(settings: Settings) -> DriftService:
    return DriftService(FileBaselineStore(settings.baseline_dir))


def _print_timings(label: str, stopwatch: Stopwatch) -> None:
    for name, elapsed in stopwatch.all_elapsed().items():
        print(f"[{label}] timing: {name} {elapsed:.6f}s", file=sys.stderr)


def _run(args: argparse.Namespace, label: str, op) -> int:
    """Run op(service, data, stopwatch) with the shared error boundary."""

    settings = load_settings(root=args.root, verbose=bool(args.verbose))
    setup_logging(settings.log_level)
    stopwatch = Stopwatch()
    try:
        data = None
        if getattr(args, "input", None) is not None:
            stopwatch.start("read-input")
            data = _read_input(str(args.input))
            stopwatch.stop("read-input")
        rc = op(_service(settings), data, stopwatch)
    except BaselineNotFound as e:
        print(f"[{label}] ERROR: {e}", file=sys.stderr)
        print(f"[{label}] Remediation: run `bit capture --key {e.key} --in <file>` first.", file=sys.stderr)
        return 3
    except Exception as e:
        print(f"[{label}] ERROR: {e}", file=sys.stderr)
        return 3

    if args.timings:
        _print_timings(label, stopwatch)
    return rc


# ---------------------------------------------------------------------------
# subcommands
# ---------------------------------------------------------------------------

def cmd_capture(args: argparse.Namespace) -> int:
    def op(service: DriftService, data: Any, stopwatch: Stopwatch) -> int:
        stopwatch.start("capture")
        service.capture(args.key, data)
        stopwatch.stop("capture")
        print(f"[bit capture] wrote: {args.key}", file=sys.stderr)
        print(f"[bit capture] sha256: {tree_sha256(data)}", file=sys.stderr)
        return 0

    return _run(args, "bit capture", op)


def cmd_monitor(args: argparse.Namespace) -> int:
    def op(service: DriftService, data: Any, stopwatch: Stopwatch) -> int:
        stopwatch.start("monitor")
        matches = service.monitor(args.key, data)
        stopwatch.stop("monitor")
        print("MATCH" if matches else "DRIFT")
        return 0 if matches else 1

    return _run(args, "bit monitor", op)


def cmd_detect(args: argparse.Namespace) -> int:
    def op(service: DriftService, data: Any, stopwatch: Stopwatch) -> int:
        stopwatch.start("detect")
        result = service.detect_drift(args.key, data)
        stopwatch.stop("detect")
        if not result.drift_detected:
            print("No drift detected.")
            return 0
        sys.stdout.write(result.diff or "")
        return 1

    return _run(args, "bit detect", op)


def cmd_details(args: argparse.Namespace) -> int:
    def op(service: DriftService, data: Any, stopwatch: Stopwatch) -> int:
        stopwatch.start("details")
        report = service.get_drift_details(args.key, data, qualified=bool(args.paths))
        stopwatch.stop("details")
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        return 1 if report.drift_detected else 0

    return _run(args, "bit details", op)


def cmd_show(args: argparse.Namespace) -> int:
    def op(service: DriftService, _: Any, stopwatch: Stopwatch) -> int:
        print(dumps_tree(service.baseline(args.key)))
        return 0

    return _run(args, "bit show", op)


def cmd_list(args: argparse.Namespace) -> int:
    def op(service: DriftService, _: Any, stopwatch: Stopwatch) -> int:
        for key in service.keys():
            print(key)
        return 0

    return _run(args, "bit list", op)


def cmd_about(args: argparse.Namespace) -> int:
    """Print package identity and the baseline directory in effect."""

    try:
        meta = metadata("bitdrift")
        identity = f"{meta.get('Name') or 'bitdrift'} {version('bitdrift')}"
        summary = str(meta.get("Summary") or "")
    except PackageNotFoundError:
        identity, summary = "bitdrift 0.0.0", ""

    print(identity)
    if summary:
        print(summary)

    settings = load_settings(root=args.root)
    captured = FileBaselineStore(settings.baseline_dir).keys()
    print(f"Baselines: {settings.baseline_dir} ({len(captured)} captured)")
    print(f"Diff headers: {BASELINE_HEADER} / {CURRENT_HEADER}")
    return 0


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--root", default=None, help="Baseline directory (default: $BIT_BASELINE_DIR or ./storage/baselines)")
    common.add_argument("--verbose", action="store_true", help="Debug logging on stderr")
    common.add_argument("--timings", action="store_true", help="Print elapsed times on stderr")

    parser = argparse.ArgumentParser(
        prog="bit",
        description="bit CLI: behavioral drift detection against captured baselines",
    )
    subparsers = parser.add_subparsers(dest="command", help="Subcommand")

    # about
    p_about = subparsers.add_parser("about", help="Print package identity and baseline directory info")
    p_about.add_argument("--root", default=None, help="Baseline directory (default: $BIT_BASELINE_DIR or ./storage/baselines)")

    # capture
    p_capture = subparsers.add_parser("capture", parents=[common], help="Store JSON data as the baseline for a key")
    p_capture.add_argument("--key", required=True, help="Baseline key (e.g. api-response-shape)")
    p_capture.add_argument("--in", dest="input", required=True, help="JSON input file ('-' for stdin)")
    p_capture.set_defaults(func=cmd_capture)

    # monitor / detect / details
    for name, func, help_text in (
        ("monitor", cmd_monitor, "Print MATCH or DRIFT for JSON data against its baseline"),
        ("detect", cmd_detect, "Print a unified diff between the baseline and JSON data"),
        ("details", cmd_details, "Print a JSON drift report for JSON data against its baseline"),
    ):
        p = subparsers.add_parser(name, parents=[common], help=help_text)
        p.add_argument("--key", required=True, help="Baseline key")
        p.add_argument("--in", dest="input", required=True, help="JSON input file ('-' for stdin)")
        if name == "details":
            p.add_argument("--paths", action="store_true", help="Report dotted field paths instead of local names")
        p.set_defaults(func=func)

    # show
    p_show = subparsers.add_parser("show", parents=[common], help="Print the stored baseline for a key")
    p_show.add_argument("--key", required=True, help="Baseline key")
    p_show.set_defaults(func=cmd_show)

    # list
    p_list = subparsers.add_parser("list", parents=[common], help="List captured baseline keys")
    p_list.set_defaults(func=cmd_list)

    args = parser.parse_args(argv)

    if args.command == "about":
        return cmd_about(args)
    if args.command is None:
        parser.print_help()
        return 3
    return int(args.func(args))


if __name__ == "__main__":
    sys.exit(main())
