from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional, Sequence

from svoxbatch.core.config import Config, get_config
from svoxbatch.core.logging import log_exception, log_info
from svoxbatch.core.storage import atomic_write_json
from svoxbatch.services.batch import BatchDriver
from svoxbatch.services.session import ConversionSession

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_SKIPPED = 3


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="svox-batch",
        description="Convert every .vox under INPUT_DIR to .svox under OUTPUT_DIR via the SVOX playground.",
    )
    ap.add_argument("input_dir", help="Directory searched recursively for .vox files")
    ap.add_argument("output_dir", help="Directory receiving the mirrored .svox tree")
    ap.add_argument("--entry-url", help="Playground URL (default: SVOX_ENTRY_URL or http://0.0.0.0:8080/site/playground.html)")
    ap.add_argument("--timeout-ms", type=int, help="Per-file wait for editor content (default 2000)")
    ap.add_argument("--poll-ms", type=int, help="Poll interval while waiting (default 50)")
    ap.add_argument("--strict", action="store_true", help="Exit non-zero if any file was skipped")
    ap.add_argument("--headed", action="store_true", help="Show the browser window")
    ap.add_argument("--no-probe", action="store_true", help="Do not check the entry URL over HTTP first")
    ap.add_argument("--report", help="Write a JSON run report to this path")
    ap.add_argument("--log-file", help="Also append log lines to this file")
    return ap


def config_from_args(args: argparse.Namespace, base: Config) -> Config:
    changes: dict = {}
    if args.entry_url:
        changes["entry_url"] = args.entry_url
    if args.timeout_ms is not None:
        changes["wait_timeout_ms"] = args.timeout_ms
    if args.poll_ms is not None:
        changes["poll_interval_ms"] = args.poll_ms
    if args.strict:
        changes["strict"] = True
    if args.headed:
        changes["headless"] = False
    if args.no_probe:
        changes["probe"] = False
    return replace(base, **changes) if changes else base


def main(
    argv: Optional[Sequence[str]] = None,
    session_factory: Optional[Callable[[], ConversionSession]] = None,
) -> int:
    args = build_parser().parse_args(argv)
    cfg = config_from_args(args, get_config())

    driver = BatchDriver(cfg, session_factory=session_factory)
    if args.log_file:
        driver.log_path = Path(args.log_file).resolve()

    try:
        report = driver.run(Path(args.input_dir), Path(args.output_dir))
    except Exception as e:
        log_exception(driver.log_path, "An error occurred", e)
        return EXIT_FATAL

    if args.report:
        try:
            atomic_write_json(Path(args.report), report.model_dump())
        except OSError as e:
            log_exception(driver.log_path, "report_write_failed", e)
            return EXIT_FATAL

    if cfg.strict and report.skipped:
        log_info(driver.log_path, f"strict: {report.skipped} file(s) skipped")
        return EXIT_SKIPPED
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
