from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Optional

from svoxbatch.core.config import Config
from svoxbatch.core.logging import log_error, log_exception, log_info
from svoxbatch.core.models import CONVERTED, SKIPPED, FileOutcome, RunReport
from svoxbatch.core.paths import derive_output_path, discover
from svoxbatch.core.proc import probe_entry_point
from svoxbatch.core.storage import encode_buffer, ensure_dir, write_text_crlf
from svoxbatch.core.wait import await_condition
from svoxbatch.services.session import ConversionSession, PlaywrightSession


def playwright_session_factory(cfg: Config) -> Callable[[], ConversionSession]:
    def make() -> ConversionSession:
        return PlaywrightSession(
            headless=cfg.headless,
            nav_timeout_ms=cfg.nav_timeout_ms,
            clear_editor=cfg.clear_editor,
        )

    return make


class BatchDriver:
    """Converts every source file under an input root, one at a time, through a single session."""

    def __init__(
        self,
        cfg: Config,
        session_factory: Optional[Callable[[], ConversionSession]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cfg = cfg
        self.session_factory = session_factory or playwright_session_factory(cfg)
        self.clock = clock
        self.sleep = sleep
        self.log_path = cfg.log_path

    def convert_one(self, file_path: Path, output_path: Path, session: ConversionSession) -> FileOutcome:
        started = self.clock()
        ensure_dir(output_path.parent)

        data = Path(file_path).read_bytes()
        session.load_buffer(encode_buffer(data))

        ready = await_condition(
            lambda: bool(session.read_result().strip()),
            timeout=self.cfg.wait_timeout,
            poll_interval=self.cfg.poll_interval,
            clock=self.clock,
            sleep=self.sleep,
        )
        if not ready:
            log_error(self.log_path, f"Timeout waiting for content in {file_path}.")
            dialog = getattr(session, "last_dialog", None)
            session.dismiss()
            return FileOutcome(
                input_path=str(file_path),
                output_path=str(output_path),
                status=SKIPPED,
                elapsed_sec=self.clock() - started,
                message=dialog or "timeout",
            )

        written = write_text_crlf(output_path, session.read_result())
        log_info(self.log_path, f"Editor content written to {output_path}")
        return FileOutcome(
            input_path=str(file_path),
            output_path=str(output_path),
            status=CONVERTED,
            bytes_written=written,
            elapsed_sec=self.clock() - started,
        )

    def run(self, input_root: Path, output_root: Path) -> RunReport:
        input_root = Path(input_root)
        output_root = Path(output_root)
        report = RunReport(
            input_root=str(input_root),
            output_root=str(output_root),
            entry_url=self.cfg.entry_url,
            start_time=time.time(),
        )

        if self.cfg.probe:
            probe_entry_point(self.cfg.entry_url, timeout=self.cfg.probe_timeout_sec)

        session = self.session_factory()
        try:
            session.open()
            session.navigate(self.cfg.entry_url)
            files = discover(input_root, self.cfg.source_ext)
            log_info(self.log_path, f"run start input={input_root} output={output_root} files={len(files)}")
            for file_path in files:
                out = derive_output_path(
                    input_root, output_root, file_path, self.cfg.source_ext, self.cfg.target_ext
                )
                report.outcomes.append(self.convert_one(file_path, out, session))
        finally:
            try:
                session.close()
            except Exception as e:
                log_exception(self.log_path, "session_close_failed", e)

        report.end_time = time.time()
        log_info(self.log_path, f"run done {report.summary()}")
        return report
