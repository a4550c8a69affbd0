from __future__ import annotations

import base64
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from svoxbatch.core.config import Config

conversion_results: List[Tuple[str, str, str]] = []

ENV_KEYS = [
    "SVOX_ENTRY_URL",
    "SVOX_WAIT_TIMEOUT_MS",
    "SVOX_POLL_INTERVAL_MS",
    "SVOX_NAV_TIMEOUT_MS",
    "SVOX_PROBE_TIMEOUT_SEC",
    "SVOX_PROBE",
    "SVOX_STRICT",
    "SVOX_HEADLESS",
    "SVOX_CLEAR_EDITOR",
    "SVOX_SOURCE_EXT",
    "SVOX_TARGET_EXT",
    "LOG_DIR",
    "SITE_ROOT",
    "SERVER_HOST",
    "SERVER_PORT",
]


class FakeClock:
    """Monotonic clock whose sleep() just advances time."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeSession:
    """In-memory stand-in for the playground page.

    ``convert`` maps the decoded voxel bytes to editor text, or None when the
    page never produces content. ``ready_after`` delays the content by that
    many read_result() calls.
    """

    def __init__(
        self,
        convert: Callable[[bytes], Optional[str]],
        ready_after: int = 0,
        fail_navigate: bool = False,
        fail_close: bool = False,
    ) -> None:
        self.convert = convert
        self.ready_after = ready_after
        self.fail_navigate = fail_navigate
        self.fail_close = fail_close
        self.opened = False
        self.closed = False
        self.url: Optional[str] = None
        self.loads: List[bytes] = []
        self.dismissed = 0
        self.last_dialog: Optional[str] = None
        self._pending: Optional[str] = None
        self._reads = 0
        self._value = ""

    def open(self) -> None:
        self.opened = True

    def navigate(self, url: str) -> None:
        if self.fail_navigate:
            raise ConnectionError(f"cannot reach {url}")
        self.url = url

    def load_buffer(self, b64: str) -> None:
        data = base64.b64decode(b64)
        self.loads.append(data)
        self._value = ""
        self._reads = 0
        self._pending = self.convert(data)
        if self._pending is None:
            self.last_dialog = "Unexpected file format"

    def read_result(self) -> str:
        self._reads += 1
        if self._pending is not None and self._reads > self.ready_after:
            self._value = self._pending
        return self._value

    def dismiss(self) -> None:
        self.dismissed += 1

    def close(self) -> None:
        self.closed = True
        if self.fail_close:
            raise RuntimeError("browser already gone")


@pytest.fixture()
def clean_env(monkeypatch):
    for k in ENV_KEYS:
        monkeypatch.delenv(k, raising=False)
    yield monkeypatch


@pytest.fixture()
def make_config(clean_env) -> Callable[..., Config]:
    def make(**overrides) -> Config:
        base = replace(Config.from_env(), probe=False)
        return replace(base, **overrides) if overrides else base

    return make


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fake_session_factory():
    """Build session factories; each keeps the sessions it made in `.sessions`."""

    def build(**kwargs):
        sessions: List[FakeSession] = []

        def make() -> FakeSession:
            s = FakeSession(**kwargs)
            sessions.append(s)
            return s

        make.sessions = sessions  # type: ignore[attr-defined]
        return make

    return build


@pytest.fixture(scope="module")
def report_results() -> List[Tuple[str, str, str]]:
    conversion_results.clear()
    yield conversion_results


def echo_convert(data: bytes) -> Optional[str]:
    """Pretend conversion: files starting with BAD never load."""
    if data.startswith(b"BAD"):
        return None
    return "size = 1\nvoxels\n" + data.decode("utf-8") + "\n"


def write_tree(root, files: Dict[str, bytes]) -> None:
    for rel, data in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    if not conversion_results:
        return
    terminalreporter.write_sep("-", "batch conversion outcomes")
    for status, source, target in conversion_results:
        terminalreporter.write_line(f"{status}: {source} -> {target}")
