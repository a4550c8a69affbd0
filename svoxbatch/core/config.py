from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_ENTRY_URL = "http://0.0.0.0:8080/site/playground.html"


def _parse_int(val: str | None, default: int) -> int:
    if val is None or str(val).strip() == "":
        return default
    try:
        return int(str(val).strip())
    except ValueError:
        return default


def _parse_bool(val: str | None, default: bool) -> bool:
    if val is None or str(val).strip() == "":
        return default
    s = str(val).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off"):
        return False
    return default


def _parse_ext(val: str | None, default: str) -> str:
    s = (val or "").strip()
    if not s:
        return default
    return s if s.startswith(".") else f".{s}"


@dataclass(frozen=True)
class Config:
    """Centralized configuration derived from environment variables.

    The CLI layers its flags on top of this with ``dataclasses.replace`` so the
    driver only ever sees one typed object.
    """

    entry_url: str
    wait_timeout_ms: int
    poll_interval_ms: int
    nav_timeout_ms: int
    probe_timeout_sec: int
    probe: bool
    strict: bool
    headless: bool
    clear_editor: bool
    source_ext: str
    target_ext: str

    log_dir: Optional[Path]
    site_root: Path
    server_host: str
    server_port: int

    @property
    def wait_timeout(self) -> float:
        return max(0, self.wait_timeout_ms) / 1000.0

    @property
    def poll_interval(self) -> float:
        return max(1, self.poll_interval_ms) / 1000.0

    @property
    def log_path(self) -> Optional[Path]:
        return (self.log_dir / "svox-batch.log") if self.log_dir else None

    @staticmethod
    def from_env() -> "Config":
        entry_url = os.environ.get("SVOX_ENTRY_URL", "").strip() or DEFAULT_ENTRY_URL

        log_raw = os.environ.get("LOG_DIR", "").strip()
        log_dir = Path(log_raw).resolve() if log_raw else None
        site_root = Path(os.environ.get("SITE_ROOT", "site")).resolve()

        return Config(
            entry_url=entry_url,
            wait_timeout_ms=_parse_int(os.environ.get("SVOX_WAIT_TIMEOUT_MS"), 2000),
            poll_interval_ms=_parse_int(os.environ.get("SVOX_POLL_INTERVAL_MS"), 50),
            nav_timeout_ms=_parse_int(os.environ.get("SVOX_NAV_TIMEOUT_MS"), 30000),
            probe_timeout_sec=_parse_int(os.environ.get("SVOX_PROBE_TIMEOUT_SEC"), 10),
            probe=_parse_bool(os.environ.get("SVOX_PROBE"), True),
            strict=_parse_bool(os.environ.get("SVOX_STRICT"), False),
            headless=_parse_bool(os.environ.get("SVOX_HEADLESS"), True),
            clear_editor=_parse_bool(os.environ.get("SVOX_CLEAR_EDITOR"), True),
            source_ext=_parse_ext(os.environ.get("SVOX_SOURCE_EXT"), ".vox"),
            target_ext=_parse_ext(os.environ.get("SVOX_TARGET_EXT"), ".svox"),
            log_dir=log_dir,
            site_root=site_root,
            server_host=os.environ.get("SERVER_HOST", "").strip() or "0.0.0.0",
            server_port=_parse_int(os.environ.get("SERVER_PORT"), 8080),
        )

    def as_dict(self) -> dict:
        return {
            "entry_url": self.entry_url,
            "wait_timeout_ms": self.wait_timeout_ms,
            "poll_interval_ms": self.poll_interval_ms,
            "nav_timeout_ms": self.nav_timeout_ms,
            "probe_timeout_sec": self.probe_timeout_sec,
            "probe": self.probe,
            "strict": self.strict,
            "headless": self.headless,
            "clear_editor": self.clear_editor,
            "source_ext": self.source_ext,
            "target_ext": self.target_ext,
            "log_dir": str(self.log_dir) if self.log_dir else None,
            "site_root": str(self.site_root),
            "server_host": self.server_host,
            "server_port": self.server_port,
        }


def get_config() -> Config:
    """Return a process-wide singleton Config instance."""
    global _CONFIG_SINGLETON
    try:
        cfg = _CONFIG_SINGLETON  # type: ignore[name-defined]
    except NameError:
        _CONFIG_SINGLETON = Config.from_env()  # type: ignore[assignment]
        cfg = _CONFIG_SINGLETON
    return cfg  # type: ignore[return-value]
