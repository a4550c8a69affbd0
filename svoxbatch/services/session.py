"""Conversion sessions: the driver's only view of the playground page."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from playwright.sync_api import Browser, Dialog, Page, Playwright, sync_playwright

from svoxbatch.core.errors import SessionNotOpen
from svoxbatch.core.logging import console

_LOAD_JS = """
([b64, clear]) => {
  if (clear && typeof editor !== 'undefined') {
    editor.setValue('', -1);
  }
  window.loadMagicaVoxelFromBuffer(b64);
}
"""

_READ_JS = "() => (typeof editor === 'undefined') ? '' : editor.getValue()"


@runtime_checkable
class ConversionSession(Protocol):
    """One live connection to the conversion service, reused for a whole run."""

    def open(self) -> None: ...

    def navigate(self, url: str) -> None: ...

    def load_buffer(self, b64: str) -> None: ...

    def read_result(self) -> str: ...

    def dismiss(self) -> None: ...

    def close(self) -> None: ...


class PlaywrightSession:
    """Drives the SVOX playground in a Chromium page through Playwright's sync API.

    JavaScript dialogs raised by the page (the playground alerts on models it
    cannot read) are dismissed as they appear; the last message is kept in
    ``last_dialog`` so callers can report it.
    """

    def __init__(self, headless: bool = True, nav_timeout_ms: int = 30000, clear_editor: bool = True):
        self.headless = headless
        self.nav_timeout_ms = nav_timeout_ms
        self.clear_editor = clear_editor
        self.last_dialog: Optional[str] = None
        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise SessionNotOpen("session is not open")
        return self._page

    def open(self) -> None:
        self._pw = sync_playwright().start()
        self._browser = self._pw.chromium.launch(headless=self.headless, args=["--start-maximized"])
        self._page = self._browser.new_page(no_viewport=True)
        self._page.on("dialog", self._on_dialog)

    def navigate(self, url: str) -> None:
        self.page.goto(url, timeout=self.nav_timeout_ms)

    def load_buffer(self, b64: str) -> None:
        self.last_dialog = None
        self.page.evaluate(_LOAD_JS, [b64, self.clear_editor])

    def read_result(self) -> str:
        return self.page.evaluate(_READ_JS) or ""

    def dismiss(self) -> None:
        self.page.keyboard.press("Escape")

    def close(self) -> None:
        # Tear down whatever open() got as far as creating.
        browser, pw = self._browser, self._pw
        self._page = None
        self._browser = None
        self._pw = None
        try:
            if browser is not None:
                browser.close()
        finally:
            if pw is not None:
                pw.stop()

    def _on_dialog(self, dialog: Dialog) -> None:
        self.last_dialog = dialog.message
        console(f"page dialog: {dialog.message.splitlines()[0] if dialog.message else ''}")
        dialog.dismiss()
