"""Terminal implementation of ScreenView.

Dialogs cannot be interactive here, so the view is scripted: whoever builds
it decides up front which chooser option to pick, whether to confirm, and
what to type into the city form.
"""
import asyncio
import logging
import sys
from typing import Callable, List, Optional, Sequence, TextIO, Tuple

from listycity.application.ports.screen import CityDialogHandle, CityRow
from listycity.constants import INVALID_POSITION

logger = logging.getLogger(__name__)


class ConsoleScreenView:
    """Prints the list and toasts to a text stream."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        option: Optional[int] = None,
        confirm: bool = False,
        dialog_values: Optional[Tuple[str, str]] = None,
        row_height: float = 1.0,
    ):
        self.out = out or sys.stdout
        self.option = option
        self.confirm = confirm
        self.dialog_values = dialog_values
        self.row_height = row_height
        self.rows: List[CityRow] = []
        self.pending: List[asyncio.Task] = []
        self.rendered = asyncio.Event()

    def render_rows(self, rows: List[CityRow]) -> None:
        self.rows = list(rows)
        self.out.write(f"--- {len(self.rows)} cities ---\n")
        for index, row in enumerate(self.rows):
            self.out.write(f"{index:>3}  {row.name:<24} {row.province}\n")
        self.out.flush()
        self.rendered.set()

    def show_toast(self, message: str) -> None:
        self.out.write(f"* {message}\n")
        self.out.flush()

    def show_city_dialog(self, dialog: CityDialogHandle, tag: str) -> None:
        if self.dialog_values is None:
            logger.info(f"No values scripted for '{tag}' dialog; dismissing")
            dialog.dismiss()
            return
        name, province = self.dialog_values
        self.pending.append(asyncio.ensure_future(dialog.submit(name, province)))

    def show_options(self, title: str, options: Sequence[str], on_select: Callable[[int], None]) -> None:
        if self.option is None or not 0 <= self.option < len(options):
            logger.info(f"'{title}': cancelled")
            return
        logger.info(f"'{title}': {options[self.option]}")
        on_select(self.option)

    def show_confirmation(self, title: str, message: str, positive_label: str, on_confirm: Callable[[], None]) -> None:
        self.out.write(f"{title}: {message}\n")
        if self.confirm:
            on_confirm()

    def point_to_position(self, x: float, y: float) -> int:
        if y < 0 or self.row_height <= 0:
            return INVALID_POSITION
        position = int(y // self.row_height)
        return position if position < len(self.rows) else INVALID_POSITION

    def request_disallow_intercept_touch_event(self, disallow: bool) -> None:
        pass

    async def drain(self) -> list:
        """Wait for scripted dialog submissions and return their results."""
        results = await asyncio.gather(*self.pending) if self.pending else []
        self.pending.clear()
        return list(results)
