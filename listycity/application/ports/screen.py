"""Screen interfaces the controller drives (SOLID-friendly).

Each view implementation owns its rendering technology; the controller only
talks to these protocols.
"""
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence

from listycity.domain.entities.city import City


class CityRow(Protocol):
    name: str
    province: str


class CityDialogListener(Protocol):
    async def add_city(self, city: Optional[City]) -> object:
        """Create-mode completion with raw (untrimmed) fields."""

    async def update_city(self, city: Optional[City], new_name: Optional[str], new_province: Optional[str]) -> object:
        """Edit-mode completion with raw (untrimmed) fields."""


class ScreenView(Protocol):
    def render_rows(self, rows: List[CityRow]) -> None:
        """Redraw the whole list."""

    def show_toast(self, message: str) -> None:
        """Transient notification."""

    def show_city_dialog(self, dialog: "CityDialogHandle", tag: str) -> None:
        """Present the create/edit form. The view calls dialog.submit() or dialog.dismiss()."""

    def show_options(self, title: str, options: Sequence[str], on_select: Callable[[int], None]) -> None:
        """Chooser with a Cancel button; on_select gets the option index."""

    def show_confirmation(self, title: str, message: str, positive_label: str, on_confirm: Callable[[], None]) -> None:
        """Yes/no dialog; on_confirm runs only for the positive button."""

    def point_to_position(self, x: float, y: float) -> int:
        """Row index under a point, or INVALID_POSITION."""

    def request_disallow_intercept_touch_event(self, disallow: bool) -> None:
        """Ask the scroll container to stop stealing the current gesture."""


class CityDialogHandle(Protocol):
    city: Optional[City]

    @property
    def is_edit_mode(self) -> bool:
        """True when seeded from an existing city."""

    def submit(self, name: Optional[str], province: Optional[str]) -> Awaitable[object]:
        """Confirm the form."""

    def dismiss(self) -> None:
        """Close without reporting."""
