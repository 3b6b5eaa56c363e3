"""Binds the controller's city cache to the list view."""
from typing import List

from listycity.application.ports.screen import ScreenView
from listycity.domain.entities.city import City


class CityListAdapter:
    """Renders each cached city as a (name, province) row.

    Holds a reference to the controller's list, never a copy, so a
    re-render always reflects the latest rebuild.
    """

    def __init__(self, view: ScreenView, cities: List[City]):
        self._view = view
        self._cities = cities
        self.render_count = 0

    def get_count(self) -> int:
        return len(self._cities)

    def get_item(self, position: int) -> City:
        return self._cities[position]

    def notify_data_set_changed(self) -> None:
        self.render_count += 1
        self._view.render_rows(list(self._cities))
