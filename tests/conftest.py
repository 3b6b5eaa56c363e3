"""
Pytest configuration and shared fixtures for listycity tests.

This module provides test fixtures for:
- In-memory city store (with failure injection)
- A recording ScreenView that captures renders, toasts and dialogs
- Controller factory wired to both
"""

from typing import Callable, List, Optional, Sequence, Tuple

import pytest

from listycity.application.controllers.city_list_controller import CityListController
from listycity.constants import INVALID_POSITION
from listycity.domain.entities.city import City
from listycity.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore
from listycity.ui.gestures import MotionAction, MotionEvent


ROW_HEIGHT_PX = 50


# ==============================================================================
# FAKE VIEW
# ==============================================================================

class RecordingScreenView:
    """ScreenView that records every call instead of drawing."""

    def __init__(self, row_height: float = ROW_HEIGHT_PX):
        self.row_height = row_height
        self.renders: List[List[City]] = []
        self.toasts: List[str] = []
        self.dialogs: List[Tuple[object, str]] = []
        self.options: List[Tuple[str, Sequence[str], Callable[[int], None]]] = []
        self.confirmations: List[Tuple[str, str, str, Callable[[], None]]] = []
        self.disallow_requests: List[bool] = []

    def render_rows(self, rows):
        self.renders.append(list(rows))

    def show_toast(self, message):
        self.toasts.append(message)

    def show_city_dialog(self, dialog, tag):
        self.dialogs.append((dialog, tag))

    def show_options(self, title, options, on_select):
        self.options.append((title, options, on_select))

    def show_confirmation(self, title, message, positive_label, on_confirm):
        self.confirmations.append((title, message, positive_label, on_confirm))

    def point_to_position(self, x, y):
        if y < 0 or not self.renders:
            return INVALID_POSITION
        position = int(y // self.row_height)
        return position if position < len(self.renders[-1]) else INVALID_POSITION

    def request_disallow_intercept_touch_event(self, disallow):
        self.disallow_requests.append(disallow)

    @property
    def last_rows(self) -> List[City]:
        return self.renders[-1] if self.renders else []


# ==============================================================================
# FIXTURES
# ==============================================================================

@pytest.fixture
def store() -> InMemoryCityStore:
    """Empty in-memory cities collection."""
    return InMemoryCityStore()


@pytest.fixture
def seeded_store() -> InMemoryCityStore:
    """Collection with three cities (yielded in key order)."""
    return InMemoryCityStore({
        "Calgary": {"name": "Calgary", "province": "AB"},
        "Edmonton": {"name": "Edmonton", "province": "AB"},
        "Vancouver": {"name": "Vancouver", "province": "BC"},
    })


@pytest.fixture
def view() -> RecordingScreenView:
    return RecordingScreenView()


@pytest.fixture
def make_controller(view) -> Callable[..., CityListController]:
    """Build a started controller over the given store."""
    def _make(store: InMemoryCityStore, start: bool = True) -> CityListController:
        controller = CityListController(store, view, swipe_threshold_px=200, max_vertical_slop=100)
        if start:
            controller.start()
        return controller
    return _make


# ==============================================================================
# HELPERS
# ==============================================================================

def row_y(position: int) -> float:
    """Vertical centre of a row in the recording view."""
    return position * ROW_HEIGHT_PX + ROW_HEIGHT_PX / 2


def swipe(controller: CityListController, position: int, dx: float, dy: float = 0.0,
          start_x: float = 300.0) -> Tuple[bool, bool, bool]:
    """Press on a row, move by (dx, dy), release. Returns each event's consumed flag."""
    y = row_y(position)
    down = controller.on_touch(MotionEvent(MotionAction.DOWN, start_x, y))
    move = controller.on_touch(MotionEvent(MotionAction.MOVE, start_x + dx, y + dy))
    up = controller.on_touch(MotionEvent(MotionAction.UP, start_x + dx, y + dy))
    return down, move, up


def city(name: str, province: Optional[str] = "") -> City:
    return City(name=name, province=province)


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
