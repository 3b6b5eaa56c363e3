"""Main screen controller: city list backed by a live remote collection.

The remote store is the source of truth. Every mutation goes to the store,
and the in-memory list is only ever rebuilt from the next snapshot push;
nothing here edits ``cities`` speculatively.

All entry points run on the event loop thread. Synchronous UI callbacks
(touch, chooser, confirmation) schedule store calls as tasks; dialog
completions are coroutines that return an OperationResult.
"""
import asyncio
import logging
from typing import Awaitable, List, Optional, Set

from listycity.application.dto.operation_result import OperationResult
from listycity.application.ports.screen import ScreenView
from listycity.config import settings
from listycity.constants import (
    CITY_OPTIONS,
    DELETE_BUTTON_LABEL,
    DELETE_DIALOG_TITLE,
    DIALOG_TAG_ADD,
    DIALOG_TAG_EDIT,
    MSG_CITY_DELETED,
    MSG_DELETE_PROMPT,
    MSG_EMPTY_CITY_NAME,
    OPTION_DELETE,
    OPTION_EDIT,
)
from listycity.domain.entities.city import City, safe_trim
from listycity.domain.repositories.city_store import CityStore, CollectionSnapshot, Subscription
from listycity.ui.city_dialog import CityDialog
from listycity.ui.city_list_adapter import CityListAdapter
from listycity.ui.gestures import MotionAction, MotionEvent, SwipeGestureDetector

logger = logging.getLogger(__name__)


class CityListController:
    """Orchestrates the city list screen.

    Owns the city cache, the store subscription and the swipe detector, and
    implements the dialog listener (add_city / update_city).
    """

    def __init__(
        self,
        store: CityStore,
        view: ScreenView,
        swipe_threshold_px: Optional[float] = None,
        max_vertical_slop: Optional[float] = None,
    ):
        self._store = store
        self._view = view
        self.cities: List[City] = []
        self.adapter = CityListAdapter(view, self.cities)
        self.gesture = SwipeGestureDetector(
            swipe_threshold_px=settings.SWIPE_THRESHOLD_PX if swipe_threshold_px is None else swipe_threshold_px,
            max_vertical_slop=settings.MAX_VERTICAL_SLOP if max_vertical_slop is None else max_vertical_slop,
        )
        self._subscription: Optional[Subscription] = None
        self._tasks: Set[asyncio.Task] = set()
        self._finished: List[OperationResult] = []

    # ==========================================================================
    # LIFECYCLE
    # ==========================================================================

    def start(self) -> None:
        """Open the live subscription. No-op if already started."""
        if self._subscription is not None:
            return
        self._subscription = self._store.subscribe(self.on_snapshot)

    def stop(self) -> None:
        """Close the subscription. In-flight writes are left to finish."""
        if self._subscription is None:
            return
        self._subscription.unsubscribe()
        self._subscription = None

    @property
    def is_started(self) -> bool:
        return self._subscription is not None

    async def drain(self) -> List[OperationResult]:
        """Wait for every scheduled store call to finish.

        Returns the results of the calls that finished since the last drain.
        """
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                break
            await asyncio.gather(*pending, return_exceptions=True)
        finished, self._finished = self._finished, []
        return finished

    def on_snapshot(self, snapshot: CollectionSnapshot) -> None:
        """Rebuild the cache from a full-collection push."""
        if snapshot.is_error:
            logger.error(f"Snapshot listener error: {snapshot.error}")
            return

        self.cities.clear()
        for document in snapshot:
            self.cities.append(document.to_city())
        self.adapter.notify_data_set_changed()

    # ==========================================================================
    # UI ENTRY POINTS
    # ==========================================================================

    def on_add_clicked(self) -> CityDialog:
        dialog = CityDialog(self)
        self._view.show_city_dialog(dialog, DIALOG_TAG_ADD)
        return dialog

    def on_item_click(self, position: int) -> None:
        if position < 0 or position >= self.adapter.get_count():
            return

        clicked_city = self.adapter.get_item(position)

        def on_select(which: int) -> None:
            option = CITY_OPTIONS[which] if 0 <= which < len(CITY_OPTIONS) else None
            if option == OPTION_EDIT:
                self._view.show_city_dialog(CityDialog.new_instance(self, clicked_city), DIALOG_TAG_EDIT)
            elif option == OPTION_DELETE:
                self.confirm_and_delete(clicked_city)

        self._view.show_options(clicked_city.label, CITY_OPTIONS, on_select)

    def confirm_and_delete(self, city: Optional[City]) -> None:
        if city is None:
            return

        self._view.show_confirmation(
            DELETE_DIALOG_TITLE,
            MSG_DELETE_PROMPT.format(name=city.name, province=city.province),
            DELETE_BUTTON_LABEL,
            lambda: self._spawn(self.delete_city(city)),
        )

    def on_touch(self, event: MotionEvent) -> bool:
        """Swipe-to-delete. Returns True when the event is consumed."""
        gesture = self.gesture

        if event.action == MotionAction.DOWN:
            position = self._view.point_to_position(event.x, event.y)
            pressed = self.adapter.get_item(position) if 0 <= position < self.adapter.get_count() else None
            gesture.press(event.x, event.y, position, pressed)

        elif event.action == MotionAction.MOVE:
            if gesture.move(event.x, event.y):
                # Keep the scroll container from turning the drag into a scroll
                self._view.request_disallow_intercept_touch_event(True)

        elif event.action == MotionAction.UP:
            consumed = gesture.swiping and gesture.has_valid_position
            gesture.release()
            if consumed:
                city = self._swiped_city()
                if city is not None:
                    self._spawn(self.delete_city(city))
                    self._view.show_toast(MSG_CITY_DELETED.format(name=city.name))
                return True

        elif event.action == MotionAction.CANCEL:
            gesture.cancel()

        return False

    def _swiped_city(self) -> Optional[City]:
        """Resolve the pressed row against the live cache.

        The cache may have been rebuilt between press and release. The row
        at down_pos is used only if it still holds the city that was
        pressed; if that city moved, it is found by value; if it is gone,
        nothing is deleted.
        """
        position = self.gesture.down_pos
        pressed = self.gesture.down_city

        if 0 <= position < self.adapter.get_count():
            current = self.adapter.get_item(position)
            if pressed is None or current == pressed:
                return current
        if pressed is not None and pressed in self.cities:
            logger.debug(f"Swiped city '{pressed.name}' moved since press; deleting by value")
            return pressed
        logger.debug(f"Swiped row {position} no longer matches the pressed city; ignoring")
        return None

    # ==========================================================================
    # DIALOG LISTENER
    # ==========================================================================

    async def add_city(self, city: Optional[City]) -> OperationResult:
        if city is None:
            return OperationResult.skipped("add")

        cleaned = city.cleaned()
        if not cleaned.is_valid():
            self._view.show_toast(MSG_EMPTY_CITY_NAME)
            return OperationResult.invalid("add")

        return await self._write("add", cleaned.document_key, self._store.set(cleaned.document_key, cleaned))

    async def update_city(
        self,
        city: Optional[City],
        new_name: Optional[str],
        new_province: Optional[str],
    ) -> OperationResult:
        if city is None:
            return OperationResult.skipped("update")

        old_name = safe_trim(city.name)
        updated = City(name=safe_trim(new_name), province=safe_trim(new_province))

        if not updated.is_valid():
            self._view.show_toast(MSG_EMPTY_CITY_NAME)
            return OperationResult.invalid("update", old_name)

        # Same document key: overwrite in place
        if old_name == updated.name:
            return await self._write("update", old_name, self._store.set(old_name, updated))

        return await self._rename_city(City(name=old_name, province=city.province), updated)

    async def _rename_city(self, original: City, updated: City) -> OperationResult:
        """Move a city to a new document key: delete old, then create new.

        Not atomic. The create is attempted only after the delete succeeded.
        If the create then fails, the original document is written back so
        the city does not vanish; if that also fails the city is missing
        from the store until someone re-adds it.
        """
        old_key = original.name
        new_key = updated.name

        deleted = await self._write("rename", old_key, self._store.delete(old_key))
        if not deleted.ok:
            return deleted

        created = await self._write("rename", new_key, self._store.set(new_key, updated))
        if created.ok:
            return created

        restored = await self._write("restore", old_key, self._store.set(old_key, original))
        if not restored.ok:
            logger.error(f"City '{old_key}' lost during rename to '{new_key}'")
        return created

    async def delete_city(self, city: Optional[City]) -> OperationResult:
        if city is None:
            return OperationResult.skipped("delete")

        name = safe_trim(city.name)
        if not name:
            return OperationResult.skipped("delete")

        # The cache is left alone; the next push removes the row
        return await self._write("delete", name, self._store.delete(name))

    # ==========================================================================
    # INTERNALS
    # ==========================================================================

    async def _write(self, operation: str, key: str, call: Awaitable[None]) -> OperationResult:
        """Await one store call, logging instead of raising on failure."""
        try:
            await call
        except Exception as e:
            logger.error(f"{operation.capitalize()} failed for '{key}': {e}")
            return OperationResult.failed(operation, key, e)
        return OperationResult.success(operation, key)

    def _spawn(self, coro: Awaitable[OperationResult]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        if task.exception() is not None:
            logger.error(f"Store task failed: {task.exception()}")
            return
        self._finished.append(task.result())
