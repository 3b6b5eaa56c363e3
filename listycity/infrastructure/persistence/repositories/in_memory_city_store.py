"""In-memory implementation of CityStore for testing and local runs.
Follows Liskov Substitution Principle - can replace any CityStore."""
import logging
from typing import Dict, List, Optional, Tuple

from listycity.domain.entities.city import City
from listycity.domain.exceptions import CityStoreError
from listycity.domain.repositories.city_store import (
    CityStore,
    CollectionSnapshot,
    DocumentSnapshot,
    SnapshotListener,
    Subscription,
)

logger = logging.getLogger(__name__)


class _InMemorySubscription(Subscription):
    def __init__(self, store: "InMemoryCityStore", listener: SnapshotListener):
        self._store = store
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._store._remove(self)

    def deliver(self, snapshot: CollectionSnapshot) -> None:
        if self.active:
            self._listener(snapshot)


class InMemoryCityStore(CityStore):
    """In-memory cities collection.

    Snapshots are pushed synchronously to every listener after each
    successful mutation, and once on subscribe. Documents are yielded in key
    order, matching Firestore's default ordering.

    Failures can be injected with fail_next() to exercise error handling.
    """

    def __init__(self, documents: Optional[Dict[str, Dict[str, str]]] = None):
        self._documents: Dict[str, Dict[str, str]] = dict(documents or {})
        self._subscriptions: List[_InMemorySubscription] = []
        self._failures: Dict[str, List[BaseException]] = {"set": [], "delete": []}
        self.calls: List[Tuple[str, str]] = []

    # ----- CityStore -----

    def subscribe(self, listener: SnapshotListener) -> Subscription:
        subscription = _InMemorySubscription(self, listener)
        self._subscriptions.append(subscription)
        subscription.deliver(self.snapshot())
        return subscription

    async def set(self, key: str, city: City) -> None:
        self.calls.append(("set", key))
        self._raise_injected("set", key)
        self._documents[key] = city.to_dict()
        self._push()

    async def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        self._raise_injected("delete", key)
        if self._documents.pop(key, None) is not None:
            self._push()

    # ----- Test helpers -----

    def snapshot(self) -> CollectionSnapshot:
        """Current contents as a snapshot."""
        return CollectionSnapshot(
            documents=[
                DocumentSnapshot(key=key, data=dict(self._documents[key]))
                for key in sorted(self._documents)
            ]
        )

    def get(self, key: str) -> Optional[Dict[str, str]]:
        """Raw fields stored at key."""
        data = self._documents.get(key)
        return dict(data) if data is not None else None

    def keys(self) -> List[str]:
        return sorted(self._documents)

    def fail_next(self, operation: str, error: Optional[BaseException] = None) -> None:
        """Make the next call to operation ("set" or "delete") raise."""
        if operation not in self._failures:
            raise ValueError(f"Unknown operation: {operation}")
        self._failures[operation].append(
            error or CityStoreError(f"Injected {operation} failure")
        )

    def emit_error(self, error: BaseException) -> None:
        """Push a listener error to every subscriber."""
        self._deliver(CollectionSnapshot(error=error))

    def push(self, snapshot: CollectionSnapshot) -> None:
        """Push an arbitrary snapshot, bypassing stored documents."""
        self._deliver(snapshot)

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    # ----- Internals -----

    def _raise_injected(self, operation: str, key: str) -> None:
        pending = self._failures[operation]
        if pending:
            error = pending.pop(0)
            logger.debug(f"Injected {operation} failure for '{key}': {error}")
            raise error

    def _push(self) -> None:
        self._deliver(self.snapshot())

    def _deliver(self, snapshot: CollectionSnapshot) -> None:
        for subscription in list(self._subscriptions):
            subscription.deliver(snapshot)

    def _remove(self, subscription: _InMemorySubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
