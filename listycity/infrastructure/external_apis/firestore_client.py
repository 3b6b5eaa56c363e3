"""Google Cloud Firestore implementation of CityStore."""
import asyncio
import concurrent.futures
import logging
import os
from typing import Any, List, Optional

from google.api_core.exceptions import GoogleAPICallError
from google.cloud import firestore

from listycity.config import settings
from listycity.domain.entities.city import City
from listycity.domain.exceptions import CityStoreError, SubscriptionError
from listycity.domain.repositories.city_store import (
    CityStore,
    CollectionSnapshot,
    DocumentSnapshot,
    SnapshotListener,
    Subscription,
)

logger = logging.getLogger(__name__)


class _WatchSubscription(Subscription):
    """Wraps a Firestore Watch returned by on_snapshot().

    Watch closes itself on unrecoverable stream errors without calling the
    snapshot callback, so is_active is polled on the event loop and a
    stopped watch is reported to the listener as an error snapshot.
    """

    def __init__(self, watch: Any, collection: str):
        self._watch = watch
        self._collection = collection
        self._monitor: Optional[concurrent.futures.Future] = None

    def start_monitor(
        self,
        loop: asyncio.AbstractEventLoop,
        listener: SnapshotListener,
        poll_seconds: float,
    ) -> None:
        self._monitor = asyncio.run_coroutine_threadsafe(
            self._watch_until_inactive(listener, poll_seconds), loop
        )

    async def _watch_until_inactive(self, listener: SnapshotListener, poll_seconds: float) -> None:
        while self._watch is not None:
            if not self._watch.is_active:
                self._watch = None
                logger.error(f"Firestore listener on '{self._collection}' stopped unexpectedly")
                listener(CollectionSnapshot(
                    error=SubscriptionError(f"Listener on '{self._collection}' stopped")
                ))
                return
            await asyncio.sleep(poll_seconds)

    def unsubscribe(self) -> None:
        if self._monitor is not None:
            self._monitor.cancel()
            self._monitor = None
        if self._watch is None:
            return
        self._watch.unsubscribe()
        self._watch = None
        logger.info(f"Unsubscribed from Firestore collection '{self._collection}'")


class FirestoreCityStore(CityStore):
    """Cities collection stored in Firestore.

    Writes go through the async client. The live listener uses the sync
    client's on_snapshot(), whose callback runs on a Firestore background
    thread; snapshots are handed to the event loop with
    call_soon_threadsafe so listeners always run on the loop thread.
    """

    def __init__(
        self,
        collection: Optional[str] = None,
        project_id: Optional[str] = None,
        database: Optional[str] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        watch_poll_seconds: Optional[float] = None,
    ):
        self.collection_name = collection or settings.CITIES_COLLECTION
        self.project_id = project_id or settings.FIRESTORE_PROJECT_ID
        self.database = database or settings.FIRESTORE_DATABASE
        self._loop = loop
        self.watch_poll_seconds = settings.FIRESTORE_WATCH_POLL_SECONDS if watch_poll_seconds is None else watch_poll_seconds
        self._client: Optional[firestore.Client] = None
        self._async_client: Optional[firestore.AsyncClient] = None

    @property
    def client(self) -> firestore.Client:
        """Lazy initialization of the sync client (listener only)."""
        if self._client is None:
            self._client = self._build_client(firestore.Client)
        return self._client

    @property
    def async_client(self) -> firestore.AsyncClient:
        """Lazy initialization of the async client (writes)."""
        if self._async_client is None:
            self._async_client = self._build_client(firestore.AsyncClient)
        return self._async_client

    def _build_client(self, client_cls):
        creds_path = settings.GOOGLE_APPLICATION_CREDENTIALS
        if creds_path and os.path.exists(creds_path):
            return client_cls.from_service_account_json(
                creds_path,
                project=self.project_id,
                database=self.database,
            )
        # Use default credentials
        return client_cls(project=self.project_id, database=self.database)

    # ----- CityStore -----

    def subscribe(self, listener: SnapshotListener) -> Subscription:
        loop = self._loop or asyncio.get_running_loop()

        def on_snapshot(documents: List[Any], changes: Any, read_time: Any) -> None:
            try:
                snapshot = CollectionSnapshot(
                    documents=[
                        DocumentSnapshot(key=doc.id, data=doc.to_dict() or {})
                        for doc in documents
                    ]
                )
            except Exception as e:
                logger.error(f"Failed to read snapshot of '{self.collection_name}': {e}")
                snapshot = CollectionSnapshot(
                    error=SubscriptionError(f"Unreadable snapshot: {e}")
                )
            loop.call_soon_threadsafe(listener, snapshot)

        watch = self.client.collection(self.collection_name).on_snapshot(on_snapshot)
        logger.info(f"Subscribed to Firestore collection '{self.collection_name}'")
        subscription = _WatchSubscription(watch, self.collection_name)
        subscription.start_monitor(loop, listener, self.watch_poll_seconds)
        return subscription

    async def set(self, key: str, city: City) -> None:
        try:
            await self.async_client.collection(self.collection_name).document(key).set(city.to_dict())
        except GoogleAPICallError as e:
            raise CityStoreError(f"Firestore set failed for '{key}': {e}", key=key) from e
        logger.info(f"Wrote city document '{key}'")

    async def delete(self, key: str) -> None:
        try:
            await self.async_client.collection(self.collection_name).document(key).delete()
        except GoogleAPICallError as e:
            raise CityStoreError(f"Firestore delete failed for '{key}': {e}", key=key) from e
        logger.info(f"Deleted city document '{key}'")
