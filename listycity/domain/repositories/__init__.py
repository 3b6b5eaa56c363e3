"""Repository interfaces."""
from listycity.domain.repositories.city_store import (
    CityStore,
    CollectionSnapshot,
    DocumentSnapshot,
    SnapshotListener,
    Subscription,
)

__all__ = [
    "CityStore",
    "CollectionSnapshot",
    "DocumentSnapshot",
    "SnapshotListener",
    "Subscription",
]
