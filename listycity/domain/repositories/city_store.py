"""City store interface - abstraction for the remote document collection."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional

from listycity.domain.entities.city import City


@dataclass(frozen=True)
class DocumentSnapshot:
    """One remote document as delivered by a push."""
    key: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_city(self) -> City:
        return City.from_document(self.data)


@dataclass(frozen=True)
class CollectionSnapshot:
    """Full replacement view of a collection, or the error that replaced it."""
    documents: List[DocumentSnapshot] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def __iter__(self) -> Iterator[DocumentSnapshot]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)


SnapshotListener = Callable[[CollectionSnapshot], None]


class Subscription(ABC):
    """Handle returned by CityStore.subscribe."""

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivering snapshots. Safe to call more than once."""
        pass


class CityStore(ABC):
    """Store interface for the cities collection.

    Documents are keyed by city name. Mutations are coroutines that raise
    CityStoreError on failure; their effect becomes visible to the screen
    only through a later snapshot.
    """

    @abstractmethod
    def subscribe(self, listener: SnapshotListener) -> Subscription:
        """Deliver the full collection to listener on every change."""
        pass

    @abstractmethod
    async def set(self, key: str, city: City) -> None:
        """Create or overwrite the document at key."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete the document at key. Deleting a missing key succeeds."""
        pass
