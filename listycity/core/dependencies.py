"""Dependency wiring for the store backend.
Follows Dependency Inversion Principle - callers depend on CityStore."""
import logging
from functools import lru_cache

from listycity.config import settings
from listycity.domain.repositories.city_store import CityStore
from listycity.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore

logger = logging.getLogger(__name__)

BACKEND_FIRESTORE = "firestore"
BACKEND_MEMORY = "memory"


@lru_cache()
def get_city_store() -> CityStore:
    """Get city store instance.

    - Default: Firestore (CITY_STORE_BACKEND=firestore)
    - CITY_STORE_BACKEND=memory: process-local store for demos and tests
    """
    backend = settings.CITY_STORE_BACKEND.lower()
    if backend == BACKEND_MEMORY:
        logger.info("Using in-memory city store")
        return InMemoryCityStore()
    if backend == BACKEND_FIRESTORE:
        from listycity.infrastructure.external_apis.firestore_client import FirestoreCityStore

        logger.info(f"Using Firestore city store (collection '{settings.CITIES_COLLECTION}')")
        return FirestoreCityStore()
    raise ValueError(f"Unknown CITY_STORE_BACKEND: {settings.CITY_STORE_BACKEND}")
