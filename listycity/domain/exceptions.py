"""Domain-level errors raised by city stores."""
from typing import Optional


class CityStoreError(Exception):
    """A remote store operation failed (network, permission, quota...)."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class SubscriptionError(CityStoreError):
    """The live collection listener reported an error."""
