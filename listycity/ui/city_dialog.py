"""Create / edit form for a city."""
import logging
from typing import Optional

from listycity.application.ports.screen import CityDialogListener
from listycity.domain.entities.city import City

logger = logging.getLogger(__name__)


class CityDialog:
    """Modal form with name and province fields.

    Create mode when built without a city, edit mode otherwise. Submitting
    reports the raw field contents to the listener; validation is the
    listener's job. A dismissed dialog reports nothing.
    """

    def __init__(self, listener: CityDialogListener, city: Optional[City] = None):
        self._listener = listener
        self.city = city
        self.closed = False

    @classmethod
    def new_instance(cls, listener: CityDialogListener, city: City) -> "CityDialog":
        """Edit-mode dialog seeded from city."""
        return cls(listener, city)

    @property
    def is_edit_mode(self) -> bool:
        return self.city is not None

    @property
    def initial_name(self) -> str:
        return self.city.name if self.city else ""

    @property
    def initial_province(self) -> str:
        return self.city.province if self.city else ""

    async def submit(self, name: Optional[str], province: Optional[str]):
        if self.closed:
            logger.warning("Ignoring submit on a closed city dialog")
            return None
        self.closed = True
        if self.is_edit_mode:
            return await self._listener.update_city(self.city, name, province)
        return await self._listener.add_city(City(name=name, province=province))

    def dismiss(self) -> None:
        self.closed = True
