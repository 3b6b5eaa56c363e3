"""Tests for the city create/edit dialog."""
from unittest.mock import AsyncMock, MagicMock

import pytest

from listycity.domain.entities.city import City
from listycity.ui.city_dialog import CityDialog


@pytest.fixture
def listener():
    mock = MagicMock()
    mock.add_city = AsyncMock(return_value="added")
    mock.update_city = AsyncMock(return_value="updated")
    return mock


class TestCityDialog:

    def test_create_mode_starts_empty(self, listener):
        dialog = CityDialog(listener)

        assert dialog.is_edit_mode is False
        assert (dialog.initial_name, dialog.initial_province) == ("", "")

    def test_edit_mode_is_seeded(self, listener):
        dialog = CityDialog.new_instance(listener, City("Calgary", "AB"))

        assert dialog.is_edit_mode is True
        assert (dialog.initial_name, dialog.initial_province) == ("Calgary", "AB")

    @pytest.mark.asyncio
    async def test_create_reports_raw_fields(self, listener):
        dialog = CityDialog(listener)

        result = await dialog.submit("  Calgary ", " AB")

        assert result == "added"
        listener.add_city.assert_awaited_once_with(City("  Calgary ", " AB"))
        listener.update_city.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_reports_original_and_raw_fields(self, listener):
        original = City("Calgary", "AB")
        dialog = CityDialog.new_instance(listener, original)

        result = await dialog.submit(" Airdrie", "AB ")

        assert result == "updated"
        listener.update_city.assert_awaited_once_with(original, " Airdrie", "AB ")
        listener.add_city.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_submit_reports_once(self, listener):
        dialog = CityDialog(listener)

        await dialog.submit("Calgary", "AB")
        second = await dialog.submit("Airdrie", "AB")

        assert second is None
        assert listener.add_city.await_count == 1

    @pytest.mark.asyncio
    async def test_dismiss_reports_nothing(self, listener):
        dialog = CityDialog(listener)

        dialog.dismiss()
        await dialog.submit("Calgary", "AB")

        listener.add_city.assert_not_awaited()
        listener.update_city.assert_not_awaited()
