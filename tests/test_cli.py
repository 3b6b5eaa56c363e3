"""Tests for the command line front end (in-memory store)."""
import pytest

from listycity.cli import build_parser, run


@pytest.mark.integration
class TestCli:

    @pytest.mark.asyncio
    async def test_list(self, seeded_store, capsys):
        code = await run(build_parser().parse_args(["list"]), store=seeded_store)

        out = capsys.readouterr().out
        assert code == 0
        assert "3 cities" in out
        assert "Vancouver" in out

    @pytest.mark.asyncio
    async def test_add(self, store):
        code = await run(build_parser().parse_args(["add", " Calgary ", "AB"]), store=store)

        assert code == 0
        assert store.get("Calgary") == {"name": "Calgary", "province": "AB"}

    @pytest.mark.asyncio
    async def test_add_blank_name_fails(self, store, capsys):
        code = await run(build_parser().parse_args(["add", "  "]), store=store)

        assert code == 1
        assert store.calls == []
        assert "City name cannot be empty" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_edit_renames(self, seeded_store):
        code = await run(build_parser().parse_args(["edit", "Calgary", "Airdrie", "AB"]), store=seeded_store)

        assert code == 0
        assert seeded_store.calls == [("delete", "Calgary"), ("set", "Airdrie")]

    @pytest.mark.asyncio
    async def test_edit_keeps_province_when_omitted(self, seeded_store):
        code = await run(build_parser().parse_args(["edit", "Calgary", "Airdrie"]), store=seeded_store)

        assert code == 0
        assert seeded_store.get("Airdrie") == {"name": "Airdrie", "province": "AB"}

    @pytest.mark.asyncio
    async def test_edit_with_explicit_empty_province(self, seeded_store):
        code = await run(build_parser().parse_args(["edit", "Calgary", "Calgary", ""]), store=seeded_store)

        assert code == 0
        assert seeded_store.get("Calgary") == {"name": "Calgary", "province": ""}

    @pytest.mark.asyncio
    async def test_delete_failure_exits_nonzero(self, seeded_store):
        seeded_store.fail_next("delete")

        code = await run(build_parser().parse_args(["delete", "Edmonton"]), store=seeded_store)

        assert code == 1
        assert seeded_store.get("Edmonton") is not None

    @pytest.mark.asyncio
    async def test_delete(self, seeded_store, capsys):
        code = await run(build_parser().parse_args(["delete", "Edmonton"]), store=seeded_store)

        assert code == 0
        assert seeded_store.get("Edmonton") is None
        assert "Delete Edmonton (AB)?" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_unknown_city(self, seeded_store):
        code = await run(build_parser().parse_args(["delete", "Nowhere"]), store=seeded_store)

        assert code == 1
        assert seeded_store.calls == []


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
