"""Tests for the command-line interface."""

import argparse
import io
from uuid import uuid4

import pytest
from rich.console import Console

from listingbridge import cli
from listingbridge.clients.base import RemoteFailure

from .conftest import PLOVDIV, SOFIA


@pytest.fixture
def output(monkeypatch) -> io.StringIO:
    buffer = io.StringIO()
    monkeypatch.setattr(cli, "console", Console(file=buffer, width=200))
    return buffer


class TestParseNameMap:
    """Test NAME=UUID parsing."""

    def test_parses_pairs(self):
        """Test parsing NAME=UUID pairs."""
        refs = cli.parse_name_map([f"Sofia={SOFIA}", f" Plovdiv = {PLOVDIV} "])
        assert [(r.name, r.id) for r in refs] == [("Sofia", SOFIA), ("Plovdiv", PLOVDIV)]

    def test_none_is_empty(self):
        """Test that no mappings yield an empty list."""
        assert cli.parse_name_map(None) == []

    @pytest.mark.parametrize("entry", ["Sofia", f"={SOFIA}", "Sofia=not-a-uuid"])
    def test_rejects_malformed(self, entry):
        """Test rejecting malformed mappings."""
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_name_map([entry])


class TestParser:
    """Test argument parsing."""

    def test_search_options(self):
        """Test parsing search options."""
        args = cli.build_parser().parse_args(
            ["search", "--search", "loft", "--max-price", "250000", "--city-map", f"Sofia={SOFIA}"]
        )
        assert args.command == "search"
        assert args.search == "loft"
        assert args.max_price == "250000"
        assert args.city_map == [f"Sofia={SOFIA}"]

    def test_show_requires_uuid(self):
        """Test that show rejects a malformed id."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["show", "nope"])

    def test_command_required(self):
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestRun:
    """Test command execution against a fake client."""

    def test_search(self, fake_client, settings, output):
        """Test the search command with a city mapping."""
        args = cli.build_parser().parse_args(
            ["search", "--city", "plovdiv", "--city-map", f"Plovdiv={PLOVDIV}"]
        )

        assert cli.run(args, fake_client, settings) == 0
        text = output.getvalue()
        assert "Old town studio" in text
        assert "Plovdiv family house" in text
        assert "Sunny loft downtown" not in text

    def test_search_falls_back(self, fake_client, settings, output):
        """Test the search command through the fallback path."""
        fake_client.fail("search", RemoteFailure.status(500))
        args = cli.build_parser().parse_args(["search", "--search", "loft"])

        assert cli.run(args, fake_client, settings) == 0
        assert "Sunny loft downtown" in output.getvalue()
        assert fake_client.count("fetch_all") == 1

    def test_featured(self, fake_client, settings, output):
        """Test the featured command."""
        args = cli.build_parser().parse_args(["featured"])
        assert cli.run(args, fake_client, settings) == 0
        assert "Featured listings (1)" in output.getvalue()

    def test_stats(self, fake_client, settings, output):
        """Test the stats command."""
        args = cli.build_parser().parse_args(["stats"])
        assert cli.run(args, fake_client, settings) == 0
        text = output.getvalue()
        assert "Total listings: 5" in text
        assert "265,000.00" in text

    def test_show(self, fake_client, settings, sample_listings, output):
        """Test the show command."""
        target = sample_listings[1]
        args = cli.build_parser().parse_args(["show", str(target.id)])

        assert cli.run(args, fake_client, settings) == 0
        assert "Family house with garden" in output.getvalue()

    def test_show_missing(self, fake_client, settings, output):
        """Test the show command for a missing listing."""
        args = cli.build_parser().parse_args(["show", str(uuid4())])
        assert cli.run(args, fake_client, settings) == 1
        assert "not found" in output.getvalue()
