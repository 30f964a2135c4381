"""
Tests for main.py - Main Entry Point

Tests for the command line including:
- Logging configuration
- Argument parsing
- Exit codes for a missing credential and unknown catalog items
- The saved-items subcommands end to end against a temporary database
"""

import json
import logging
from unittest.mock import AsyncMock, MagicMock, mock_open, patch

import pytest

from music_discovery.domain.recommendations.entities import RecommendationsResponse
from music_discovery.domain.shared.enums import EntityKind
from music_discovery.main import build_parser, main, setup_logging


class TestLoggingSetup:
    """Tests for logging configuration."""

    def _make_valid_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {},
            "loggers": {
                "aiosqlite": {"level": "WARNING"},
                "httpx": {"level": "WARNING"},
            },
            "root": {"level": "INFO", "handlers": []},
        }

    def test_dictconfig_called_when_json_exists(self):
        config = self._make_valid_config()
        m = mock_open(read_data=json.dumps(config))
        with (
            patch("builtins.open", m),
            patch("logging.config.dictConfig") as mock_dc,
        ):
            setup_logging()

            mock_dc.assert_called_once_with(config)

    def test_fallback_to_basicconfig_when_json_missing(self):
        """Should fallback to basicConfig when logging_config.json is missing."""
        with (
            patch("builtins.open", side_effect=FileNotFoundError),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()
            assert mock_bc.call_args[1]["level"] == logging.INFO

    def test_fallback_to_basicconfig_when_json_malformed(self):
        m = mock_open(read_data="{invalid json")
        with (
            patch("builtins.open", m),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()

    def test_root_logger_level_overridden(self):
        config = self._make_valid_config()
        m = mock_open(read_data=json.dumps(config))
        with (
            patch("builtins.open", m),
            patch("logging.config.dictConfig"),
            patch("logging.getLogger") as mock_get_logger,
        ):
            mock_root = MagicMock()
            mock_get_logger.return_value = mock_root

            setup_logging("DEBUG")

            mock_root.setLevel.assert_called_once_with(logging.DEBUG)


class TestArgumentParsing:
    def test_similar_defaults(self):
        args = build_parser().parse_args(["similar", "Radiohead"])

        assert args.command == "similar"
        assert args.kind == "artist"
        assert args.limit is None

    def test_limit_must_be_allowed(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["similar", "Radiohead", "--limit", "7"])

    def test_check_keys(self):
        args = build_parser().parse_args(
            [
                "saved", "check", "--user", "u1",
                "--key", "album", "Dummy", "Portishead",
                "--key", "track", "Teardrop", "Massive Attack",
            ]
        )

        assert args.keys == [
            ["album", "Dummy", "Portishead"],
            ["track", "Teardrop", "Massive Attack"],
        ]


@pytest.fixture
def quiet_logging():
    with patch("music_discovery.main.setup_logging"):
        yield


class TestSimilarCommand:
    def test_missing_credential_exit_code(self, quiet_logging, capsys):
        """Should return 1 without a Last.fm key."""
        exit_code = main(["similar", "Radiohead"])

        assert exit_code == 1
        assert capsys.readouterr().out == ""

    def test_prints_response(self, quiet_logging, capsys, monkeypatch):
        monkeypatch.setenv("LASTFM__API_KEY", "k")
        response = RecommendationsResponse(source_name="Radiohead", source_kind=EntityKind.ARTIST)

        with patch(
            "music_discovery.application.services.recommendation_service."
            "RecommendationService.recommend",
            new=AsyncMock(return_value=response),
        ):
            exit_code = main(["similar", "Radiohead", "--limit", "5"])

        assert exit_code == 0
        printed = json.loads(capsys.readouterr().out)
        assert printed["source_name"] == "Radiohead"
        assert printed["source_kind"] == "artist"
        assert printed["recommendations"] == []

    def test_unknown_catalog_item(self, quiet_logging, monkeypatch):
        monkeypatch.setenv("LASTFM__API_KEY", "k")

        assert main(["similar", "--item", "missing"]) == 1

    def test_name_or_item_required(self, quiet_logging, monkeypatch):
        monkeypatch.setenv("LASTFM__API_KEY", "k")

        assert main(["similar"]) == 1


class TestSavedCommands:
    @pytest.fixture(autouse=True)
    def _database(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE__URL", f"sqlite:///{tmp_path / 'saved.db'}")

    def _run(self, capsys, *argv):
        exit_code = main(["saved", *argv])
        return exit_code, json.loads(capsys.readouterr().out)

    def test_save_list_check_delete(self, quiet_logging, capsys):
        item = ["--user", "u1", "--kind", "album", "--name", "Dummy", "--artist", "Portishead"]

        assert self._run(capsys, "save", *item, "--tag", "trip-hop") == (0, {"outcome": "saved"})
        assert self._run(capsys, "save", *item) == (0, {"outcome": "already_saved"})

        code, listed = self._run(capsys, "list", "--user", "u1")
        assert code == 0
        assert [(i["name"], i["tags"]) for i in listed] == [("Dummy", ["trip-hop"])]

        code, present = self._run(
            capsys, "check", "--user", "u1", "--key", "album", "dummy", "portishead"
        )
        assert present == [{"name": "dummy", "artist": "portishead", "kind": "album"}]

        assert self._run(capsys, "delete", *item) == (0, {"outcome": "deleted"})
        assert self._run(capsys, "delete", *item) == (0, {"outcome": "not_found"})

    def test_blank_user_fails(self, quiet_logging):
        assert main(["saved", "list", "--user", " "]) == 1
