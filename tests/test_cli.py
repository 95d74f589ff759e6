"""
Tests for the command line entry point.
"""
from unittest.mock import patch

import pytest

import twitchtui
from twitchtui import cli
from twitchtui.config import Settings


@pytest.fixture
def app():
    with patch("twitchtui.cli.setup_logging"), patch("twitchtui.cli.TwitchApp") as mock_app:
        yield mock_app


class TestMain:

    def test_version(self, app, capsys):
        assert cli.main(["--version"]) == 0
        assert capsys.readouterr().out.startswith(f"twitchtui {twitchtui.__version__}")
        app.assert_not_called()

    @patch("twitchtui.cli.load_settings", return_value=Settings())
    def test_runs_app_with_settings(self, mock_load, app):
        assert cli.main([]) == 0

        (settings,), kwargs = app.call_args
        assert settings.home_page == "personal_section"
        assert kwargs == {"debug": False}
        app.return_value.run.assert_called_once()

    @patch("twitchtui.cli.load_settings", return_value=Settings())
    def test_overrides(self, mock_load, app):
        cli.main(["--home", "game:Chess", "--quality", "720p", "--quality", "best", "--date-format", "%Y", "--debug"])

        (settings,), kwargs = app.call_args
        assert settings.home_page == "game:Chess"
        assert settings.quality == ["720p", "best"]
        assert settings.date_format == "%Y"
        assert kwargs == {"debug": True}
