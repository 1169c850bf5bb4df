"""Tests for the dashboard command line."""

import logging

import pytest

from weathersphere import __main__ as cli


class FakeApp:
    """Records how the dashboard would have been started."""

    instances = []

    def __init__(self, config, initial_city=None):
        self.config = config
        self.initial_city = initial_city
        self.ran = False
        FakeApp.instances.append(self)

    def run(self):
        self.ran = True

    def exit(self):
        pass


@pytest.fixture
def fake_app(monkeypatch):
    FakeApp.instances = []
    monkeypatch.setattr(cli, "WeatherApp", FakeApp)
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(cli, "exit_on_signals", lambda app: None)
    return FakeApp


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        assert str(args.config) == "config.json"
        assert args.city is None
        assert args.api is None
        assert args.verbose is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(["-V"])
        assert exc_info.value.code == 0
        assert "WeatherSphere v" in capsys.readouterr().out


class TestMain:
    """Tests for starting the dashboard."""

    def test_uses_config_file(self, fake_app, sample_config_file):
        cli.main(["-c", str(sample_config_file), "--city", "Rome"])

        app = fake_app.instances[0]
        assert app.ran is True
        assert app.initial_city == "Rome"
        assert app.config.default_city == "Paris"
        assert app.config.units == "imperial"

    def test_missing_config_uses_defaults(self, fake_app, temp_dir):
        cli.main(["-c", str(temp_dir / "missing.json")])
        assert fake_app.instances[0].config.default_city == "London"

    def test_api_override(self, fake_app, sample_config_file):
        cli.main(["-c", str(sample_config_file), "--api", "https://weather.example.com/api/"])

        config = fake_app.instances[0].config
        assert config.api_base == "https://weather.example.com/api"
        assert config.default_city == "Paris"


def test_setup_logging_writes_file(temp_dir, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)
    log_file = temp_dir / "logs" / "dash.log"

    cli.setup_logging("INFO", log_file=log_file)
    logging.getLogger("weathersphere.test").info("hello")
    for handler in root.handlers:
        handler.flush()

    assert "hello" in log_file.read_text()
    for handler in root.handlers:
        handler.close()
