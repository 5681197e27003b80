from __future__ import annotations

from unittest.mock import ANY, AsyncMock, patch

import pytest

from tppbot.errors.internal import ConfigError
from tppbot.main import health_check, main, run

ENVIRONMENT = {
    "TPP_ADDR": "127.0.0.1:6667",
    "TPP_TOKEN": "oauth:abcdefghijklmnop",
    "TPP_USER": "tppwatcher",
    "TPP_CHANNEL": "twitchplayspokemon",
}


@pytest.fixture
def environment(monkeypatch, tmp_path):
    for name, value in ENVIRONMENT.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("TPP_LOG_PATH", str(tmp_path / "stats.tsv"))
    monkeypatch.delenv("TPP_BOT", raising=False)


@pytest.mark.asyncio
async def test_main_runs_sessions_with_loaded_config(environment):
    with patch("tppbot.main.run_forever", new_callable=AsyncMock) as mock_run_forever:
        await main()

    config = mock_run_forever.call_args.args[0]
    assert config.channel == "twitchplayspokemon"
    assert config.bot is False


@pytest.mark.asyncio
async def test_main_config_error_exits(monkeypatch):
    monkeypatch.delenv("TPP_ADDR", raising=False)
    with patch("tppbot.main.log_error") as mock_log_error, \
         patch("tppbot.main.run_forever", new_callable=AsyncMock) as mock_run_forever:
        with pytest.raises(SystemExit) as exc_info:
            await main()

    assert exc_info.value.code == 1
    mock_log_error.assert_called_once_with("Configuration error", ANY)
    assert isinstance(mock_log_error.call_args.args[1], ConfigError)
    mock_run_forever.assert_not_called()


@pytest.mark.asyncio
async def test_main_unexpected_error_exits(environment):
    with patch("tppbot.main.run_forever", new_callable=AsyncMock, side_effect=RuntimeError("boom")), \
         patch("tppbot.main.log_error") as mock_log_error:
        with pytest.raises(SystemExit) as exc_info:
            await main()

    assert exc_info.value.code == 1
    mock_log_error.assert_called_once_with("Main application error", ANY)


def test_health_check_pass(environment):
    assert health_check() == 0


def test_health_check_fail(monkeypatch):
    monkeypatch.delenv("TPP_TOKEN", raising=False)

    assert health_check() == 1


def test_run_health_check_flag(environment):
    with patch("tppbot.main.LoggerConfigurator") as mock_configurator:
        with pytest.raises(SystemExit) as exc_info:
            run(["--health-check"])

    assert exc_info.value.code == 0
    mock_configurator.return_value.configure.assert_called_once()


def test_run_keyboard_interrupt_exits_cleanly():
    with patch("tppbot.main.LoggerConfigurator"), \
         patch("tppbot.main.asyncio.run", side_effect=KeyboardInterrupt):
        with pytest.raises(SystemExit) as exc_info:
            run([])

    assert exc_info.value.code == 0
