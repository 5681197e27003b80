from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixtures.fakes import FakeClock, FakeConnection
from tppbot.config.model import BotConfig


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def bot_config(tmp_path: Path) -> BotConfig:
    return BotConfig(
        host="127.0.0.1",
        port=6667,
        token="abcdefghijklmnop",
        user="tppwatcher",
        channel="twitchplayspokemon",
        log_path=tmp_path / "stats.tsv",
        bot=True,
    )
