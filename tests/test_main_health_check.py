from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def _run_health_check(env: dict[str, str]) -> subprocess.CompletedProcess[str]:
    env["PYTHONPATH"] = str(ROOT)
    return subprocess.run(
        [sys.executable, "-m", "tppbot.main", "--health-check"],
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        timeout=10,
        check=False,
    )


def _clean_environment() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if not k.startswith("TPP_")}


def test_health_check_pass(tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    env = _clean_environment()
    env.update(
        {
            "TPP_ADDR": "irc.chat.twitch.tv:6667",
            "TPP_TOKEN": "oauth:abcdefghijklmnop",
            "TPP_USER": "tppwatcher",
            "TPP_CHANNEL": "twitchplayspokemon",
            "TPP_LOG_PATH": str(tmp_path / "stats.tsv"),
        }
    )
    proc = _run_health_check(env)
    if proc.returncode != 0:
        raise AssertionError(f"Health check expected success exit code 0 got {proc.returncode} output={proc.stdout}")
    if "Health check passed" not in proc.stdout:
        raise AssertionError(f"Expected health message missing output={proc.stdout}")


def test_health_check_fail() -> None:  # type: ignore[no-untyped-def]
    proc = _run_health_check(_clean_environment())
    if proc.returncode == 0:
        raise AssertionError("Health check expected non-zero when environment is empty")
    if "Missing environment variables" not in proc.stdout:
        raise AssertionError(f"Expected missing variables message absent output={proc.stdout}")
