# ruff: noqa: E402

import builtins
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import rbxts_init.io as io
import rbxts_init.log as rbxts_log


@pytest.fixture(autouse=True)
def _non_interactive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(io, "_use_questionary", lambda: False)
    monkeypatch.delenv("RBXTS_INIT_REPOSITORIES", raising=False)
    monkeypatch.setattr(rbxts_log, "_configured_level", None)
    monkeypatch.setattr(rbxts_log, "_no_color_override", None)

    def fail_input(prompt: str = "") -> str:
        raise AssertionError("prompted unexpectedly")

    monkeypatch.setattr(builtins, "input", fail_input)
