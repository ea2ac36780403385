from __future__ import annotations

import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from bitdrift.config import DEFAULT_BASELINE_DIR, load_settings


def test_explicit_root_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIT_BASELINE_DIR", str(tmp_path / "env"))
    assert load_settings(root=str(tmp_path / "flag")).baseline_dir == tmp_path / "flag"


def test_env_var_used_without_flag(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIT_BASELINE_DIR", str(tmp_path / "env"))
    assert load_settings().baseline_dir == tmp_path / "env"


def test_default_under_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BIT_BASELINE_DIR", raising=False)
    monkeypatch.chdir(tmp_path)
    assert load_settings().baseline_dir == tmp_path / DEFAULT_BASELINE_DIR


def test_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIT_LOG_LEVEL", "info")
    assert load_settings().log_level == "INFO"
    assert load_settings(verbose=True).log_level == "DEBUG"
    monkeypatch.delenv("BIT_LOG_LEVEL")
    assert load_settings().log_level == "WARNING"
