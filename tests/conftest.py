import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
CONFIG_DIR = REPO_ROOT / "configs"


def _clean_env(extra=None):
    env = {
        k: v
        for k, v in os.environ.items()
        if not k.startswith("J2C_") and k not in ("FORCE_COLOR", "NO_COLOR")
    }
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in [str(SRC_DIR), os.environ.get("PYTHONPATH", "")] if p
    )
    env.update(extra or {})
    return env


@pytest.fixture
def run_cli(tmp_path):
    """Run `python -m j2c.cli` in a scratch directory with a clean J2C_* env."""

    def _run(*args, input=None, env=None):
        return subprocess.run(
            [sys.executable, "-m", "j2c.cli", *[str(a) for a in args]],
            input=input,
            capture_output=True,
            text=True,
            encoding="utf-8",
            cwd=tmp_path,
            env=_clean_env(env),
            timeout=30,
        )

    return _run


@pytest.fixture(autouse=True)
def _no_j2c_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("J2C_"):
            monkeypatch.delenv(key, raising=False)
