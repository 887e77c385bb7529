"""Tests for running the registry lint as a separate process.

Covers:
- Wrong-type config values (exit before any registry is read)
- Exit codes for clean, broken and missing registry documents
- Logs on stderr, report on stdout
"""

from __future__ import annotations

import json
import os
import subprocess
import sys
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def subprocess_env(tmp_path: Path) -> dict[str, str]:
    """Environment isolated from any componentkit.yaml in the developer's cwd."""
    env = os.environ.copy()
    env.pop("COMPONENTKIT__REGISTRY__PATH", None)
    env["HOME"] = str(tmp_path)
    env["XDG_CONFIG_HOME"] = str(tmp_path / ".config")
    return env


def _run(
    args: list[str], env: dict[str, str], cwd: Path, timeout: int = 30
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "componentkit", *args],
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=env,
        cwd=cwd,
    )


class TestBadConfigValue:
    def test_invalid_log_level_in_environment(
        self, tmp_path: Path, subprocess_env: dict[str, str]
    ) -> None:
        """Config validation fails before the registry is touched."""
        env = {**subprocess_env, "COMPONENTKIT__LOGGING__LEVEL": "VERBOSE"}
        result = _run([], env, tmp_path)
        assert result.returncode != 0
        assert "Validating component registry" not in result.stdout

    def test_yaml_config_file_is_honoured(
        self, tmp_path: Path, subprocess_env: dict[str, str]
    ) -> None:
        (tmp_path / "componentkit.yaml").write_text(
            f"registry:\n  path: {tmp_path / 'absent.json'}\n", encoding="utf-8"
        )
        result = _run([], subprocess_env, tmp_path)
        assert result.returncode == 1
        assert "Registry file not found" in result.stderr


class TestExitCodes:
    def test_bundled_registry_exits_zero(
        self, tmp_path: Path, subprocess_env: dict[str, str]
    ) -> None:
        result = _run([], subprocess_env, tmp_path)
        assert result.returncode == 0, result.stderr
        assert "Registry validation completed successfully!" in result.stdout

    def test_broken_registry_exits_one(
        self, tmp_path: Path, subprocess_env: dict[str, str]
    ) -> None:
        path = tmp_path / "registry.json"
        path.write_text(json.dumps({"components": {"button": {}}}), encoding="utf-8")

        result = _run([str(path)], subprocess_env, tmp_path)

        assert result.returncode == 1
        assert "components.button: missing field 'metadata'" in result.stderr
        assert "registry: missing field 'utils'" in result.stderr

    def test_logs_go_to_stderr(self, tmp_path: Path, subprocess_env: dict[str, str]) -> None:
        result = _run(["--log-level", "INFO", "--log-format", "json"], subprocess_env, tmp_path)
        assert result.returncode == 0, result.stderr
        assert "registry_validation_passed" in result.stderr
        assert "registry_validation_passed" not in result.stdout
