"""Shared test configuration for ci-message-env tests.

Provides runs backed by temporary directories:
- build_run: classic build with a workspace handle
- pipeline_run: pipeline-style run whose workspace is <root>/workspace
- Environment isolation for CI_MESSAGE_ENV_* settings variables
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from ci_message_env.engine.workspace import BuildRun, PipelineRun


@pytest.fixture(autouse=True)
def isolate_settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep host configuration out of tests.

    Clears CI_MESSAGE_ENV_* variables and points HOME at an empty directory so
    ~/.ci-message-env/config.yml is never picked up.
    """
    for name in (
        "CI_MESSAGE_ENV_CONFIG",
        "CI_MESSAGE_ENV_LOG_LEVEL",
        "CI_MESSAGE_ENV_VERIFY_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    yield


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Existing workspace directory."""
    path = tmp_path / "ws"
    path.mkdir()
    return path


@pytest.fixture
def build_run(workspace: Path) -> BuildRun:
    return BuildRun("app #42", workspace=workspace)


@pytest.fixture
def pipeline_root(tmp_path: Path) -> Path:
    """Pipeline run root directory with its conventional workspace created."""
    root = tmp_path / "builds" / "7"
    (root / "workspace").mkdir(parents=True)
    return root


@pytest.fixture
def pipeline_run(pipeline_root: Path) -> PipelineRun:
    return PipelineRun("pipeline #7", root_dir=pipeline_root)
