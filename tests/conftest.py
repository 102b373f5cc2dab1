"""Shared pytest fixtures for the SMACSS generator test suite.

Provides reusable fixtures for:
- Temporary output directories
- Answer sets for each app type
- Configurations with install skipped or enabled
- Mock subprocess helpers
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from smacss_gen.config import Config, InstallConfig
from smacss_gen.scaffolder.models import AnswerSet, AppType, FeatureFlags, ModuleFlags


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory that generated projects are written into."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    yield output_dir


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

@pytest.fixture
def simple_answers() -> AnswerSet:
    return AnswerSet(app_name="My Site", app_type=AppType.SIMPLE_WEB_APP)


@pytest.fixture
def full_pack_answers() -> AnswerSet:
    return AnswerSet(
        app_name="Full Pack",
        app_type=AppType.FULL_PACK_WEB_APP,
        features=FeatureFlags(include_jquery=True, include_modernizr=False),
    )


@pytest.fixture
def angular_answers() -> AnswerSet:
    return AnswerSet(
        app_name="Ng Shop",
        app_type=AppType.ANGULAR_APP,
        features=FeatureFlags(include_jquery=True, include_modernizr=True),
        modules=ModuleFlags(route=True, sanitize=True),
    )


@pytest.fixture(params=list(AppType), ids=lambda t: t.value)
def any_answers(request) -> AnswerSet:
    """One answer set per app type, with every applicable flag enabled."""
    return AnswerSet(
        app_name="Every Type",
        app_type=request.param,
        features=FeatureFlags(include_jquery=True, include_modernizr=True),
        modules=ModuleFlags(route=True, resource=True, sanitize=True, animate=True),
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def skip_install_config(tmp_output_dir: Path) -> Config:
    """Config that writes into ``tmp_output_dir`` and never installs."""
    return Config(
        output_dir=tmp_output_dir,
        skip_install=True,
        skip_welcome_message=True,
    )


@pytest.fixture
def install_config(tmp_output_dir: Path) -> Config:
    """Config that installs with the default npm/bower/gulp commands."""
    return Config(
        output_dir=tmp_output_dir,
        skip_welcome_message=True,
        install=InstallConfig(timeout=30),
    )


# ---------------------------------------------------------------------------
# Subprocess mocks
# ---------------------------------------------------------------------------

def _line_reader(text: str) -> MagicMock:
    reader = MagicMock()
    lines = text.encode("utf-8").splitlines(keepends=True)
    reader.readline = AsyncMock(side_effect=[*lines, b""])
    return reader


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.  Output is available both through
    ``communicate()`` and line by line through ``stdout.readline()`` /
    ``stderr.readline()``.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        mock_proc.stdout = _line_reader(stdout)
        mock_proc.stderr = _line_reader(stderr)
        return mock_proc

    return factory
