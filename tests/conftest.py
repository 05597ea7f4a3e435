from __future__ import annotations

import shutil
from pathlib import Path

import pytest
from loguru import logger

FIXTURE_APP = Path(__file__).parent / "fixtures" / "mini_rails_app"


@pytest.fixture
def rails_app(tmp_path: Path) -> Path:
    """A writable copy of the mini Rails application fixture."""
    root = tmp_path / "mini_rails_app"
    shutil.copytree(FIXTURE_APP, root)
    return root


@pytest.fixture
def log_messages() -> list[str]:
    messages: list[str] = []
    sink_id = logger.add(messages.append, level="DEBUG", format="{level}|{message}")
    yield messages
    logger.remove(sink_id)
