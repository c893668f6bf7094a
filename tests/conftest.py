"""Shared test fixtures for the project board tests."""

import sys
from pathlib import Path

import pytest

# Ensure the project root (board_server.py, projectboard/) is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from projectboard.board import Board
from projectboard.config import BoardConfig
from projectboard.state import ProjectState
from projectboard.surface import MemorySurface


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep PROJECTBOARD_* variables from the host out of every test."""
    for name in (
        "PROJECTBOARD_CONFIG",
        "PROJECTBOARD_HOST",
        "PROJECTBOARD_PORT",
        "PROJECTBOARD_API_SECRET",
        "PROJECTBOARD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def state():
    return ProjectState()


@pytest.fixture
def surface():
    return MemorySurface()


@pytest.fixture
def board(state, surface):
    return Board(BoardConfig(), surface=surface, state=state)
