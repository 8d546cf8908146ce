from __future__ import annotations

import logging

import pytest

from delve_calculator.logger import ROOT_LOGGER_NAME
from delve_calculator.profile import Profile
from delve_calculator.settings import TrackerSettings
from delve_calculator.store import ProfileStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.runelite folder."""
    home = tmp_path / "home"
    monkeypatch.setenv("DELVE_CALCULATOR_HOME", str(home))
    monkeypatch.delenv("DELVE_CALCULATOR_LOG_LEVEL", raising=False)
    yield home
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def commits():
    return []


@pytest.fixture
def store(commits):
    return ProfileStore(on_commit=commits.append)


@pytest.fixture
def settings(tmp_path):
    return TrackerSettings(data_dir=tmp_path / "data")


def make_profile(name="All", level_kills=None, waves_past_8=0, obtained=None) -> Profile:
    return Profile(
        name=name,
        level_kills=dict(level_kills or {}),
        waves_past_8=waves_past_8,
        obtained_uniques=dict(obtained or {}),
    )
