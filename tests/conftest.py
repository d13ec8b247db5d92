from __future__ import annotations

import os
from pathlib import Path

import pytest

from polymorph._config import MorphParameters
from polymorph.random_source import NumpyRandomSource

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def params() -> MorphParameters:
    return MorphParameters()


@pytest.fixture
def rng() -> NumpyRandomSource:
    return NumpyRandomSource(seed=1234)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "polymorph.cfg"
