"""Shared fixtures: source CSVs written into a temporary data directory."""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from pmnet.models import DataSettings, NetworkConstants
from pmnet.network import ProjectNetwork

ACTIVITY_FILE = "activity-properties.csv"
ADJACENCY_FILE = "adjacency-matrix.csv"

VALID_ACTIVITIES = (
    "nodeId,startDate,endDate\n"
    "1,2020-01-01,2020-01-10\n"
    "2,2020-01-20,2020-01-25\n"
)
VALID_MATRIX = "0,1\n0,0\n"


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def write_sources(data_dir: Path):
    """Write either source file; pass None to leave it absent."""

    def _write(activities=VALID_ACTIVITIES, matrix=VALID_MATRIX):
        if activities is not None:
            (data_dir / ACTIVITY_FILE).write_text(activities, encoding="utf-8")
        if matrix is not None:
            (data_dir / ADJACENCY_FILE).write_text(matrix, encoding="utf-8")

    return _write


@pytest.fixture
def constants(data_dir: Path) -> NetworkConstants:
    return NetworkConstants(data=DataSettings(directory=str(data_dir)))


@pytest.fixture
def network(constants: NetworkConstants) -> ProjectNetwork:
    return ProjectNetwork(constants)


@pytest.fixture
def client(constants: NetworkConstants) -> TestClient:
    return TestClient(create_app(constants))
