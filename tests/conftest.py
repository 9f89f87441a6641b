from unittest.mock import MagicMock

import pytest

from govind.core.interfaces import IStateStore
from govind.storage.duckdb_store import DuckDBStateStore


@pytest.fixture
def store():
    # mock_calls records every StateStore call in issue order
    return MagicMock(spec=IStateStore)


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "govind.duckdb"


@pytest.fixture
def duck_store(db_path):
    with DuckDBStateStore(db_path) as s:
        yield s
