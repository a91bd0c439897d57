import os

import pytest

from ecp.constants import ENV_PREFIX
from ecp.properties import CassandraProperties


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep CASSANDRA_ variables and .env files of the host out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith(ENV_PREFIX):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def properties():
    """Create CassandraProperties with defaults applied."""
    return CassandraProperties()


@pytest.fixture
def env_file(tmp_path):
    """Write a .env file into the working directory and return its path."""
    def _write(**values):
        path = tmp_path / ".env"
        path.write_text(
            "".join(f"{ENV_PREFIX}{name.upper()}={value}\n" for name, value in values.items())
        )
        return path
    return _write
