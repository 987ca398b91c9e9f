"""
Shared fixtures for the release stats tests.
"""

import json

import pytest

CONFIG_VARS = [
    'RELEASE_SOURCE',
    'RELEASE_DATA_FILE',
    'RELEASE_API_ENDPOINT',
    'RELEASE_API_TIMEOUT',
    'RELEASE_CACHE_ENABLED',
    'RELEASE_STRICT',
    'API_HOST',
    'API_PORT',
    'LOG_LEVEL',
]


def build_release(
    organization,
    labor_hours=0,
    status="Production",
    created="2020-01-01",
    licenses=("MIT",)
):
    """A release entry in code.json shape."""
    return {
        "organization": organization,
        "laborHours": labor_hours,
        "status": status,
        "date": {"created": created},
        "permissions": {"licenses": [{"name": name} for name in licenses]},
    }


@pytest.fixture
def make_release():
    """Factory for code.json release dicts."""
    return build_release


@pytest.fixture
def sample_releases():
    """Three organizations; LLNL has a December tie-breaker and mixed status."""
    return [
        build_release("Argonne National Laboratory (ANL)", 1200, "Production",
                      "2019-03-14", ["BSD-3-Clause"]),
        build_release("Argonne National Laboratory (ANL)", 340.5, "Production",
                      "2018-03-02", ["MIT"]),
        build_release("Lawrence Livermore National Laboratory (LLNL)", 5000, "Production",
                      "2017-12-01", ["Apache-2.0", "MIT"]),
        build_release("Lawrence Livermore National Laboratory (LLNL)", 800, "Development",
                      "2020-12-15", ["MIT"]),
        build_release("Lawrence Livermore National Laboratory (LLNL)", 2200, "Production",
                      "2016-06-20", ["LGPL-2.1"]),
        build_release("National Renewable Energy Laboratory (NREL)", 0, "Beta",
                      "2020-07-09", []),
    ]


@pytest.fixture
def sample_file(tmp_path, sample_releases):
    """code.json file holding the sample releases."""
    path = tmp_path / "code.json"
    path.write_text(json.dumps({"agency": "DOE", "releases": sample_releases}))
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every service variable from the environment."""
    for var in CONFIG_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
