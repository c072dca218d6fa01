import os
from pathlib import Path

import pytest


@pytest.fixture
def write_timing(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def alternating_timing(write_timing) -> Path:
    # Intervals 100, 200, 100, 200
    return write_timing("alternating.txt", "# onsets in ms\n0\n100\n300\n400\n600\n")


@pytest.fixture(autouse=True)
def clean_cli_environ():
    yield
    for key in [k for k in os.environ if k.startswith("PRC_")]:
        del os.environ[key]


@pytest.fixture
def dense_timing(write_timing) -> Path:
    # Intervals 10, 10, 40: the first two fall under the strain-time floor
    return write_timing("dense.txt", "0\n10\n20\n60\n")
