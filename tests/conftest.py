import pathlib
import sys

import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from perkdb.common.config import PipelineConfig


@pytest.fixture(scope="session")
def repo_root():
    """Return the root directory of the project."""
    return pathlib.Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def fixture_sheets(repo_root):
    """Checked-in sheet tree with one populated and one empty group."""
    return repo_root / "tests" / "fixtures" / "sheets"


@pytest.fixture
def default_config():
    return PipelineConfig.default()


@pytest.fixture
def write_sheet(tmp_path):
    """Write a sheet file under tmp_path and return its path."""
    def _write(relative_path, content, encoding="utf-8"):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding, newline="")
        return path
    return _write
